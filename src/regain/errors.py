"""Stable error taxonomy for the session engine.

Filter-level emptiness is handled by fallback and never raised. These
errors mark the definitive failures that callers must surface.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

EngineErrorCode = Literal[
    "catalog_unavailable",
    "no_exercises_available",
    "no_exercises_found",
    "no_exercises_after_filtering",
    "other",
]


class RegainError(Exception):
    """Base class for engine failures."""

    code: EngineErrorCode = "other"


class CatalogUnavailable(RegainError):
    code = "catalog_unavailable"

    def __init__(self, sources: Sequence[str], last_error: BaseException | None = None):
        self.sources = tuple(sources)
        self.last_error = last_error
        detail = f": {last_error}" if last_error is not None else ""
        super().__init__(
            f"Could not load exercise catalog from any of {len(self.sources)} sources{detail}"
        )


class NoExercisesAvailable(RegainError):
    code = "no_exercises_available"

    def __init__(self, message: str = "No exercises available"):
        super().__init__(message)


class NoExercisesFound(RegainError):
    code = "no_exercises_found"

    def __init__(self, disciplines: Sequence[str] = ()):
        self.disciplines = tuple(disciplines)
        if self.disciplines:
            message = f"No exercises found for disciplines: {', '.join(self.disciplines)}"
        else:
            message = "No exercises found in the catalog"
        super().__init__(message)


class NoExercisesAfterFiltering(RegainError):
    code = "no_exercises_after_filtering"

    def __init__(self, discipline: str | None = None, framework: str | None = None):
        self.discipline = discipline
        self.framework = framework
        super().__init__(
            f"No exercises available after filtering for {discipline}/{framework}"
        )


ERROR_CLASSES: tuple[type[RegainError], ...] = (
    CatalogUnavailable,
    NoExercisesAvailable,
    NoExercisesFound,
    NoExercisesAfterFiltering,
)


def classify_error(exc: BaseException) -> EngineErrorCode:
    if isinstance(exc, RegainError):
        return exc.code
    return "other"


def error_taxonomy_v1() -> dict[str, object]:
    return {
        "schema_version": "regain_engine_error_taxonomy.v1",
        "codes": [cls.code for cls in ERROR_CLASSES] + ["other"],
        "class_to_code": {cls.__name__: cls.code for cls in ERROR_CLASSES},
        "fatal_codes": [cls.code for cls in ERROR_CLASSES],
    }
