"""Exercise catalog loading.

The catalog is a JSON document ``{"exercises": [...]}``. Candidate sources
are tried in order: ``http(s)://`` sources are fetched with httpx, anything
else is read from the local filesystem. The first source that loads and
validates wins. The engine itself never loads a catalog; callers load one
and pass the resulting ``Catalog`` value into the generation functions.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import httpx
from pydantic import BaseModel, Field, ValidationError, field_validator

from regain.errors import CatalogUnavailable
from regain.models import Exercise, TargetMuscles, Variation

logger = logging.getLogger(__name__)

BUNDLED_CATALOG = Path(__file__).parent / "data" / "exercises.json"

DEFAULT_CATALOG_SOURCES: tuple[str, ...] = (
    "exercises.json",
    "data/exercises.json",
    str(BUNDLED_CATALOG),
)

DEFAULT_TIMEOUT_SECONDS = 10.0


class TargetMusclesRecord(BaseModel):
    primary: list[str] = Field(default_factory=list)
    secondary: list[str] = Field(default_factory=list)


class VariationRecord(BaseModel):
    id: str
    name: str
    difficulty_score: float | None = None
    progression_type: str | None = None
    bilaterality: str | None = None
    target_muscles: TargetMusclesRecord = Field(default_factory=TargetMusclesRecord)
    technique_cues: list[str] = Field(default_factory=list)
    weight: str | float | None = None

    @field_validator("technique_cues", mode="before")
    @classmethod
    def wrap_single_cue(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value

    def to_variation(self) -> Variation:
        return Variation(
            id=self.id,
            name=self.name,
            difficulty_score=self.difficulty_score or 0,
            progression_type=self.progression_type or "",
            bilaterality=self.bilaterality or "",
            target_muscles=TargetMuscles(
                primary=tuple(self.target_muscles.primary),
                secondary=tuple(self.target_muscles.secondary),
            ),
            technique_cues=tuple(self.technique_cues),
            weight=self.weight,
        )


class ExerciseRecord(BaseModel):
    id: str
    name: str
    discipline: str = ""
    variations: list[VariationRecord] = Field(default_factory=list)

    def to_exercise(self) -> Exercise:
        return Exercise(
            id=self.id,
            name=self.name,
            discipline=self.discipline,
            variations=tuple(v.to_variation() for v in self.variations),
        )


class CatalogDocument(BaseModel):
    exercises: list[ExerciseRecord]


@dataclass(frozen=True)
class Catalog:
    """Read-only exercise catalog value."""

    exercises: tuple[Exercise, ...] = ()

    def __len__(self) -> int:
        return len(self.exercises)

    def __iter__(self) -> Iterator[Exercise]:
        return iter(self.exercises)

    def get(self, exercise_id: str) -> Exercise | None:
        for exercise in self.exercises:
            if exercise.id == exercise_id:
                return exercise
        return None

    @classmethod
    def from_exercises(cls, exercises: Sequence[Exercise]) -> Catalog:
        return cls(exercises=tuple(exercises))

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> Catalog:
        """Validate an in-memory catalog document.

        Raises pydantic.ValidationError if the document has the wrong shape.
        """
        document = CatalogDocument.model_validate(payload)
        return cls(exercises=tuple(record.to_exercise() for record in document.exercises))


def _is_remote(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _read_local(source: str) -> Any:
    with Path(source).open(encoding="utf-8") as f:
        return json.load(f)


def _fetch_remote(client: httpx.Client, source: str) -> Any:
    response = client.get(source)
    response.raise_for_status()
    return response.json()


# Failures that make a candidate source unusable; the next one is tried
_SOURCE_ERRORS = (OSError, ValueError, ValidationError, httpx.HTTPError)


def load_exercises(
    sources: Sequence[str] | None = None,
    *,
    client: httpx.Client | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> Catalog:
    """Load the catalog from the first candidate source that succeeds.

    Raises CatalogUnavailable, carrying the last underlying error, when
    every candidate fails. There are no retries beyond the source list.
    """
    candidates = tuple(sources) if sources else DEFAULT_CATALOG_SOURCES
    owns_client = client is None and any(_is_remote(s) for s in candidates)
    if owns_client:
        client = httpx.Client(timeout=timeout)

    last_error: BaseException | None = None
    try:
        for source in candidates:
            logger.debug("Trying to load exercises from %s", source)
            try:
                payload = _fetch_remote(client, source) if _is_remote(source) else _read_local(source)
                catalog = Catalog.from_dict(payload)
            except _SOURCE_ERRORS as exc:
                logger.warning("Failed to load exercises from %s: %s", source, exc)
                last_error = exc
                continue

            logger.info(
                "Loaded %d exercises from %s",
                len(catalog),
                source,
                extra={"regain_catalog_source": source, "regain_exercise_count": len(catalog)},
            )
            return catalog
    finally:
        if owns_client:
            client.close()

    raise CatalogUnavailable(candidates, last_error)


async def load_exercises_async(
    sources: Sequence[str] | None = None,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> Catalog:
    """Async variant of load_exercises; local files are read in a worker thread."""
    candidates = tuple(sources) if sources else DEFAULT_CATALOG_SOURCES
    owns_client = client is None and any(_is_remote(s) for s in candidates)
    if owns_client:
        client = httpx.AsyncClient(timeout=timeout)

    last_error: BaseException | None = None
    try:
        for source in candidates:
            logger.debug("Trying to load exercises from %s", source)
            try:
                if _is_remote(source):
                    response = await client.get(source)
                    response.raise_for_status()
                    payload = response.json()
                else:
                    payload = await asyncio.to_thread(_read_local, source)
                catalog = Catalog.from_dict(payload)
            except _SOURCE_ERRORS as exc:
                logger.warning("Failed to load exercises from %s: %s", source, exc)
                last_error = exc
                continue

            logger.info("Loaded %d exercises from %s", len(catalog), source)
            return catalog
    finally:
        if owns_client:
            await client.aclose()

    raise CatalogUnavailable(candidates, last_error)


class CatalogLoader:
    """Loads the catalog once and hands out the same read-only value."""

    def __init__(
        self,
        sources: Sequence[str] | None = None,
        *,
        client: httpx.Client | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self.sources = tuple(sources) if sources else DEFAULT_CATALOG_SOURCES
        self._client = client
        self._timeout = timeout
        self._catalog: Catalog | None = None

    def load(self) -> Catalog:
        if self._catalog is None:
            self._catalog = load_exercises(
                self.sources, client=self._client, timeout=self._timeout,
            )
        return self._catalog

    def reset(self) -> None:
        self._catalog = None
