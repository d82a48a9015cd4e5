"""Pure filter functions over exercise lists.

Every filter is total: it returns a (possibly empty) list and never
raises. Emptiness is not an error here. Callers decide what to fall back
to, using ``with_fallback`` so each degradation step is explicit.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from regain.constants import (
    FRAMEWORK_MUSCLE_MAPPINGS,
    PHASE_COOLDOWN,
    PHASE_CRITERIA,
    PHASE_WARMUP,
    PHASE_WORKOUT,
    PhaseCriteria,
)
from regain.models import Exercise, Variation


def get_variation_muscles(variation: Variation) -> set[str]:
    """Lowercased primary and secondary target muscles."""
    muscles = variation.target_muscles
    return {m.lower() for m in (*muscles.primary, *muscles.secondary)}


def get_exercise_muscles(exercises: Iterable[Exercise]) -> set[str]:
    """Union of target muscles over every variation of the given exercises."""
    muscles: set[str] = set()
    for exercise in exercises:
        for variation in exercise.variations:
            muscles.update(get_variation_muscles(variation))
    return muscles


def filter_by_discipline(
    exercises: Sequence[Exercise],
    disciplines: str | Sequence[str] | None,
) -> list[Exercise]:
    if not disciplines:
        return list(exercises)
    wanted = {disciplines} if isinstance(disciplines, str) else set(disciplines)
    return [ex for ex in exercises if ex.discipline and ex.discipline in wanted]


def _matches_framework_part(exercise: Exercise, part: str) -> bool:
    mapping = FRAMEWORK_MUSCLE_MAPPINGS.get(part)
    if mapping is None:
        return False
    framework_muscles = mapping.all_muscles
    return any(
        get_variation_muscles(variation) & framework_muscles
        for variation in exercise.variations
    )


def filter_by_framework(exercises: Sequence[Exercise], framework: str | None) -> list[Exercise]:
    """Keep exercises hitting any muscle of any framework part.

    Composite names ("Push/Pull") match on any part. An unknown framework
    matches nothing.
    """
    if not framework:
        return list(exercises)
    parts = [part.strip() for part in framework.split("/")]
    return [
        ex for ex in exercises
        if any(_matches_framework_part(ex, part) for part in parts)
    ]


def variation_matches_phase(variation: Variation, phase: str, criteria: PhaseCriteria) -> bool:
    difficulty = variation.difficulty_score or 0

    if phase == PHASE_WARMUP:
        return difficulty <= criteria.max_difficulty and (
            variation.progression_type in criteria.preferred_progression_types
            or variation.bilaterality == criteria.preferred_bilaterality
        )
    if phase == PHASE_WORKOUT:
        return (criteria.min_difficulty or 0) <= difficulty <= criteria.max_difficulty
    if phase == PHASE_COOLDOWN:
        return (
            difficulty <= criteria.max_difficulty
            and variation.progression_type in criteria.preferred_progression_types
        )
    return False


def filter_by_phase(exercises: Sequence[Exercise], phase: str | None) -> list[Exercise]:
    """Keep exercises with at least one variation suited to the phase.

    An unknown or missing phase returns the input unchanged.
    """
    criteria = PHASE_CRITERIA.get(phase) if phase else None
    if criteria is None:
        return list(exercises)
    return [
        ex for ex in exercises
        if any(variation_matches_phase(v, phase, criteria) for v in ex.variations)
    ]


def filter_by_discomforts(
    exercises: Sequence[Exercise],
    discomforts: Sequence[str] | None,
) -> list[Exercise]:
    """Drop exercises whose primary muscles hit a discomfort area.

    Secondary muscles never exclude an exercise.
    """
    if not discomforts:
        return list(exercises)
    areas = {d.lower() for d in discomforts}
    return [
        ex for ex in exercises
        if not any(
            areas.intersection(m.lower() for m in variation.target_muscles.primary)
            for variation in ex.variations
        )
    ]


def filter_by_equipment(
    exercises: Sequence[Exercise],
    available_equipment: Sequence[str] | None,
) -> list[Exercise]:
    # Catalog entries carry no equipment data yet, so nothing can be excluded
    return list(exercises)


def group_exercises_by_framework(exercises: Sequence[Exercise]) -> dict[str, list[Exercise]]:
    return {
        framework: filter_by_framework(exercises, framework)
        for framework in FRAMEWORK_MUSCLE_MAPPINGS
    }


@dataclass(frozen=True)
class UseFiltered:
    """The filter kept at least one exercise; use its result."""

    exercises: tuple[Exercise, ...]


@dataclass(frozen=True)
class FallbackToBroader:
    """The filter emptied the set; continue with the broader prior set."""

    exercises: tuple[Exercise, ...]
    reason: str


FilterOutcome = UseFiltered | FallbackToBroader


def with_fallback(
    filtered: Sequence[Exercise],
    broader: Sequence[Exercise],
    *,
    reason: str,
) -> FilterOutcome:
    if filtered:
        return UseFiltered(tuple(filtered))
    return FallbackToBroader(tuple(broader), reason)
