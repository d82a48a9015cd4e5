"""Alternative-variation finder for manual swaps.

Looks for variations of other exercises that train mostly the same
muscles but move differently. Read-only; never touches milestones.
"""

from __future__ import annotations

from collections.abc import Sequence

from regain.constants import (
    ALTERNATIVE_LIMIT,
    DEFAULT_BILATERALITY,
    MIN_MUSCLE_OVERLAP,
    PHASE_COOLDOWN,
    PHASE_CRITERIA,
    PHASE_WARMUP,
    PHASE_WORKOUT,
)
from regain.filters import get_variation_muscles
from regain.models import Exercise, PlanItem, Variation


def muscle_overlap_ratio(current: set[str], candidate: set[str]) -> float:
    """Shared muscles relative to the larger of the two muscle sets."""
    largest = max(len(current), len(candidate))
    if largest == 0:
        return 0.0
    return len(current & candidate) / largest


def _within_phase_bounds(difficulty: float, phase: str) -> bool:
    criteria = PHASE_CRITERIA.get(phase)
    if criteria is None:
        return True
    if phase in (PHASE_WARMUP, PHASE_COOLDOWN):
        return difficulty <= criteria.max_difficulty
    if phase == PHASE_WORKOUT:
        return (criteria.min_difficulty or 0) <= difficulty <= criteria.max_difficulty
    return True


def biomechanical_difference(current: PlanItem, candidate: Variation) -> int:
    bilaterality = current.bilaterality or DEFAULT_BILATERALITY
    difference = 0
    if candidate.bilaterality != bilaterality:
        difference += 2
    if candidate.progression_type != (current.progression_type or ""):
        difference += 1
    if (candidate.difficulty_score or 0) != (current.difficulty_score or 0):
        difference += 1
    return difference


def find_alternative_variations(
    current: PlanItem | None,
    exercises: Sequence[Exercise],
    phase: str,
    *,
    limit: int = ALTERNATIVE_LIMIT,
) -> list[PlanItem]:
    """Top swap candidates for ``current``, best first.

    A candidate needs at least 50% muscle overlap and a difficulty inside
    the phase bounds. Score is ``overlap * 10 + biomechanical difference``;
    equal scores keep catalog order.
    """
    if current is None or not exercises:
        return []

    current_muscles = {
        m.lower() for m in (*current.target_muscles.primary, *current.target_muscles.secondary)
    }
    if not current_muscles:
        return []

    scored: list[tuple[float, PlanItem]] = []
    for exercise in exercises:
        if exercise.id == current.exercise_id:
            continue
        for variation in exercise.variations:
            overlap = muscle_overlap_ratio(current_muscles, get_variation_muscles(variation))
            if overlap < MIN_MUSCLE_OVERLAP:
                continue
            if not _within_phase_bounds(variation.difficulty_score or 0, phase):
                continue

            score = overlap * 10 + biomechanical_difference(current, variation)
            scored.append((score, PlanItem.from_selection(exercise, variation)))

    scored.sort(key=lambda pair: pair[0], reverse=True)
    return [item for _, item in scored[:limit]]
