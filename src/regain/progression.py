"""Progressive overload tracking.

A variation is repeated until it has been performed for
OVERLOAD_PERIOD_SESSIONS sessions; the next selection then upgrades to the
next-harder variation of the same exercise. Upgrades happen lazily at
selection time. Recording a session only bumps a counter.
"""

from __future__ import annotations

from regain.constants import OVERLOAD_PERIOD_SESSIONS
from regain.models import Exercise, MilestoneMap, UserProfile, Variation


def get_variations_for_exercise(exercise: Exercise | None) -> list[Variation]:
    """Variations by ascending difficulty; equal scores keep catalog order."""
    if exercise is None:
        return []
    return sorted(exercise.variations, key=lambda v: v.difficulty_score or 0)


def _session_count(milestones: MilestoneMap | None, exercise_id: str, variation_id: str) -> int:
    return ((milestones or {}).get(exercise_id) or {}).get(variation_id, 0)


def get_current_variation(
    exercise_id: str,
    milestones: MilestoneMap | None,
    exercise: Exercise | None,
) -> Variation | None:
    """The variation the athlete is currently working through.

    Picks the recorded variation with the highest count still below the
    overload threshold. Ties go to the variation earliest in difficulty
    order; ids the exercise does not know rank after known ones. With no
    such variation (first time, or everything complete) the easiest
    variation is returned.
    """
    ordered = get_variations_for_exercise(exercise)
    if not ordered:
        return None

    recorded = (milestones or {}).get(exercise_id) or {}
    rank = {v.id: i for i, v in enumerate(ordered)}
    candidates = sorted(recorded.items(), key=lambda item: rank.get(item[0], len(ordered)))

    current_id: str | None = None
    highest = -1
    for variation_id, count in candidates:
        if highest < count < OVERLOAD_PERIOD_SESSIONS:
            highest = count
            current_id = variation_id

    if current_id is None or current_id not in rank:
        return ordered[0]
    return ordered[rank[current_id]]


def is_milestone_achieved(
    exercise_id: str,
    variation_id: str,
    milestones: MilestoneMap | None,
) -> bool:
    return _session_count(milestones, exercise_id, variation_id) >= OVERLOAD_PERIOD_SESSIONS


def get_next_variation(exercise: Exercise | None, current_variation_id: str) -> Variation | None:
    """Next-harder variation, or None at the top or for an unknown id."""
    ordered = get_variations_for_exercise(exercise)
    for i, variation in enumerate(ordered):
        if variation.id == current_variation_id:
            return ordered[i + 1] if i + 1 < len(ordered) else None
    return None


def update_milestone(
    exercise_id: str,
    variation_id: str,
    milestones: MilestoneMap | None,
) -> MilestoneMap:
    """Return a new map with one more session recorded, capped at the threshold."""
    updated = {ex_id: dict(counts) for ex_id, counts in (milestones or {}).items()}
    counts = updated.setdefault(exercise_id, {})
    counts[variation_id] = min(counts.get(variation_id, 0) + 1, OVERLOAD_PERIOD_SESSIONS)
    return updated


def select_variation_for_user(
    exercise: Exercise | None,
    milestones: MilestoneMap | None,
    profile: UserProfile | None = None,
) -> Variation | None:
    """Current variation, upgraded when its overload period is complete."""
    if exercise is None:
        return None

    current = get_current_variation(exercise.id, milestones, exercise)
    if current is None:
        return None

    if is_milestone_achieved(exercise.id, current.id, milestones):
        upgrade = get_next_variation(exercise, current.id)
        if upgrade is not None:
            return upgrade
    return current
