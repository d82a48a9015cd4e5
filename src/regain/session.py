"""Session assembler: builds one warm-up / workout / cool-down session.

Selection order matters: the cool-down is chosen after the workout phase
because it is restricted to exercises sharing a muscle with the chosen
workout exercises.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from datetime import datetime, timezone

from regain.catalog import Catalog
from regain.constants import (
    PHASE_COOLDOWN,
    PHASE_EXERCISE_COUNTS,
    PHASE_WARMUP,
    PHASE_WORKOUT,
)
from regain.errors import NoExercisesAfterFiltering, NoExercisesAvailable
from regain.filters import (
    FallbackToBroader,
    FilterOutcome,
    filter_by_discipline,
    filter_by_discomforts,
    filter_by_equipment,
    filter_by_framework,
    filter_by_phase,
    get_exercise_muscles,
    get_variation_muscles,
    with_fallback,
)
from regain.models import (
    DaySession,
    Exercise,
    MilestoneMap,
    PlanItem,
    SessionPhases,
    SessionPlan,
    UserProfile,
)
from regain.progression import select_variation_for_user

logger = logging.getLogger(__name__)

PriorSession = SessionPlan | DaySession


def _resolve(outcome: FilterOutcome, **context: object) -> list[Exercise]:
    if isinstance(outcome, FallbackToBroader):
        logger.warning(
            "%s; falling back to %d broader candidates",
            outcome.reason,
            len(outcome.exercises),
            extra={f"regain_{k}": v for k, v in context.items()},
        )
    return list(outcome.exercises)


def ensure_variety(
    exercises: Sequence[Exercise],
    previous_sessions: Sequence[PriorSession],
) -> list[Exercise]:
    """Drop exercises used in the most recent prior session."""
    if not previous_sessions:
        return list(exercises)
    recent_ids = previous_sessions[-1].phases.exercise_ids()
    return [ex for ex in exercises if ex.id not in recent_ids]


def link_cooldown_to_workout(
    workout_exercises: Sequence[Exercise],
    candidates: Sequence[Exercise],
) -> list[Exercise]:
    """Candidates sharing at least one target muscle with the workout phase."""
    workout_muscles = get_exercise_muscles(workout_exercises)
    return [
        ex for ex in candidates
        if any(get_variation_muscles(v) & workout_muscles for v in ex.variations)
    ]


def select_exercises_for_phase(
    candidates: Sequence[Exercise],
    count: int,
    previous_sessions: Sequence[PriorSession],
    rng: random.Random,
) -> list[Exercise]:
    """Shuffle and take ``count`` exercises, honoring the variety rule when possible."""
    if not candidates:
        return []

    pool = ensure_variety(candidates, previous_sessions)
    if len(pool) < count:
        pool = list(candidates)

    pool = list(pool)
    rng.shuffle(pool)
    return pool[:count]


def apply_progressive_overload(
    exercises: Sequence[Exercise],
    milestones: MilestoneMap,
    profile: UserProfile | None = None,
) -> tuple[PlanItem, ...]:
    items = []
    for exercise in exercises:
        variation = select_variation_for_user(exercise, milestones, profile)
        if variation is None:
            logger.debug("Exercise %s has no variations; skipped", exercise.id)
            continue
        items.append(PlanItem.from_selection(exercise, variation))
    return tuple(items)


def generate_session(
    discipline: str | None,
    framework: str | None,
    user_data: UserProfile | None = None,
    previous_sessions: Sequence[PriorSession] = (),
    *,
    catalog: Catalog,
    rng: random.Random | None = None,
) -> SessionPlan:
    """Generate one session for a discipline and framework.

    Raises NoExercisesAvailable for an empty catalog and
    NoExercisesAfterFiltering when the athlete's constraints leave nothing.
    Every other empty intermediate result falls back to the broader set.
    """
    rng = rng or random.Random()
    user_data = user_data or UserProfile()
    all_exercises = list(catalog.exercises)

    if not all_exercises:
        raise NoExercisesAvailable()

    by_discipline = _resolve(
        with_fallback(
            filter_by_discipline(all_exercises, discipline),
            all_exercises,
            reason=f"No exercises found for discipline {discipline!r}",
        ),
        discipline=discipline,
    )

    candidates = by_discipline
    if framework:
        candidates = _resolve(
            with_fallback(
                filter_by_framework(by_discipline, framework),
                by_discipline,
                reason=f"No exercises found for framework {framework!r}",
            ),
            discipline=discipline,
            framework=framework,
        )

    if user_data.equipment:
        candidates = filter_by_equipment(candidates, user_data.equipment)
    if user_data.discomforts:
        candidates = filter_by_discomforts(candidates, user_data.discomforts)

    if not candidates:
        raise NoExercisesAfterFiltering(discipline, framework)

    phase_pools = {
        phase: _resolve(
            with_fallback(
                filter_by_phase(candidates, phase),
                candidates,
                reason=f"No {phase} candidates",
            ),
            phase=phase,
        )
        for phase in (PHASE_WARMUP, PHASE_WORKOUT, PHASE_COOLDOWN)
    }

    warmup = select_exercises_for_phase(
        phase_pools[PHASE_WARMUP], PHASE_EXERCISE_COUNTS[PHASE_WARMUP], previous_sessions, rng,
    )
    workout = select_exercises_for_phase(
        phase_pools[PHASE_WORKOUT], PHASE_EXERCISE_COUNTS[PHASE_WORKOUT], previous_sessions, rng,
    )

    cooldown_pool = phase_pools[PHASE_COOLDOWN]
    linked = link_cooldown_to_workout(workout, cooldown_pool)
    cooldown = select_exercises_for_phase(
        linked or cooldown_pool, PHASE_EXERCISE_COUNTS[PHASE_COOLDOWN], previous_sessions, rng,
    )

    milestones = user_data.current_milestones
    phases = SessionPhases(
        warmup=apply_progressive_overload(warmup, milestones, user_data),
        workout=apply_progressive_overload(workout, milestones, user_data),
        cooldown=apply_progressive_overload(cooldown, milestones, user_data),
    )

    logger.debug(
        "Generated %s/%s session: %d warmup, %d workout, %d cooldown",
        discipline,
        framework,
        len(phases.warmup),
        len(phases.workout),
        len(phases.cooldown),
    )

    return SessionPlan(
        discipline=discipline,
        workout=framework,
        phases=phases,
        generated_at=datetime.now(timezone.utc),
    )
