"""Weekly system assembler.

Spreads a training framework and the athlete's preferred disciplines over
the training days of one week, generating one session per day. Milestones
are only read here; progress is committed when a session is completed.
"""

from __future__ import annotations

import logging
import random
import uuid
from collections.abc import Mapping, Sequence
from datetime import datetime, timedelta, timezone
from typing import Any

from regain.catalog import Catalog
from regain.constants import DEFAULT_DISCIPLINE, FRAMEWORK_ROTATIONS, VARIETY_WINDOW
from regain.errors import NoExercisesAfterFiltering, NoExercisesFound
from regain.filters import filter_by_discipline, filter_by_discomforts, filter_by_equipment
from regain.models import DaySession, UserProfile, WeeklyConfig, WeeklySystem
from regain.session import generate_session

logger = logging.getLogger(__name__)


def distribute_frameworks_across_week(framework: str, days_per_week: int) -> list[str]:
    """Framework part for each training day.

    Known splits rotate through their parts by day index; any other name
    is used verbatim for every day.
    """
    rotation = FRAMEWORK_ROTATIONS.get(framework, (framework,))
    return [rotation[i % len(rotation)] for i in range(days_per_week)]


def balance_disciplines_across_week(
    disciplines: Sequence[str],
    days_per_week: int,
) -> list[str | None]:
    """Assign each day the least-used discipline so far (ties: list order)."""
    if not disciplines:
        return [None] * days_per_week

    counts = dict.fromkeys(disciplines, 0)
    assignments: list[str | None] = []
    for _ in range(days_per_week):
        least_used = min(counts, key=counts.__getitem__)
        assignments.append(least_used)
        counts[least_used] += 1
    return assignments


def generate_weekly_system(
    profile: UserProfile | None = None,
    config: WeeklyConfig | Mapping[str, Any] | None = None,
    *,
    catalog: Catalog,
    rng: random.Random | None = None,
) -> WeeklySystem:
    """Generate a week of sessions for the athlete.

    Raises NoExercisesFound when the catalog holds nothing in the preferred
    disciplines and NoExercisesAfterFiltering when equipment or discomfort
    constraints remove everything. Errors from per-day generation
    propagate unchanged.
    """
    rng = rng or random.Random()
    profile = profile or UserProfile()
    week = WeeklyConfig.merged(config)

    disciplines = list(profile.preferred_disciplines) or [DEFAULT_DISCIPLINE]
    all_exercises = list(catalog.exercises)
    if not all_exercises:
        raise NoExercisesFound()

    available = filter_by_discipline(all_exercises, disciplines)
    if not available:
        raise NoExercisesFound(disciplines)

    if profile.equipment:
        available = filter_by_equipment(available, profile.equipment)
    if profile.discomforts:
        available = filter_by_discomforts(available, profile.discomforts)
    if not available:
        raise NoExercisesAfterFiltering(", ".join(disciplines), week.framework)

    framework_plan = distribute_frameworks_across_week(week.framework, week.days_per_week)
    discipline_plan = balance_disciplines_across_week(disciplines, week.days_per_week)

    logger.info(
        "Generating %d-day %s system",
        week.days_per_week,
        week.framework,
        extra={
            "regain_frameworks": framework_plan,
            "regain_disciplines": discipline_plan,
            "regain_candidates": len(available),
        },
    )

    sessions: list[DaySession] = []
    for index in range(week.days_per_week):
        session = generate_session(
            discipline_plan[index],
            framework_plan[index],
            profile,
            sessions[-VARIETY_WINDOW:],
            catalog=catalog,
            rng=rng,
        )
        sessions.append(
            DaySession(
                day=index + 1,
                date=week.start_date + timedelta(days=index),
                discipline=discipline_plan[index],
                workout=framework_plan[index],
                phases=session.phases,
            )
        )

    return WeeklySystem(
        id=f"weekly-system-{uuid.uuid4().hex}",
        start_date=week.start_date,
        days_per_week=week.days_per_week,
        framework=week.framework,
        sessions=tuple(sessions),
        created_at=datetime.now(timezone.utc),
    )
