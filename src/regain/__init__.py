"""REGAIN session engine.

Generates warm-up / workout / cool-down sessions and weekly training
systems from a static exercise catalog, advancing variation difficulty
through a progressive-overload milestone counter.
"""

from regain.alternatives import find_alternative_variations
from regain.catalog import Catalog, CatalogLoader, load_exercises, load_exercises_async
from regain.completion import commit_completed_session, record_completed_session
from regain.errors import (
    CatalogUnavailable,
    NoExercisesAfterFiltering,
    NoExercisesAvailable,
    NoExercisesFound,
    RegainError,
)
from regain.models import (
    DaySession,
    Exercise,
    PlanItem,
    SessionPhases,
    SessionPlan,
    UserProfile,
    Variation,
    WeeklyConfig,
    WeeklySystem,
)
from regain.session import generate_session
from regain.weekly import generate_weekly_system

__all__ = [
    "Catalog",
    "CatalogLoader",
    "CatalogUnavailable",
    "DaySession",
    "Exercise",
    "NoExercisesAfterFiltering",
    "NoExercisesAvailable",
    "NoExercisesFound",
    "PlanItem",
    "RegainError",
    "SessionPhases",
    "SessionPlan",
    "UserProfile",
    "Variation",
    "WeeklyConfig",
    "WeeklySystem",
    "commit_completed_session",
    "find_alternative_variations",
    "generate_session",
    "generate_weekly_system",
    "load_exercises",
    "load_exercises_async",
    "record_completed_session",
]
