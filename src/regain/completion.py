"""Session completion: commits milestone progress for a performed session."""

from __future__ import annotations

import logging

from regain.models import DaySession, MilestoneMap, SessionPlan, UserProfile
from regain.progression import update_milestone
from regain.store import ProfileStore

logger = logging.getLogger(__name__)


def record_completed_session(
    session: SessionPlan | DaySession,
    milestones: MilestoneMap | None,
) -> MilestoneMap:
    """Count one session for every distinct (exercise, variation) performed.

    An exercise listed in two phases of the same session still counts once.
    """
    updated: MilestoneMap = {ex_id: dict(c) for ex_id, c in (milestones or {}).items()}
    seen: set[tuple[str, str]] = set()
    for item in session.phases.items():
        key = (item.exercise_id, item.variation_id)
        if key in seen:
            continue
        seen.add(key)
        updated = update_milestone(item.exercise_id, item.variation_id, updated)
    return updated


def commit_completed_session(
    store: ProfileStore,
    user_id: str,
    session: SessionPlan | DaySession,
) -> UserProfile:
    profile = store.get_profile(user_id) or UserProfile()
    milestones = record_completed_session(session, profile.current_milestones)
    updated = profile.with_milestones(milestones)
    store.save_profile(user_id, updated)

    logger.info(
        "Recorded completed session for %s",
        user_id,
        extra={"regain_user_id": user_id, "regain_pairs": len(session.phases.exercise_ids())},
    )
    return updated
