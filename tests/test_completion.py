"""Tests for committing completed sessions to milestones."""

from datetime import datetime, timezone

from builders import exercise, item, variation
from regain.completion import commit_completed_session, record_completed_session
from regain.models import SessionPhases, SessionPlan, UserProfile
from regain.progression import select_variation_for_user
from regain.store import InMemoryStore

SQUAT = exercise("squat", variation("squat-v1", 3), variation("squat-v2", 6))
ROLL = exercise("roll", variation("roll-v1", 1, progression_type="mobility"))


def _session(*phases_items, warmup=()):
    return SessionPlan(
        discipline="Pilates",
        workout="Legs",
        phases=SessionPhases(warmup=tuple(warmup), workout=tuple(phases_items)),
        generated_at=datetime(2026, 3, 2, tzinfo=timezone.utc),
    )


def test_counts_each_pair_once():
    squat = item(SQUAT, SQUAT.variations[0])
    session = _session(squat, item(ROLL, ROLL.variations[0]), warmup=[squat])
    assert record_completed_session(session, {}) == {
        "squat": {"squat-v1": 1},
        "roll": {"roll-v1": 1},
    }


def test_does_not_mutate_input():
    milestones = {"squat": {"squat-v1": 1}}
    record_completed_session(_session(item(SQUAT, SQUAT.variations[0])), milestones)
    assert milestones == {"squat": {"squat-v1": 1}}


def test_three_sessions_trigger_upgrade():
    session = _session(item(SQUAT, SQUAT.variations[0]))
    milestones = {}
    for _ in range(3):
        assert select_variation_for_user(SQUAT, milestones).id == "squat-v1"
        milestones = record_completed_session(session, milestones)
    assert select_variation_for_user(SQUAT, milestones).id == "squat-v2"


class TestCommit:
    def test_creates_profile_for_new_user(self):
        store = InMemoryStore()
        profile = commit_completed_session(store, "u1", _session(item(SQUAT, SQUAT.variations[0])))
        assert profile.current_milestones == {"squat": {"squat-v1": 1}}
        assert store.get_profile("u1") == profile

    def test_keeps_other_profile_fields(self):
        store = InMemoryStore()
        store.save_profile("u1", UserProfile(preferred_disciplines=("Pilates",), discomforts=("knees",)))
        commit_completed_session(store, "u1", _session(item(ROLL, ROLL.variations[0])))
        saved = store.get_profile("u1")
        assert saved.preferred_disciplines == ("Pilates",)
        assert saved.discomforts == ("knees",)
        assert saved.current_milestones == {"roll": {"roll-v1": 1}}

    def test_accumulates_and_caps(self):
        store = InMemoryStore()
        session = _session(item(SQUAT, SQUAT.variations[0]))
        for _ in range(5):
            commit_completed_session(store, "u1", session)
        assert store.get_profile("u1").current_milestones == {"squat": {"squat-v1": 3}}
