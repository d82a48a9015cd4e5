"""Tests for model serialization and weekly config merging."""

from datetime import date, datetime, timezone

import pytest

from builders import exercise, item, variation
from regain.models import (
    DaySession,
    PlanItem,
    SessionPhases,
    SessionPlan,
    UserProfile,
    WeeklyConfig,
    WeeklySystem,
)

ROW = exercise("row", variation("row-v1", 5, primary=("back",), secondary=("biceps",)))
ROW_ITEM = item(ROW, ROW.variations[0])


def _phases():
    return SessionPhases(workout=(ROW_ITEM,))


class TestPlanItem:
    def test_wire_keys(self):
        data = ROW_ITEM.to_dict()
        assert data["exerciseId"] == "row"
        assert data["variationId"] == "row-v1"
        assert data["difficulty_score"] == 5
        assert data["target_muscles"] == {"primary": ["back"], "secondary": ["biceps"]}
        assert data["sets"] is None
        assert data["reps"] is None

    def test_from_dict_round_trip(self):
        assert PlanItem.from_dict(ROW_ITEM.to_dict()) == ROW_ITEM

    def test_from_dict_wraps_single_cue(self):
        parsed = PlanItem.from_dict({"exerciseId": "e", "variationId": "v", "technique_cues": "Brace"})
        assert parsed.technique_cues == ("Brace",)
        assert parsed.target_muscles.primary == ()

    def test_recorded_sets_and_reps_survive(self):
        data = ROW_ITEM.to_dict() | {"sets": 3, "reps": 10}
        parsed = PlanItem.from_dict(data)
        assert (parsed.sets, parsed.reps) == (3, 10)


class TestSessions:
    def test_phase_items_in_order(self):
        warm = item(ROW, ROW.variations[0])
        phases = SessionPhases(warmup=(warm,), workout=(ROW_ITEM,))
        assert list(phases.items()) == [warm, ROW_ITEM]
        assert phases.exercise_ids() == {"row"}

    def test_session_plan_keys(self):
        plan = SessionPlan("Pilates", "Pull", _phases(), datetime(2026, 3, 2, 9, tzinfo=timezone.utc))
        data = plan.to_dict()
        assert set(data) == {"discipline", "workout", "phases", "generatedAt"}
        assert set(data["phases"]) == {"warmup", "workout", "cooldown"}
        assert SessionPlan.from_dict(data) == plan

    def test_day_session_round_trip(self):
        day = DaySession(day=2, date=date(2026, 3, 3), discipline="Pilates", workout="Pull", phases=_phases())
        data = day.to_dict()
        assert data["date"] == "2026-03-03"
        assert DaySession.from_dict(data) == day

    def test_weekly_system_round_trip(self):
        system = WeeklySystem(
            id="weekly-system-abc",
            start_date=date(2026, 3, 2),
            days_per_week=1,
            framework="Pull",
            sessions=(
                DaySession(day=1, date=date(2026, 3, 2), discipline="Pilates", workout="Pull", phases=_phases()),
            ),
            created_at=datetime(2026, 3, 1, 18, tzinfo=timezone.utc),
        )
        data = system.to_dict()
        assert data["type"] == "weekly"
        assert data["startDate"] == "2026-03-02"
        assert data["daysPerWeek"] == 1
        assert WeeklySystem.from_dict(data) == system


class TestUserProfile:
    def test_camel_case(self):
        profile = UserProfile.from_dict({
            "currentMilestones": {"row": {"row-v1": 2}},
            "preferredDisciplines": ["Pilates", "Weights"],
            "discomforts": ["knees"],
        })
        assert profile.current_milestones == {"row": {"row-v1": 2}}
        assert profile.preferred_disciplines == ("Pilates", "Weights")
        assert profile.discomforts == ("knees",)

    def test_snake_case(self):
        profile = UserProfile.from_dict({"current_milestones": {"row": {"row-v1": 1}}})
        assert profile.current_milestones == {"row": {"row-v1": 1}}

    def test_single_discipline_string(self):
        assert UserProfile.from_dict({"preferredDisciplines": "Pilates"}).preferred_disciplines == ("Pilates",)

    def test_empty(self):
        assert UserProfile.from_dict(None) == UserProfile()

    def test_round_trip(self):
        profile = UserProfile(current_milestones={"row": {"row-v1": 3}}, goals=("strength",))
        assert UserProfile.from_dict(profile.to_dict()) == profile

    def test_not_hashable(self):
        with pytest.raises(TypeError):
            hash(UserProfile())


class TestWeeklyConfig:
    def test_defaults(self):
        config = WeeklyConfig.merged(None, today=date(2026, 3, 2))
        assert config == WeeklyConfig(days_per_week=3, framework="Push/Pull", start_date=date(2026, 3, 2))

    def test_partial_override(self):
        config = WeeklyConfig.merged({"framework": "Full Body"}, today=date(2026, 3, 2))
        assert config.days_per_week == 3
        assert config.framework == "Full Body"

    def test_camel_case_keys(self):
        config = WeeklyConfig.merged({"daysPerWeek": 5, "startDate": "2026-04-01T08:00:00"})
        assert config.days_per_week == 5
        assert config.start_date == date(2026, 4, 1)

    def test_instance_passes_through(self):
        config = WeeklyConfig(days_per_week=2, framework="Core", start_date=date(2026, 3, 2))
        assert WeeklyConfig.merged(config) is config

    @pytest.mark.parametrize("days", [0, 8, -1])
    def test_rejects_days_out_of_range(self, days):
        with pytest.raises(ValueError):
            WeeklyConfig(days_per_week=days, framework="Push/Pull", start_date=date(2026, 3, 2))

    def test_rejects_empty_framework(self):
        with pytest.raises(ValueError):
            WeeklyConfig(days_per_week=3, framework="", start_date=date(2026, 3, 2))
