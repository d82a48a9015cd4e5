"""Core data models for the session engine.

Catalog entities are immutable. Generated plans carry denormalized
snapshots of the chosen exercise and variation, so a later catalog change
never alters a stored plan. ``to_dict``/``from_dict`` use the wire keys the
profile and training-system stores persist (``exerciseId``,
``difficulty_score``, ``generatedAt``, ...).
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone
from typing import Any

from regain.constants import DEFAULT_WEEKLY_CONFIG, PHASES

# exercise_id → variation_id → completed sessions (0..OVERLOAD_PERIOD_SESSIONS)
MilestoneMap = dict[str, dict[str, int]]


@dataclass(frozen=True)
class TargetMuscles:
    primary: tuple[str, ...] = ()
    secondary: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, list[str]]:
        return {"primary": list(self.primary), "secondary": list(self.secondary)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> TargetMuscles:
        if not data:
            return cls()
        return cls(
            primary=tuple(data.get("primary") or ()),
            secondary=tuple(data.get("secondary") or ()),
        )


@dataclass(frozen=True)
class Variation:
    """A difficulty-tiered version of an exercise."""

    id: str
    name: str
    difficulty_score: float = 0
    progression_type: str = ""
    bilaterality: str = ""
    target_muscles: TargetMuscles = field(default_factory=TargetMuscles)
    technique_cues: tuple[str, ...] = ()
    weight: str | float | None = None


@dataclass(frozen=True)
class Exercise:
    id: str
    name: str
    discipline: str
    variations: tuple[Variation, ...] = ()


@dataclass(frozen=True)
class UserProfile:
    """The slice of a stored user profile the engine reads.

    Only ``current_milestones`` is ever rewritten, and only by session
    completion. Not hashable: the milestone map is a plain dict.
    """

    __hash__ = None  # type: ignore[assignment]

    current_milestones: MilestoneMap = field(default_factory=dict)
    goals: tuple[str, ...] = ()
    equipment: tuple[str, ...] = ()
    discomforts: tuple[str, ...] = ()
    preferred_disciplines: tuple[str, ...] = ()

    def with_milestones(self, milestones: MilestoneMap) -> UserProfile:
        return replace(self, current_milestones=milestones)

    def to_dict(self) -> dict[str, Any]:
        return {
            "currentMilestones": {
                ex_id: dict(counts) for ex_id, counts in self.current_milestones.items()
            },
            "goals": list(self.goals),
            "equipment": list(self.equipment),
            "discomforts": list(self.discomforts),
            "preferredDisciplines": list(self.preferred_disciplines),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> UserProfile:
        """Build from a stored profile document (camelCase or snake_case keys)."""
        if not data:
            return cls()

        def pick(camel: str, snake: str) -> Any:
            if camel in data:
                return data[camel]
            return data.get(snake)

        milestones = pick("currentMilestones", "current_milestones") or {}
        disciplines = pick("preferredDisciplines", "preferred_disciplines") or ()
        if isinstance(disciplines, str):
            disciplines = (disciplines,)

        return cls(
            current_milestones={
                str(ex_id): {str(v_id): int(count) for v_id, count in counts.items()}
                for ex_id, counts in milestones.items()
            },
            goals=tuple(data.get("goals") or ()),
            equipment=tuple(data.get("equipment") or ()),
            discomforts=tuple(data.get("discomforts") or ()),
            preferred_disciplines=tuple(disciplines),
        )


@dataclass(frozen=True)
class PlanItem:
    """One (exercise, variation) slot in a session phase.

    ``sets`` and ``reps`` are always generated empty; the athlete fills
    them in while performing the session.
    """

    exercise_id: str
    exercise_name: str
    variation_id: str
    variation_name: str
    difficulty_score: float = 0
    weight: str | float | None = None
    bilaterality: str = ""
    progression_type: str = ""
    target_muscles: TargetMuscles = field(default_factory=TargetMuscles)
    technique_cues: tuple[str, ...] = ()
    sets: int | None = None
    reps: int | None = None

    @classmethod
    def from_selection(cls, exercise: Exercise, variation: Variation) -> PlanItem:
        return cls(
            exercise_id=exercise.id,
            exercise_name=exercise.name,
            variation_id=variation.id,
            variation_name=variation.name,
            difficulty_score=variation.difficulty_score,
            weight=variation.weight,
            bilaterality=variation.bilaterality,
            progression_type=variation.progression_type,
            target_muscles=variation.target_muscles,
            technique_cues=variation.technique_cues,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "exerciseId": self.exercise_id,
            "exerciseName": self.exercise_name,
            "variationId": self.variation_id,
            "variationName": self.variation_name,
            "difficulty_score": self.difficulty_score,
            "weight": self.weight,
            "bilaterality": self.bilaterality,
            "progression_type": self.progression_type,
            "target_muscles": self.target_muscles.to_dict(),
            "technique_cues": list(self.technique_cues),
            "sets": self.sets,
            "reps": self.reps,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PlanItem:
        cues = data.get("technique_cues") or ()
        if isinstance(cues, str):
            cues = (cues,)
        return cls(
            exercise_id=str(data["exerciseId"]),
            exercise_name=str(data.get("exerciseName") or ""),
            variation_id=str(data["variationId"]),
            variation_name=str(data.get("variationName") or ""),
            difficulty_score=data.get("difficulty_score") or 0,
            weight=data.get("weight"),
            bilaterality=data.get("bilaterality") or "",
            progression_type=data.get("progression_type") or "",
            target_muscles=TargetMuscles.from_dict(data.get("target_muscles")),
            technique_cues=tuple(cues),
            sets=data.get("sets"),
            reps=data.get("reps"),
        )


@dataclass(frozen=True)
class SessionPhases:
    warmup: tuple[PlanItem, ...] = ()
    workout: tuple[PlanItem, ...] = ()
    cooldown: tuple[PlanItem, ...] = ()

    def items(self) -> Iterator[PlanItem]:
        """All plan items in phase order."""
        for phase in PHASES:
            yield from getattr(self, phase)

    def exercise_ids(self) -> set[str]:
        return {item.exercise_id for item in self.items()}

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        return {
            phase: [item.to_dict() for item in getattr(self, phase)] for phase in PHASES
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> SessionPhases:
        data = data or {}
        return cls(
            **{
                phase: tuple(PlanItem.from_dict(item) for item in data.get(phase) or ())
                for phase in PHASES
            }
        )


@dataclass(frozen=True)
class SessionPlan:
    discipline: str | None
    workout: str | None
    phases: SessionPhases
    generated_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "discipline": self.discipline,
            "workout": self.workout,
            "phases": self.phases.to_dict(),
            "generatedAt": self.generated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SessionPlan:
        generated_at = data.get("generatedAt")
        return cls(
            discipline=data.get("discipline"),
            workout=data.get("workout"),
            phases=SessionPhases.from_dict(data.get("phases")),
            generated_at=(
                datetime.fromisoformat(generated_at)
                if generated_at
                else datetime.now(timezone.utc)
            ),
        )


@dataclass(frozen=True)
class DaySession:
    day: int  # 1-indexed within the week
    date: date
    discipline: str | None
    workout: str | None
    phases: SessionPhases
    editable: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "day": self.day,
            "date": self.date.isoformat(),
            "discipline": self.discipline,
            "workout": self.workout,
            "phases": self.phases.to_dict(),
            "editable": self.editable,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DaySession:
        return cls(
            day=int(data["day"]),
            date=_parse_date(data["date"]),
            discipline=data.get("discipline"),
            workout=data.get("workout"),
            phases=SessionPhases.from_dict(data.get("phases")),
            editable=bool(data.get("editable", True)),
        )


@dataclass(frozen=True)
class WeeklySystem:
    id: str
    start_date: date
    days_per_week: int
    framework: str
    sessions: tuple[DaySession, ...]
    created_at: datetime
    type: str = "weekly"
    editable: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "startDate": self.start_date.isoformat(),
            "daysPerWeek": self.days_per_week,
            "framework": self.framework,
            "sessions": [session.to_dict() for session in self.sessions],
            "editable": self.editable,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> WeeklySystem:
        sessions = sorted(
            (DaySession.from_dict(s) for s in data.get("sessions") or ()),
            key=lambda s: s.day,
        )
        return cls(
            id=str(data["id"]),
            type=data.get("type", "weekly"),
            start_date=_parse_date(data["startDate"]),
            days_per_week=int(data["daysPerWeek"]),
            framework=str(data["framework"]),
            sessions=tuple(sessions),
            editable=bool(data.get("editable", True)),
            created_at=datetime.fromisoformat(data["createdAt"]),
        )


@dataclass(frozen=True)
class WeeklyConfig:
    days_per_week: int
    framework: str
    start_date: date

    def __post_init__(self) -> None:
        if not 1 <= self.days_per_week <= 7:
            raise ValueError(f"days_per_week must be between 1 and 7, got {self.days_per_week}")
        if not self.framework:
            raise ValueError("framework must not be empty")

    @classmethod
    def merged(
        cls,
        overrides: WeeklyConfig | Mapping[str, Any] | None = None,
        *,
        today: date | None = None,
    ) -> WeeklyConfig:
        """Merge caller-supplied fields over the defaults.

        Accepts snake_case or camelCase keys (``daysPerWeek``, ``startDate``).
        """
        if isinstance(overrides, WeeklyConfig):
            return overrides

        overrides = overrides or {}
        days = overrides.get("days_per_week", overrides.get("daysPerWeek"))
        framework = overrides.get("framework")
        start = overrides.get("start_date", overrides.get("startDate"))

        return cls(
            days_per_week=int(days if days is not None else DEFAULT_WEEKLY_CONFIG["days_per_week"]),
            framework=str(framework or DEFAULT_WEEKLY_CONFIG["framework"]),
            start_date=_parse_date(start) if start is not None else (today or date.today()),
        )


def _parse_date(value: date | datetime | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])
