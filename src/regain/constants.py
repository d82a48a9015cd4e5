"""Static configuration for the session engine.

Discipline and framework names, framework → muscle mappings, phase
selection criteria and weekly defaults. Plain data, no logic.
"""

from __future__ import annotations

from dataclasses import dataclass

# Sessions a variation must be performed before it is eligible for upgrade
OVERLOAD_PERIOD_SESSIONS = 3

DISCIPLINE_PILATES = "Pilates"
DISCIPLINE_ANIMAL_FLOW = "Animal Flow"
DISCIPLINE_WEIGHTS = "Weights"
DISCIPLINE_CROSSFIT = "Crossfit"
DISCIPLINE_CALISTHENICS = "Calisthenics"

DISCIPLINES: tuple[str, ...] = (
    DISCIPLINE_PILATES,
    DISCIPLINE_ANIMAL_FLOW,
    DISCIPLINE_WEIGHTS,
    DISCIPLINE_CROSSFIT,
    DISCIPLINE_CALISTHENICS,
)

DEFAULT_DISCIPLINE = DISCIPLINE_PILATES

PHASE_WARMUP = "warmup"
PHASE_WORKOUT = "workout"
PHASE_COOLDOWN = "cooldown"

PHASES: tuple[str, ...] = (PHASE_WARMUP, PHASE_WORKOUT, PHASE_COOLDOWN)


@dataclass(frozen=True)
class MuscleMapping:
    primary: tuple[str, ...]
    secondary: tuple[str, ...] = ()

    @property
    def all_muscles(self) -> frozenset[str]:
        return frozenset(m.lower() for m in (*self.primary, *self.secondary))


FRAMEWORK_MUSCLE_MAPPINGS: dict[str, MuscleMapping] = {
    "Push": MuscleMapping(
        primary=("chest", "shoulders", "triceps"),
        secondary=("core", "serratus"),
    ),
    "Pull": MuscleMapping(
        primary=("back", "lats", "biceps", "rear delts"),
        secondary=("forearms", "traps", "rhomboids"),
    ),
    "Legs": MuscleMapping(
        primary=("quadriceps", "hamstrings", "glutes", "calves"),
        secondary=("adductors", "hip flexors"),
    ),
    "Upper": MuscleMapping(
        primary=("chest", "back", "lats", "shoulders", "biceps", "triceps"),
        secondary=("forearms", "traps", "rhomboids", "rear delts"),
    ),
    "Lower": MuscleMapping(
        primary=("quadriceps", "hamstrings", "glutes", "calves"),
        secondary=("adductors", "hip flexors", "lower back"),
    ),
    "Chest": MuscleMapping(
        primary=("chest",),
        secondary=("shoulders", "triceps", "serratus"),
    ),
    "Back": MuscleMapping(
        primary=("back", "lats", "rhomboids", "traps"),
        secondary=("biceps", "rear delts", "lower back"),
    ),
    "Core": MuscleMapping(
        primary=("core", "abdominals", "obliques"),
        secondary=("lower back", "hip flexors"),
    ),
    "Full Body": MuscleMapping(
        primary=(
            "chest", "back", "lats", "shoulders", "quadriceps",
            "hamstrings", "glutes", "core",
        ),
        secondary=("biceps", "triceps", "calves", "obliques", "lower back"),
    ),
}


@dataclass(frozen=True)
class PhaseCriteria:
    """Difficulty bounds and movement preferences for one session phase."""

    max_difficulty: float
    min_difficulty: float | None = None
    preferred_progression_types: tuple[str, ...] = ()
    preferred_bilaterality: str | None = None


PHASE_CRITERIA: dict[str, PhaseCriteria] = {
    PHASE_WARMUP: PhaseCriteria(
        max_difficulty=4,
        preferred_progression_types=("mobility", "stability", "activation"),
        preferred_bilaterality="bilateral",
    ),
    PHASE_WORKOUT: PhaseCriteria(
        min_difficulty=4,
        max_difficulty=10,
    ),
    PHASE_COOLDOWN: PhaseCriteria(
        max_difficulty=4,
        preferred_progression_types=("mobility", "flexibility", "stretch", "breathing"),
    ),
}

PHASE_EXERCISE_COUNTS: dict[str, int] = {
    PHASE_WARMUP: 3,
    PHASE_WORKOUT: 5,
    PHASE_COOLDOWN: 3,
}

# Weekly rotation of named framework parts, indexed by training day
FRAMEWORK_ROTATIONS: dict[str, tuple[str, ...]] = {
    "Push/Pull": ("Push", "Pull"),
    "Upper/Lower": ("Upper", "Lower"),
    "Chest/Back/Legs": ("Chest", "Back", "Legs"),
    "Push/Pull/Legs": ("Push", "Pull", "Legs"),
    "Full Body": ("Full Body",),
}


# Start date is not a constant: it defaults to the day the system is generated
DEFAULT_WEEKLY_CONFIG: dict[str, object] = {
    "days_per_week": 3,
    "framework": "Push/Pull",
}

# Prior sessions handed to each day of a weekly system for the variety rule
VARIETY_WINDOW = 2

ALTERNATIVE_LIMIT = 3
MIN_MUSCLE_OVERLAP = 0.5
DEFAULT_BILATERALITY = "bilateral"
