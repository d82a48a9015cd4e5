"""Small constructors for catalog entities used across the test suite."""

from regain.catalog import Catalog
from regain.models import Exercise, PlanItem, TargetMuscles, Variation


def variation(
    vid,
    difficulty=5,
    *,
    progression_type="load",
    bilaterality="bilateral",
    primary=("chest",),
    secondary=(),
    name=None,
):
    return Variation(
        id=vid,
        name=name or vid,
        difficulty_score=difficulty,
        progression_type=progression_type,
        bilaterality=bilaterality,
        target_muscles=TargetMuscles(primary=tuple(primary), secondary=tuple(secondary)),
        technique_cues=(f"cue for {vid}",),
    )


def exercise(eid, *variations, discipline="Pilates", name=None):
    return Exercise(id=eid, name=name or eid, discipline=discipline, variations=tuple(variations))


def catalog(*exercises):
    return Catalog.from_exercises(exercises)


def item(ex, var):
    return PlanItem.from_selection(ex, var)


def catalog_document(*exercises):
    """Raw ``{"exercises": [...]}`` payload for loader tests."""
    return {
        "exercises": [
            {
                "id": ex.id,
                "name": ex.name,
                "discipline": ex.discipline,
                "variations": [
                    {
                        "id": v.id,
                        "name": v.name,
                        "difficulty_score": v.difficulty_score,
                        "progression_type": v.progression_type,
                        "bilaterality": v.bilaterality,
                        "target_muscles": v.target_muscles.to_dict(),
                        "technique_cues": list(v.technique_cues),
                    }
                    for v in ex.variations
                ],
            }
            for ex in exercises
        ]
    }
