"""Tests for the alternative-variation finder."""

from dataclasses import replace

from hypothesis import given
from hypothesis import strategies as st

from builders import exercise, item, variation
from regain.alternatives import (
    biomechanical_difference,
    find_alternative_variations,
    muscle_overlap_ratio,
)

PUSH = exercise(
    "push",
    variation("push-v1", 5, primary=("chest",), secondary=("triceps",)),
    variation("push-v2", 7, primary=("chest",), secondary=("triceps",)),
)
CURRENT = item(PUSH, PUSH.variations[0])

DIP = exercise("dip", variation("dip-v1", 6, primary=("triceps",), secondary=("chest",)))
ARCHER = exercise(
    "archer",
    variation("archer-v1", 7, progression_type="leverage", bilaterality="unilateral",
              primary=("chest", "triceps")),
)
FLY = exercise("fly", variation("fly-v1", 5, primary=("chest",)))
SQUAT = exercise("squat", variation("squat-v1", 5, primary=("quadriceps",)))
EASY_PRESS = exercise("easy-press", variation("easy-press-v1", 2, primary=("chest", "triceps")))

CATALOG = [PUSH, DIP, ARCHER, FLY, SQUAT, EASY_PRESS]


class TestScoring:
    def test_overlap_relative_to_larger_set(self):
        assert muscle_overlap_ratio({"chest", "triceps"}, {"chest"}) == 0.5
        assert muscle_overlap_ratio({"chest"}, {"chest", "triceps", "shoulders", "core"}) == 0.25
        assert muscle_overlap_ratio(set(), set()) == 0.0

    def test_biomechanical_difference(self):
        assert biomechanical_difference(CURRENT, DIP.variations[0]) == 1
        assert biomechanical_difference(CURRENT, ARCHER.variations[0]) == 4
        assert biomechanical_difference(CURRENT, FLY.variations[0]) == 0

    def test_missing_bilaterality_counts_as_bilateral(self):
        current = replace(CURRENT, bilaterality="")
        assert biomechanical_difference(current, FLY.variations[0]) == 0


class TestFindAlternatives:
    def test_ranked_best_first(self):
        found = find_alternative_variations(CURRENT, CATALOG, "workout")
        assert [alt.variation_id for alt in found] == ["archer-v1", "dip-v1", "fly-v1"]

    def test_excludes_same_exercise(self):
        found = find_alternative_variations(CURRENT, CATALOG, "workout", limit=10)
        assert all(alt.exercise_id != "push" for alt in found)

    def test_excludes_low_overlap(self):
        found = find_alternative_variations(CURRENT, CATALOG, "workout", limit=10)
        assert "squat" not in {alt.exercise_id for alt in found}

    def test_respects_phase_bounds(self):
        workout = find_alternative_variations(CURRENT, CATALOG, "workout", limit=10)
        assert "easy-press" not in {alt.exercise_id for alt in workout}

        warmup = find_alternative_variations(CURRENT, CATALOG, "warmup", limit=10)
        assert [alt.exercise_id for alt in warmup] == ["easy-press"]

    def test_unknown_phase_has_no_bounds(self):
        found = find_alternative_variations(CURRENT, CATALOG, "stretching", limit=10)
        assert "easy-press" in {alt.exercise_id for alt in found}

    def test_limit(self):
        assert len(find_alternative_variations(CURRENT, CATALOG, "workout", limit=1)) == 1

    def test_ties_keep_catalog_order(self):
        first = exercise("first", variation("first-v1", 6, primary=("chest", "triceps")))
        second = exercise("second", variation("second-v1", 6, primary=("chest", "triceps")))
        found = find_alternative_variations(CURRENT, [second, first], "workout")
        assert [alt.exercise_id for alt in found] == ["second", "first"]

    def test_returns_plan_items(self):
        found = find_alternative_variations(CURRENT, CATALOG, "workout")
        assert found[0].exercise_name == "archer"
        assert found[0].technique_cues == ("cue for archer-v1",)
        assert found[0].sets is None

    def test_no_current_item(self):
        assert find_alternative_variations(None, CATALOG, "workout") == []

    def test_empty_catalog(self):
        assert find_alternative_variations(CURRENT, [], "workout") == []

    @given(st.lists(st.sampled_from(["quadriceps", "calves", "glutes", "hamstrings"]), min_size=1, max_size=4))
    def test_disjoint_muscles_never_suggested(self, muscles):
        other = exercise("other", variation("other-v1", 5, primary=tuple(muscles)))
        assert find_alternative_variations(CURRENT, [other], "workout") == []
