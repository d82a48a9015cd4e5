import logging
import random

import pytest

from builders import catalog, exercise, variation
from regain.catalog import BUNDLED_CATALOG, load_exercises
from regain.logging import JSONFormatter, KeyValueFormatter


@pytest.fixture(autouse=True)
def _drop_installed_log_handlers():
    """Remove handlers installed by setup_logging so they don't outlive the test."""
    root = logging.getLogger()
    level = root.level
    httpx_level = logging.getLogger("httpx").level
    yield
    for handler in root.handlers[:]:
        if isinstance(handler.formatter, (JSONFormatter, KeyValueFormatter)):
            root.removeHandler(handler)
    root.setLevel(level)
    logging.getLogger("httpx").setLevel(httpx_level)


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def pilates_catalog():
    """Pilates and Weights exercises covering every phase."""
    return catalog(
        exercise("p-roll", variation("p-roll-v1", 2, progression_type="mobility", primary=("core",))),
        exercise("p-clam", variation("p-clam-v1", 1, progression_type="activation", primary=("glutes",))),
        exercise("p-plank", variation("p-plank-v1", 3, progression_type="stability", primary=("shoulders",))),
        exercise(
            "p-push",
            variation("p-push-v1", 4, primary=("chest",), secondary=("triceps",)),
            variation("p-push-v2", 6, primary=("chest",), secondary=("triceps",)),
            variation("p-push-v3", 8, primary=("chest", "triceps")),
        ),
        exercise("p-row", variation("p-row-v1", 5, primary=("back", "lats"), secondary=("biceps",))),
        exercise("p-squat", variation("p-squat-v1", 5, primary=("quadriceps", "glutes"))),
        exercise("p-dip", variation("p-dip-v1", 6, primary=("triceps",), secondary=("chest",))),
        exercise("p-pull", variation("p-pull-v1", 7, primary=("lats",), secondary=("biceps",))),
        exercise("p-bridge", variation("p-bridge-v1", 5, primary=("glutes", "hamstrings"))),
        exercise("p-chest-stretch", variation("p-chest-stretch-v1", 1, progression_type="stretch", primary=("chest",))),
        exercise("p-lat-stretch", variation("p-lat-stretch-v1", 1, progression_type="stretch", primary=("lats",))),
        exercise("p-glute-stretch", variation("p-glute-stretch-v1", 2, progression_type="flexibility", primary=("glutes",))),
        exercise(
            "w-bench",
            variation("w-bench-v1", 6, primary=("chest",), secondary=("shoulders",)),
            discipline="Weights",
        ),
        exercise(
            "w-hamstring-stretch",
            variation("w-hamstring-stretch-v1", 1, progression_type="stretch", primary=("hamstrings",)),
            discipline="Weights",
        ),
    )


@pytest.fixture(scope="session")
def bundled_catalog():
    return load_exercises([str(BUNDLED_CATALOG)])
