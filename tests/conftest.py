import itertools
import os
import sys
from pathlib import Path

import pytest

# Run Qt headless so the suite works without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Add src to sys.path so we can import decision_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from decision_toolkit.core.models import (  # noqa: E402
    CategoryWeight,
    Comparison,
    ComparisonItem,
    Point,
    PointType,
    UserPreferences,
)
from decision_toolkit.history import HistoryConfig, HistoryStore  # noqa: E402


# Common test fixtures
@pytest.fixture
def id_factory():
    """Deterministic ids: id-1, id-2, ..."""
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def sample_comparison() -> Comparison:
    """Two laptops with a handful of points and one explicit preference."""
    laptop_a = ComparisonItem(
        id="a",
        name="Laptop A",
        points=(
            Point("a1", "Price", "Affordable", 8, PointType.PRO),
            Point("a2", "Battery", "Only 5 hours", 6, PointType.CON),
        ),
    )
    laptop_b = ComparisonItem(
        id="b",
        name="Laptop B",
        points=(
            Point("b1", "price", "Expensive", 7, PointType.CON),
            Point("b2", "Screen", "OLED", 9, PointType.PRO),
            Point("b3", "Screen", "Glossy", 3, PointType.NEUTRAL),
        ),
    )
    return Comparison(
        items=(laptop_a, laptop_b),
        preferences=UserPreferences((CategoryWeight("PRICE", 10),)),
    )


@pytest.fixture
def store(qtbot, sample_comparison, id_factory) -> HistoryStore:
    """History store over the sample comparison with deterministic ids."""
    return HistoryStore(sample_comparison, HistoryConfig(id_factory=id_factory))
