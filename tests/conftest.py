import sys
from pathlib import Path

import pytest

# Ensure the flat modules at the repo root are importable
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture
def scores():
    return [
        [10, 8, 15, 12, 6],
        [14, 10, 9, 11, 13],
        [7, 12, 10, 8, 16],
        [11, 6, 13, 10, 9],
        [9, 15, 7, 14, 10],
    ]


@pytest.fixture
def even():
    return [[10] * 5 for _ in range(5)]
