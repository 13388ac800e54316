from __future__ import annotations

import datetime as dt
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.taxmat.staking.periods import DateWindow

FIXTURES = ROOT / "tests" / "fixtures" / "staking"


@pytest.fixture()
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture()
def year_2021() -> DateWindow:
    return DateWindow(start=dt.datetime(2021, 1, 1, 0, 0, 0), end=dt.datetime(2021, 12, 31, 23, 59, 59))
