from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from src.taxmat.staking.errors import ConfigurationError
from src.utils.time import Clock, current_year, utcnow


class Quarter(str, Enum):
    Q1 = "Q1"
    Q2 = "Q2"
    Q3 = "Q3"
    Q4 = "Q4"
    ALL = "ALL"


_QUARTER_ALIASES: dict[str, Quarter] = {
    "q1": Quarter.Q1,
    "1": Quarter.Q1,
    "q2": Quarter.Q2,
    "2": Quarter.Q2,
    "q3": Quarter.Q3,
    "3": Quarter.Q3,
    "q4": Quarter.Q4,
    "4": Quarter.Q4,
    "all": Quarter.ALL,
}

# (start month, start day), (end month, end day)
_QUARTER_BOUNDS: dict[Quarter, tuple[tuple[int, int], tuple[int, int]]] = {
    Quarter.Q1: ((1, 1), (3, 31)),
    Quarter.Q2: ((4, 1), (6, 30)),
    Quarter.Q3: ((7, 1), (9, 30)),
    Quarter.Q4: ((10, 1), (12, 31)),
    Quarter.ALL: ((1, 1), (12, 31)),
}


def parse_quarter(value: str) -> Quarter:
    q = _QUARTER_ALIASES.get((value or "").lower())
    if q is None:
        raise ConfigurationError(f"Invalid quarter: {value!r} (expected Q1-Q4, 1-4 or all)")
    return q


@dataclass(frozen=True)
class DateWindow:
    start: dt.datetime
    end: dt.datetime

    def contains(self, when: dt.datetime) -> bool:
        return self.start <= when <= self.end


def resolve_date_window(quarter: Quarter, year: Optional[int] = None, *, now: Clock = utcnow) -> DateWindow:
    """
    Inclusive window for a quarter (or the whole year): midnight of the first day
    through 23:59:59 of the last day. Quarter boundaries never fall on Feb 29, so
    leap years need no special handling.

    `year` defaults to the current UTC year as reported by `now`.
    """
    y = current_year(now) if year is None else int(year)
    (sm, sd), (em, ed) = _QUARTER_BOUNDS[quarter]
    try:
        start = dt.datetime(y, sm, sd, 0, 0, 0)
        end = dt.datetime(y, em, ed, 23, 59, 59)
    except ValueError as e:
        raise ConfigurationError(f"Invalid date range for year={y} quarter={quarter.value}: {e}") from e
    return DateWindow(start=start, end=end)
