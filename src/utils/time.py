from __future__ import annotations

import datetime as dt
from typing import Callable

UTC = dt.timezone.utc

Clock = Callable[[], dt.datetime]


def utcnow() -> dt.datetime:
    return dt.datetime.now(UTC)


def ensure_utc(value: dt.datetime) -> dt.datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def current_year(now: Clock = utcnow) -> int:
    return ensure_utc(now()).year
