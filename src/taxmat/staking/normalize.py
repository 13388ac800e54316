from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Any, Optional


TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def parse_timestamp(value: str) -> dt.datetime:
    try:
        return dt.datetime.strptime(value or "", TIMESTAMP_FORMAT)
    except ValueError:
        raise ValueError(f"Invalid timestamp: {value!r} (expected YYYY-MM-DD HH:MM:SS)") from None


def format_timestamp(value: dt.datetime) -> str:
    return value.strftime(TIMESTAMP_FORMAT)


def parse_flag(value: str) -> bool:
    s = (value or "").lower()
    if s == "true":
        return True
    if s in {"", "false"}:
        return False
    raise ValueError(f"Invalid boolean: {value!r} (expected true or false)")


def none_if_blank(v: Any) -> Any:
    if v is None:
        return None
    if isinstance(v, str) and v.strip() == "":
        return None
    return v


def format_decimal(value: Optional[Decimal]) -> str:
    if value is None:
        return ""
    return format(value, "f")
