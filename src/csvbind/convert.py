"""Raw string converters used by `Row.bind`."""

from __future__ import annotations

import re
from datetime import datetime, tzinfo
from typing import Final

from .errors import ValueParseError

INT64_MIN: Final[int] = -(2**63)
INT64_MAX: Final[int] = 2**63 - 1

DATETIME_LAYOUT: Final[str] = "%Y-%m-%d %H:%M:%S"

_INT_RE = re.compile(r"[+-]?[0-9]+")
# strptime accepts unpadded fields; the layout does not.
_DATETIME_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}:[0-9]{2}:[0-9]{2}")


def parse_int64(raw: str, *, field: str = "") -> int:
    """Parse a base-10 signed integer that fits in 64 bits.

    Unlike `int()`, surrounding whitespace and digit-group underscores are
    rejected.
    """
    if not _INT_RE.fullmatch(raw):
        raise ValueParseError(field=field, value=raw, expected="int64")
    value = int(raw)
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueParseError(field=field, value=raw, expected="int64 (out of range)")
    return value


def localize(naive: datetime, tz: tzinfo) -> datetime:
    """Attach `tz` to a naive datetime (pytz zones need `localize`)."""
    localize_fn = getattr(tz, "localize", None)
    if localize_fn is not None:
        return localize_fn(naive)
    return naive.replace(tzinfo=tz)


def parse_datetime(raw: str, tz: tzinfo, *, field: str = "") -> datetime:
    """Parse `YYYY-MM-DD HH:MM:SS` (24-hour clock) as a wall time in `tz`."""
    if not _DATETIME_RE.fullmatch(raw):
        raise ValueParseError(field=field, value=raw, expected="YYYY-MM-DD HH:MM:SS")
    try:
        naive = datetime.strptime(raw, DATETIME_LAYOUT)
    except ValueError as e:
        raise ValueParseError(
            field=field, value=raw, expected="YYYY-MM-DD HH:MM:SS"
        ) from e
    return localize(naive, tz)
