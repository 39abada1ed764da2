"""Record classes declared from a field-kind table (e.g. a YAML config)."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import field, make_dataclass
from datetime import datetime
from typing import Any, Final

import pytz

# Zero value for date/time fields; a field must hold a datetime to be bound.
ZERO_TIME: Final[datetime] = datetime(1, 1, 1, tzinfo=pytz.utc)

_KIND_SPECS: dict[str, tuple[Any, Any]] = {
    "string": (str, ""),
    "int64": (int, 0),
    "datetime": (datetime, ZERO_TIME),
    "other": (Any, None),
}

RECORD_KINDS: tuple[str, ...] = tuple(_KIND_SPECS)


def make_record_type(name: str, fields: Mapping[str, str]) -> type:
    """Create a dataclass with one defaulted attribute per declared field.

    `fields` maps attribute name to one of `RECORD_KINDS`.
    """
    if not fields:
        raise ValueError("record must declare at least one field")

    spec: list[tuple[str, Any, Any]] = []
    for attr, kind in fields.items():
        key = str(kind).strip().lower()
        if key not in _KIND_SPECS:
            raise ValueError(
                f"Unknown kind {kind!r} for field {attr!r}; "
                f"expected one of {', '.join(RECORD_KINDS)}"
            )
        annotation, default = _KIND_SPECS[key]
        spec.append((attr, annotation, field(default=default)))

    return make_dataclass(name, spec)
