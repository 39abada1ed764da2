"""Sparse CSV records and their projection onto destination objects."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .convert import parse_datetime, parse_int64
from .fields import Conversion, FieldKind, accessor_for, conversion_for
from .options import Options

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Row:
    """One record: column name -> raw value, null and empty columns omitted."""

    data: Mapping[str, str]
    options: Options = field(default_factory=Options, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", MappingProxyType(dict(self.data)))

    @classmethod
    def from_record(
        cls,
        record: list[str],
        metadata: Mapping[int, str],
        options: Options,
    ) -> Row:
        """Pair positional values with their column names.

        Values that are empty or equal to `options.null_marker` are left out,
        as are values in positions the metadata does not name.
        """
        data: dict[str, str] = {}
        for i, value in enumerate(record):
            if not value or value == options.null_marker:
                continue
            name = metadata.get(i)
            if name is None:
                logger.debug("Dropping value in unnamed column %d", i)
                continue
            data[name] = value
        return cls(data=data, options=options)

    def __contains__(self, column: object) -> bool:
        return column in self.data

    def __getitem__(self, column: str) -> str:
        return self.data[column]

    def __iter__(self) -> Iterator[str]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def get(self, column: str, default: str | None = None) -> str | None:
        return self.data.get(column, default)

    def as_dict(self) -> dict[str, str]:
        return dict(self.data)

    def bind(
        self,
        destination: Any,
        mapping: Mapping[str, str],
        *,
        atomic: bool = False,
    ) -> None:
        """Write mapped column values into fields of `destination`.

        `mapping` goes from source column to destination field name. Columns
        absent from the row are skipped and leave their field untouched.
        Fields are converted by kind: strings are written as-is, int64 fields
        get a parsed base-10 integer, and composite fields currently holding a
        `datetime` get the value parsed as `YYYY-MM-DD HH:MM:SS` in the row's
        timezone. Fields of any other kind are ignored.

        The first failure aborts the bind. By default assignments made before
        it are kept; with `atomic=True` nothing is written unless every pair
        converts.

        Raises:
            FieldIntrospectionError: a destination field is missing or
                cannot be assigned.
            ValueParseError: a raw value does not convert for its field.
        """
        target = accessor_for(destination)
        pending: list[tuple[str, Any]] = []

        for src, dest in mapping.items():
            raw = self.data.get(src)
            if raw is None:
                continue

            kind = target.get_field_kind(dest)
            current = target.get_field_value(dest) if kind == FieldKind.COMPOSITE else None
            conversion = conversion_for(kind, current)

            if conversion is Conversion.STRING:
                value: Any = raw
            elif conversion is Conversion.INT64:
                value = parse_int64(raw, field=dest)
            elif conversion is Conversion.DATETIME:
                value = parse_datetime(raw, self.options.tz, field=dest)
            else:
                logger.debug("Field %r of kind %s is not bindable; skipped", dest, kind)
                continue

            if atomic:
                pending.append((dest, value))
            else:
                target.set_field_value(dest, value)

        for dest, value in pending:
            target.set_field_value(dest, value)
