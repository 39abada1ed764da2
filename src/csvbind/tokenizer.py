"""Record tokenizers feeding the Binder.

The Binder only needs `next_record()`; quoting and escaping are the
tokenizer's business. `CsvTokenizer` wraps the stdlib `csv` reader in strict
mode, skips blank lines and requires every record to carry as many fields as
the first one.
"""

from __future__ import annotations

import csv
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from .errors import EndOfInput, FieldCountError
from .options import DEFAULT_SEPARATOR


@runtime_checkable
class Tokenizer(Protocol):
    """Source of raw records."""

    def next_record(self) -> list[str]:
        """Return the next record; raise `EndOfInput` once exhausted."""


class CsvTokenizer:
    """`Tokenizer` over a text stream (or any iterable of lines)."""

    def __init__(
        self,
        lines: Iterable[str],
        separator: str = "",
        *,
        check_field_count: bool = True,
    ) -> None:
        self.separator = separator or DEFAULT_SEPARATOR
        self.check_field_count = check_field_count
        self._reader = csv.reader(
            lines,
            delimiter=self.separator,
            strict=True,
        )
        self._fields_per_record: int | None = None

    @property
    def line_num(self) -> int:
        """Number of physical lines consumed so far."""
        return self._reader.line_num

    def next_record(self) -> list[str]:
        for record in self._reader:
            if not record:
                continue
            self._check_count(record)
            return record
        raise EndOfInput("end of input")

    def _check_count(self, record: list[str]) -> None:
        if not self.check_field_count:
            return
        if self._fields_per_record is None:
            self._fields_per_record = len(record)
        elif len(record) != self._fields_per_record:
            raise FieldCountError(
                line_num=self.line_num,
                expected=self._fields_per_record,
                got=len(record),
            )


class IterTokenizer:
    """`Tokenizer` over pre-split records (lists of strings).

    Records are returned as-is, blank ones included, which makes it the
    tokenizer of choice for rows produced by another parser.
    """

    def __init__(self, records: Iterable[list[str]]) -> None:
        self._records = iter(records)

    def next_record(self) -> list[str]:
        try:
            return list(next(self._records))
        except StopIteration:
            raise EndOfInput("end of input") from None
