"""Error classes raised by the binding engine.

Errors keep the shape of the step that detected them; there is no common base
class across categories so callers can branch on what went wrong:

- configuration: `OptionsError`, `NoHeaderError`, `NoCustomHeaderError`
- end of input: `EndOfInput` (a termination signal, not a failure)
- stream: `FieldCountError` plus whatever `csv.Error`/`UnicodeError` the
  tokenizer raises
- binding: `FieldIntrospectionError`, `ValueParseError`
"""

from __future__ import annotations

import csv


class OptionsError(ValueError):
    """Raised when an `Options` value cannot be resolved (bad separator/timezone)."""


class HeaderError(ValueError):
    """Raised when column metadata cannot be established."""


class NoHeaderError(HeaderError):
    """Raised when the header record read from the stream is empty."""

    def __init__(self, message: str = "missing header metadata") -> None:
        super().__init__(message)


class NoCustomHeaderError(HeaderError):
    """Raised when an explicit header mapping is supplied but empty."""

    def __init__(self, message: str = "missing custom header metadata") -> None:
        super().__init__(message)


class EndOfInput(EOFError):
    """Raised by tokenizers and `Binder.read_row` once the stream is exhausted."""


class FieldCountError(csv.Error):
    """Raised when a record's field count differs from the first record read."""

    def __init__(self, *, line_num: int, expected: int, got: int) -> None:
        super().__init__(
            f"record on line {line_num}: wrong number of fields "
            f"(expected {expected}, got {got})"
        )
        self.line_num = line_num
        self.expected = expected
        self.got = got


class FieldIntrospectionError(AttributeError):
    """Raised when a destination field is missing or cannot be read/written."""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"field {field!r}: {reason}")
        self.field = field
        self.reason = reason


class ValueParseError(ValueError):
    """Raised when a raw column value cannot be converted for its field."""

    def __init__(self, *, field: str, value: str, expected: str) -> None:
        super().__init__(f"field {field!r}: cannot parse {value!r} as {expected}")
        self.field = field
        self.value = value
        self.expected = expected
