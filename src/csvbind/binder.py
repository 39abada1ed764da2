"""Binder: a configured CSV stream plus its resolved column metadata."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path
from types import MappingProxyType

from .errors import EndOfInput
from .header import resolve_header
from .options import Options, resolve_options
from .row import Row
from .tokenizer import CsvTokenizer, Tokenizer

logger = logging.getLogger(__name__)

RowVisitor = Callable[[Row], bool]


class Binder:
    """Reads rows from a tokenizer and names their columns.

    Construction resolves the options and the header. Without an explicit
    header the first record is consumed as the header, so data rows start
    right after construction.

    A Binder is not safe for concurrent use: it owns the tokenizer cursor.
    """

    def __init__(self, tokenizer: Tokenizer, options: Options | None = None) -> None:
        self._options = resolve_options(options)
        self._tokenizer = tokenizer
        self._meta = MappingProxyType(resolve_header(tokenizer, self._options))
        self._rows_read = 0

    @classmethod
    def from_stream(cls, stream: Iterable[str], options: Options | None = None) -> Binder:
        """Build a Binder over a text stream using `CsvTokenizer`."""
        resolved = resolve_options(options)
        return cls(CsvTokenizer(stream, resolved.separator), options)

    @property
    def metadata(self) -> Mapping[int, str]:
        return self._meta

    @property
    def options(self) -> Options:
        return self._options

    @property
    def rows_read(self) -> int:
        return self._rows_read

    def read_row(self) -> Row:
        """Read the next record as a `Row`.

        Raises:
            EndOfInput: the stream is exhausted.
        """
        record = self._tokenizer.next_record()
        self._rows_read += 1
        return Row.from_record(record, self._meta, self._options)

    def for_each(self, visitor: RowVisitor) -> None:
        """Call `visitor` on each row in stream order.

        Stops cleanly at end of input or as soon as `visitor` returns a falsy
        value. Exceptions raised by the stream or by `visitor` propagate
        immediately and nothing more is read.
        """
        while True:
            try:
                row = self.read_row()
            except EndOfInput:
                break
            if not visitor(row):
                break

    def __iter__(self) -> Iterator[Row]:
        while True:
            try:
                row = self.read_row()
            except EndOfInput:
                return
            yield row


@contextmanager
def open_binder(
    path: str | Path,
    options: Options | None = None,
    *,
    encoding: str = "utf-8",
) -> Iterator[Binder]:
    """Open `path` and yield a Binder over it; the file is closed on exit."""
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"CSV file not found: {p}")

    with p.open("r", encoding=encoding, newline="") as f:
        logger.debug("Opened %s (encoding=%s)", p, encoding)
        yield Binder.from_stream(f, options)
