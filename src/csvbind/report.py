"""Column coverage statistics for a stream of rows."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

import polars as pl

from .row import Row

COVERAGE_SCHEMA: dict[str, pl.DataType] = {
    "column": pl.Utf8,
    "n_populated": pl.Int64,
    "n_missing": pl.Int64,
    "fill_rate": pl.Float64,
}


class CoverageCounter:
    """Incrementally count populated values per column."""

    def __init__(self, metadata: Mapping[int, str]) -> None:
        self.columns: list[str] = [metadata[i] for i in sorted(metadata)]
        self.n_rows = 0
        self._populated: dict[str, int] = dict.fromkeys(self.columns, 0)

    def add(self, row: Row) -> None:
        self.n_rows += 1
        for column in row:
            if column in self._populated:
                self._populated[column] += 1

    def to_frame(self) -> pl.DataFrame:
        """One line per metadata column, in column index order."""
        populated = [self._populated[c] for c in self.columns]
        return pl.DataFrame(
            {
                "column": self.columns,
                "n_populated": populated,
                "n_missing": [self.n_rows - n for n in populated],
                "fill_rate": [
                    n / self.n_rows if self.n_rows else 0.0 for n in populated
                ],
            },
            schema=COVERAGE_SCHEMA,
        )


def summarize_coverage(
    rows: Iterable[Row],
    metadata: Mapping[int, str],
) -> pl.DataFrame:
    """Return per-column populated/missing counts and fill rate for `rows`.

    A value counts as missing when it was empty or equal to the null marker
    (i.e. the column is absent from the row).
    """
    counter = CoverageCounter(metadata)
    for row in rows:
        counter.add(row)
    return counter.to_frame()
