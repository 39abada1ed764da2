"""Bind every row of a CSV file into a record type and report the outcome."""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass, fields, is_dataclass
from pathlib import Path

import polars as pl

from .binder import open_binder
from .errors import FieldIntrospectionError, ValueParseError
from .options import Options
from .report import CoverageCounter
from .row import Row

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RowFailure:
    """A data row whose bind failed."""

    row_number: int
    error: str


@dataclass(frozen=True)
class CheckResult:
    """Summary of one check run."""

    path: Path
    n_rows: int
    n_bound: int
    n_failed: int
    failures: list[RowFailure]
    coverage: pl.DataFrame
    duration_s: float

    @property
    def ok(self) -> bool:
        return self.n_failed == 0


def _check_mapping(record_type: type, mapping: Mapping[str, str]) -> None:
    if not mapping:
        raise ValueError("mapping must contain at least one column -> field pair")
    if not is_dataclass(record_type):
        return
    known = {f.name for f in fields(record_type)}
    unknown = sorted(set(mapping.values()) - known)
    if unknown:
        raise ValueError(
            f"mapping targets unknown fields of {record_type.__name__}: {unknown}"
        )


def check_file(
    path: str | Path,
    record_type: type,
    mapping: Mapping[str, str],
    options: Options | None = None,
    *,
    encoding: str = "utf-8",
    max_rows: int | None = None,
    fail_fast: bool = False,
) -> CheckResult:
    """Bind each data row of `path` into a fresh `record_type()` instance.

    Bind failures are counted and logged; with `fail_fast=True` the first one
    is re-raised instead. Stream and header errors always propagate.
    """
    _check_mapping(record_type, mapping)
    if max_rows is not None and max_rows < 1:
        raise ValueError(f"max_rows must be >= 1, got {max_rows}")
    p = Path(path)
    t0 = time.perf_counter()
    failures: list[RowFailure] = []
    n_bound = 0

    with open_binder(p, options, encoding=encoding) as binder:
        logger.info("Columns: %s", [binder.metadata[i] for i in sorted(binder.metadata)])
        coverage = CoverageCounter(binder.metadata)

        def _visit(row: Row) -> bool:
            nonlocal n_bound
            coverage.add(row)
            try:
                row.bind(record_type(), mapping)
            except (FieldIntrospectionError, ValueParseError) as e:
                if fail_fast:
                    raise
                failures.append(RowFailure(row_number=binder.rows_read, error=str(e)))
                logger.warning("Row %d: %s", binder.rows_read, e)
            else:
                n_bound += 1
            return max_rows is None or binder.rows_read < max_rows

        binder.for_each(_visit)
        n_rows = binder.rows_read

    result = CheckResult(
        path=p,
        n_rows=n_rows,
        n_bound=n_bound,
        n_failed=len(failures),
        failures=failures,
        coverage=coverage.to_frame(),
        duration_s=time.perf_counter() - t0,
    )
    logger.info(
        "Checked %s: rows=%d bound=%d failed=%d (%.2fs)",
        p.name,
        result.n_rows,
        result.n_bound,
        result.n_failed,
        result.duration_s,
    )
    return result
