from __future__ import annotations

import io

import polars as pl
import pytest

from csvbind import Binder, Options
from csvbind.report import CoverageCounter, summarize_coverage


def test_summarize_coverage_counts_populated_and_missing() -> None:
    binder = Binder.from_stream(
        io.StringIO("id,name,email\n1,a,NULL\n2,,b@x\n3,c,\n"),
        Options(null_marker="NULL"),
    )
    frame = summarize_coverage(binder, binder.metadata)

    assert frame.columns == ["column", "n_populated", "n_missing", "fill_rate"]
    assert frame["column"].to_list() == ["id", "name", "email"]
    assert frame["n_populated"].to_list() == [3, 2, 1]
    assert frame["n_missing"].to_list() == [0, 1, 2]
    assert frame["fill_rate"].to_list() == pytest.approx([1.0, 2 / 3, 1 / 3])


def test_coverage_follows_column_index_order() -> None:
    counter = CoverageCounter({2: "c", 0: "a", 1: "b"})
    assert counter.columns == ["a", "b", "c"]


def test_summarize_coverage_without_rows() -> None:
    frame = summarize_coverage([], {0: "a"})
    assert frame.schema["n_populated"] == pl.Int64
    assert frame.row(0) == ("a", 0, 0, 0.0)
