from __future__ import annotations

import io
import itertools
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any

import pytest
import pytz

from csvbind import (
    Binder,
    FieldIntrospectionError,
    FieldKind,
    Options,
    Row,
    ValueParseError,
    resolve_options,
)
from csvbind.records import ZERO_TIME


@dataclass
class Member:
    ID: str = ""
    Name: str = ""
    Age: int = 0
    JoinedAt: datetime = field(default=ZERO_TIME)
    Birthday: date = field(default=date(2000, 1, 1))
    Score: float = 0.0
    Active: bool = False
    Balance: Decimal = Decimal("0")


@dataclass(frozen=True)
class Frozen:
    Name: str = ""


class DictTarget:
    """Minimal BindTarget backed by a dict of (kind, value)."""

    def __init__(self, **fields: tuple[FieldKind, Any]) -> None:
        self.fields = dict(fields)

    def get_field_kind(self, name: str) -> FieldKind:
        if name not in self.fields:
            raise FieldIntrospectionError(name, "unknown")
        return self.fields[name][0]

    def get_field_value(self, name: str) -> Any:
        return self.fields[name][1]

    def set_field_value(self, name: str, value: Any) -> None:
        kind, _ = self.fields[name]
        self.fields[name] = (kind, value)


def _row(data: dict[str, str], **opts: Any) -> Row:
    return Row(data, resolve_options(Options(**opts)))


def test_bind_round_trip_from_stream() -> None:
    binder = Binder.from_stream(io.StringIO("id,name\n7,alice\n"))
    row = binder.read_row()
    assert row.as_dict() == {"id": "7", "name": "alice"}

    member = Member()
    row.bind(member, {"id": "ID", "name": "Name"})
    assert member.ID == "7"
    assert member.Name == "alice"


def test_bind_mapping_order_is_irrelevant() -> None:
    row = _row({"id": "7", "name": "alice", "age": "42", "joined": "2024-01-15 09:30:00"})
    pairs = [("id", "ID"), ("name", "Name"), ("age", "Age"), ("joined", "JoinedAt")]

    results = []
    for perm in itertools.permutations(pairs):
        member = Member()
        row.bind(member, dict(perm))
        results.append(member)

    assert all(m == results[0] for m in results)


def test_bind_int64_field() -> None:
    member = Member()
    _row({"age": "42"}).bind(member, {"age": "Age"})
    assert member.Age == 42


def test_bind_int64_parse_error_keeps_earlier_writes() -> None:
    member = Member()
    row = _row({"name": "alice", "age": "abc", "id": "7"})
    with pytest.raises(ValueParseError) as exc:
        row.bind(member, {"name": "Name", "age": "Age", "id": "ID"})
    assert exc.value.field == "Age"
    assert member.Name == "alice"
    assert member.Age == 0
    assert member.ID == ""


def test_bind_atomic_writes_nothing_on_failure() -> None:
    member = Member()
    row = _row({"name": "alice", "age": "abc"})
    with pytest.raises(ValueParseError):
        row.bind(member, {"name": "Name", "age": "Age"}, atomic=True)
    assert member == Member()

    row = _row({"name": "alice", "age": "5"})
    row.bind(member, {"name": "Name", "age": "Age"}, atomic=True)
    assert (member.Name, member.Age) == ("alice", 5)


def test_bind_datetime_in_utc() -> None:
    member = Member()
    _row({"joined": "2024-01-15 09:30:00"}).bind(member, {"joined": "JoinedAt"})
    assert member.JoinedAt == datetime(2024, 1, 15, 9, 30, tzinfo=timezone.utc)


def test_bind_datetime_uses_row_timezone() -> None:
    member = Member()
    row = _row({"joined": "2024-01-15 09:30:00"}, timezone="Asia/Tokyo")
    row.bind(member, {"joined": "JoinedAt"})
    assert member.JoinedAt == datetime(2024, 1, 15, 0, 30, tzinfo=timezone.utc)
    assert member.JoinedAt.tzinfo.zone == "Asia/Tokyo"


def test_bind_datetime_parse_error() -> None:
    member = Member()
    with pytest.raises(ValueParseError):
        _row({"joined": "15/01/2024"}).bind(member, {"joined": "JoinedAt"})
    assert member.JoinedAt == ZERO_TIME


def test_bind_composite_non_datetime_value_is_skipped() -> None:
    member = Member()
    member_none = Member()
    member_none.JoinedAt = None  # type: ignore[assignment]

    row = _row({"birthday": "2024-01-15 09:30:00", "joined": "2024-01-15 09:30:00", "bal": "1.5"})
    row.bind(member, {"birthday": "Birthday", "bal": "Balance"})
    row.bind(member_none, {"joined": "JoinedAt"})

    assert member.Birthday == date(2000, 1, 1)
    assert member.Balance == Decimal("0")
    assert member_none.JoinedAt is None


def test_bind_unsupported_kinds_are_ignored() -> None:
    member = Member()
    _row({"score": "1.5", "active": "true"}).bind(member, {"score": "Score", "active": "Active"})
    assert member.Score == 0.0
    assert member.Active is False


def test_bind_missing_source_column_leaves_field_untouched() -> None:
    member = Member(Name="keep", Age=3)
    row = Binder.from_stream(
        io.StringIO("name,age\nNULL,\n"),
        Options(null_marker="NULL"),
    ).read_row()
    assert len(row) == 0
    row.bind(member, {"name": "Name", "age": "Age", "nope": "Missing"})
    assert member.Name == "keep"
    assert member.Age == 3


def test_bind_unknown_destination_field_aborts() -> None:
    member = Member()
    row = _row({"name": "alice", "x": "1", "age": "9"})
    with pytest.raises(FieldIntrospectionError):
        row.bind(member, {"name": "Name", "x": "Missing", "age": "Age"})
    assert member.Name == "alice"
    assert member.Age == 0


def test_bind_into_frozen_dataclass_raises() -> None:
    with pytest.raises(FieldIntrospectionError, match="cannot be assigned"):
        _row({"name": "alice"}).bind(Frozen(), {"name": "Name"})


def test_bind_through_bind_target_protocol() -> None:
    target = DictTarget(
        Name=(FieldKind.STRING, ""),
        Age=(FieldKind.INT64, 0),
        At=(FieldKind.COMPOSITE, ZERO_TIME),
        Other=(FieldKind.OTHER, None),
    )
    row = _row({"n": "bob", "a": "-5", "t": "2024-03-01 12:00:00", "o": "zzz"})
    row.bind(target, {"n": "Name", "a": "Age", "t": "At", "o": "Other"})

    assert target.fields["Name"][1] == "bob"
    assert target.fields["Age"][1] == -5
    assert target.fields["At"][1] == datetime(2024, 3, 1, 12, tzinfo=pytz.utc)
    assert target.fields["Other"][1] is None


def test_row_is_read_only_mapping() -> None:
    row = Row({"a": "1"})
    assert row["a"] == "1"
    assert row.get("b") is None
    assert list(row) == ["a"]
    with pytest.raises(TypeError):
        row.data["a"] = "2"  # type: ignore[index]


def test_row_from_record_drops_unnamed_columns() -> None:
    opts = resolve_options(Options())
    row = Row.from_record(["1", "2", "3"], {0: "a", 2: "c"}, opts)
    assert row.as_dict() == {"a": "1", "c": "3"}


def test_bind_any_typed_field_is_ignored() -> None:
    @dataclass
    class Envelope:
        Payload: Any = ZERO_TIME
        Raw: object = ZERO_TIME

    env = Envelope()
    _row({"payload": "2024-01-15 09:30:00", "raw": "2024-01-15 09:30:00"}).bind(
        env, {"payload": "Payload", "raw": "Raw"}
    )
    assert env.Payload == ZERO_TIME
    assert env.Raw == ZERO_TIME


def test_bind_into_bare_annotation_raises_without_creating_attribute() -> None:
    class Declared:
        Age: int

    obj = Declared()
    with pytest.raises(FieldIntrospectionError, match="no such field"):
        _row({"age": "5"}).bind(obj, {"age": "Age"})
    assert "Age" not in vars(obj)
