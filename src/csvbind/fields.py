"""Destination field introspection.

The binder only talks to destinations through the `BindTarget` capability
protocol. Objects that implement it are used directly; anything else (plain
classes, dataclasses, slotted classes) is wrapped in `ReflectiveAccessor`,
which reads declared kinds from annotations and falls back to the runtime type
of unannotated attributes.
"""

from __future__ import annotations

import functools
import types
from datetime import datetime
from enum import StrEnum
from typing import (
    Any,
    ClassVar,
    Protocol,
    Union,
    get_args,
    get_origin,
    get_type_hints,
    runtime_checkable,
)

from .errors import FieldIntrospectionError


class FieldKind(StrEnum):
    """Declared shape of a destination field."""

    STRING = "string"
    INT64 = "int64"
    COMPOSITE = "composite"
    OTHER = "other"


class Conversion(StrEnum):
    """Conversion applied to a raw value, chosen from kind + current value."""

    STRING = "string"
    INT64 = "int64"
    DATETIME = "datetime"
    UNSUPPORTED = "unsupported"


@runtime_checkable
class BindTarget(Protocol):
    """Capability interface for objects that rows can be bound into."""

    def get_field_kind(self, name: str) -> FieldKind:
        """Declared kind of field `name`; raise `FieldIntrospectionError` if unknown."""

    def get_field_value(self, name: str) -> Any:
        """Current value of field `name`."""

    def set_field_value(self, name: str, value: Any) -> None:
        """Assign `value` to field `name`."""


# Builtins that are classes but not composite records.
_NON_COMPOSITE: frozenset[type] = frozenset(
    {
        bool,
        float,
        complex,
        bytes,
        bytearray,
        list,
        tuple,
        dict,
        set,
        frozenset,
        object,
        type(None),
    }
)


def kind_of_annotation(annotation: Any) -> FieldKind:
    """Map a type annotation onto a `FieldKind`.

    `Optional[X]` / `X | None` is treated as `X`; other unions, generics,
    `Any` and builtin scalars/containers are `OTHER`. `bool` is not an
    integer kind.
    """
    if get_origin(annotation) in (Union, types.UnionType):
        args = [a for a in get_args(annotation) if a is not type(None)]
        if len(args) != 1:
            return FieldKind.OTHER
        annotation = args[0]

    # `Any` is a class on 3.11+, but it declares no shape.
    if annotation is Any or get_origin(annotation) is not None:
        return FieldKind.OTHER
    if annotation is str:
        return FieldKind.STRING
    if annotation is int:
        return FieldKind.INT64
    if isinstance(annotation, type) and annotation not in _NON_COMPOSITE:
        return FieldKind.COMPOSITE
    return FieldKind.OTHER


def conversion_for(kind: FieldKind, current: Any) -> Conversion:
    """Select the conversion for a field of `kind` currently holding `current`.

    Composite fields are only converted when they already hold a `datetime`;
    every other composite value is unsupported.
    """
    if kind == FieldKind.STRING:
        return Conversion.STRING
    if kind == FieldKind.INT64:
        return Conversion.INT64
    if kind == FieldKind.COMPOSITE and isinstance(current, datetime):
        return Conversion.DATETIME
    return Conversion.UNSUPPORTED


@functools.lru_cache(maxsize=None)
def _type_hints(cls: type) -> dict[str, Any]:
    try:
        return get_type_hints(cls)
    except (NameError, TypeError) as e:
        raise FieldIntrospectionError(
            cls.__name__, f"cannot resolve annotations: {e}"
        ) from e


def _declares_slot(cls: type, name: str) -> bool:
    for klass in cls.__mro__:
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        if name in slots:
            return True
    return False


class ReflectiveAccessor:
    """`BindTarget` view of an arbitrary object, backed by getattr/setattr."""

    __slots__ = ("obj",)

    def __init__(self, obj: Any) -> None:
        self.obj = obj

    def _check_name(self, name: str) -> None:
        if not name or name.startswith("_"):
            raise FieldIntrospectionError(name, "not a public field")

    def get_field_kind(self, name: str) -> FieldKind:
        self._check_name(name)
        cls = type(self.obj)
        hints = _type_hints(cls)
        if name in hints:
            annotation = hints[name]
            if get_origin(annotation) is ClassVar or annotation is ClassVar:
                raise FieldIntrospectionError(name, "class variable, not a field")
            # A bare annotation is not a field; a declared slot is, even unset.
            if not hasattr(self.obj, name) and not _declares_slot(cls, name):
                raise FieldIntrospectionError(name, f"no such field on {cls.__name__}")
            return kind_of_annotation(annotation)
        return kind_of_annotation(type(self.get_field_value(name)))

    def get_field_value(self, name: str) -> Any:
        self._check_name(name)
        try:
            return getattr(self.obj, name)
        except AttributeError as e:
            raise FieldIntrospectionError(
                name, f"no such field on {type(self.obj).__name__}"
            ) from e

    def set_field_value(self, name: str, value: Any) -> None:
        self._check_name(name)
        try:
            setattr(self.obj, name, value)
        except AttributeError as e:
            raise FieldIntrospectionError(name, f"cannot be assigned: {e}") from e


def accessor_for(destination: Any) -> BindTarget:
    """Return the `BindTarget` used to bind into `destination`."""
    if isinstance(destination, BindTarget):
        return destination
    return ReflectiveAccessor(destination)
