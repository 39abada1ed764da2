"""Bind CSV rows onto typed record objects through a column -> field mapping.

Typical usage:

    from csvbind import Options, open_binder

    with open_binder("people.csv", Options(null_marker="NULL")) as binder:
        for row in binder:
            person = Person()
            row.bind(person, {"id": "ID", "name": "Name", "joined": "JoinedAt"})
"""

from __future__ import annotations

from .binder import Binder, RowVisitor, open_binder
from .convert import DATETIME_LAYOUT, parse_datetime, parse_int64
from .errors import (
    EndOfInput,
    FieldCountError,
    FieldIntrospectionError,
    HeaderError,
    NoCustomHeaderError,
    NoHeaderError,
    OptionsError,
    ValueParseError,
)
from .fields import (
    BindTarget,
    Conversion,
    FieldKind,
    ReflectiveAccessor,
    accessor_for,
    conversion_for,
    kind_of_annotation,
)
from .header import resolve_header
from .options import Options, coerce_timezone, options_from_config, resolve_options
from .row import Row
from .tokenizer import CsvTokenizer, IterTokenizer, Tokenizer

__version__ = "0.1.0"

__all__ = [
    "DATETIME_LAYOUT",
    "BindTarget",
    "Binder",
    "Conversion",
    "CsvTokenizer",
    "EndOfInput",
    "FieldCountError",
    "FieldIntrospectionError",
    "FieldKind",
    "HeaderError",
    "IterTokenizer",
    "NoCustomHeaderError",
    "NoHeaderError",
    "Options",
    "OptionsError",
    "ReflectiveAccessor",
    "Row",
    "RowVisitor",
    "Tokenizer",
    "ValueParseError",
    "__version__",
    "accessor_for",
    "coerce_timezone",
    "conversion_for",
    "kind_of_annotation",
    "open_binder",
    "options_from_config",
    "parse_datetime",
    "parse_int64",
    "resolve_header",
    "resolve_options",
]
