"""Reader/binder configuration and its construction-time defaulting."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace
from datetime import tzinfo
from typing import Any, Final, TypeAlias

import pytz

from .errors import OptionsError

logger = logging.getLogger(__name__)

DEFAULT_SEPARATOR: Final[str] = ","
DEFAULT_TIMEZONE: Final[tzinfo] = pytz.utc

_FORBIDDEN_SEPARATORS: frozenset[str] = frozenset({'"', "\r", "\n"})

TimezoneInput: TypeAlias = str | tzinfo | None


@dataclass(frozen=True)
class Options:
    """Configuration shared by a Binder and every Row it produces.

    `separator=""` and `timezone=None` mean "unset"; `header=None` means the
    column names come from the first record of the stream.
    """

    separator: str = ""
    null_marker: str = ""
    timezone: TimezoneInput = None
    header: Mapping[int, str] | None = None

    @property
    def tz(self) -> tzinfo:
        """Timezone as a tzinfo (UTC while unset)."""
        return coerce_timezone(self.timezone)


def coerce_timezone(value: TimezoneInput) -> tzinfo:
    """Turn an IANA name or tzinfo into a tzinfo; `None` maps to UTC."""
    if value is None:
        return DEFAULT_TIMEZONE
    if isinstance(value, tzinfo):
        return value

    name = str(value).strip()
    if not name:
        return DEFAULT_TIMEZONE
    try:
        return pytz.timezone(name)
    except pytz.exceptions.UnknownTimeZoneError as e:
        raise OptionsError(f"Unknown timezone: {value!r}") from e


def _check_separator(separator: str) -> None:
    if len(separator) != 1:
        raise OptionsError(
            f"separator must be a single character, got {separator!r}"
        )
    if separator in _FORBIDDEN_SEPARATORS:
        raise OptionsError(f"invalid separator: {separator!r}")


def resolve_options(options: Options | None) -> Options:
    """Return a fully defaulted copy of `options`.

    Defaulting is asymmetric: when no Options value
    is supplied, a zero-valued `Options()` is substituted and its separator is
    left unset (the tokenizer then falls back to its own comma default). When a
    value is supplied with an unset separator, the separator becomes a comma.
    The timezone defaults to UTC in both cases.
    """
    if options is None:
        logger.debug("No options supplied; using zero-valued Options")
        return Options(timezone=DEFAULT_TIMEZONE)

    separator = options.separator or DEFAULT_SEPARATOR
    _check_separator(separator)

    return replace(
        options,
        separator=separator,
        timezone=coerce_timezone(options.timezone),
    )


def options_from_config(config: Mapping[str, Any] | None) -> Options:
    """Build `Options` from a config mapping (e.g. the YAML `options:` section).

    Header keys are coerced to `int` because YAML/JSON mappings often carry
    them as strings.
    """
    if not config:
        return Options()

    header = config.get("header")
    if header is not None:
        if not isinstance(header, Mapping):
            raise OptionsError("options.header must be a mapping of index -> name")
        try:
            header = {int(k): str(v) for k, v in header.items()}
        except (TypeError, ValueError) as e:
            raise OptionsError(f"options.header keys must be integers: {e}") from e

    return Options(
        separator=config.get("separator") or "",
        null_marker=config.get("null_marker") or "",
        timezone=config.get("timezone"),
        header=header,
    )
