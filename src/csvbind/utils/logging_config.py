"""Logging setup for csvbind entrypoints.

Library modules only ever do `logger = logging.getLogger(__name__)`; the
`csvbind-check` app (or an embedding script) calls `setup_logging(...)` once.

Records carry a `shortname` attribute (last dotted component of the logger
name, e.g. `row` for `csvbind.row`), usable as `%(shortname)s` in the format.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping

DATEFMT = "%Y-%m-%d %H:%M:%S"


class _ShortNameFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.shortname = record.name.rsplit(".", 1)[-1]
        return True


class _ColorFormatter(logging.Formatter):
    """Colour the level name with ANSI escapes (console only)."""

    _RESET = "\033[0m"
    _COLORS: dict[int, str] = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[1;31m",
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self._COLORS.get(record.levelno)
        if color is None:
            return super().format(record)

        levelname = record.levelname
        record.levelname = f"{color}{levelname}{self._RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


def coerce_level(level: int | str) -> int:
    """Accept `logging.INFO`, `"info"`, `"20"`... and return the int level."""
    if isinstance(level, int):
        return level

    name = str(level).strip().upper()
    if not name:
        raise ValueError("Empty logging level")
    if name.isdigit():
        return int(name)
    try:
        return logging.getLevelNamesMapping()[name]
    except KeyError as e:
        raise ValueError(f"Unknown logging level: {level!r}") from e


def setup_logging(
    level: int | str = "INFO",
    *,
    fmt: str = "%(asctime)s %(levelname)s %(name)s - %(message)s",
    log_file: str | Path | None = None,
    module_levels: Mapping[str, int | str] | None = None,
    colored: bool = False,
) -> None:
    """Install a console handler (plus an optional file handler) on the root logger.

    `module_levels` overrides single loggers, e.g. `{"csvbind.row": "DEBUG"}`
    to see skipped fields. The file handler never colours its output.
    Uses `force=True`, so calling it again replaces the previous handlers.
    """
    short_names = _ShortNameFilter()
    console = logging.StreamHandler()
    console.addFilter(short_names)
    formatter_cls = _ColorFormatter if colored else logging.Formatter
    console.setFormatter(formatter_cls(fmt=fmt, datefmt=DATEFMT))
    handlers: list[logging.Handler] = [console]

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.addFilter(short_names)
        file_handler.setFormatter(logging.Formatter(fmt=fmt, datefmt=DATEFMT))
        handlers.append(file_handler)

    logging.basicConfig(level=coerce_level(level), handlers=handlers, force=True)

    for name, lvl in (module_levels or {}).items():
        logging.getLogger(name).setLevel(coerce_level(lvl))
