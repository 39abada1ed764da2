from __future__ import annotations

import argparse
from typing import Any, Mapping

from csvbind.utils.logging_config import setup_logging

DEFAULT_LOGGING: dict[str, Any] = {
    "level": "INFO",
    "format": "%(asctime)s %(levelname)s %(shortname)s - %(message)s",
    "file": None,
    "color": True,
    "module_levels": None,
}


def add_logging_args(parser: argparse.ArgumentParser) -> None:
    group = parser.add_argument_group("logging")
    group.add_argument("--log-level", default=None, help="Root logging level (DEBUG, INFO, ...).")
    group.add_argument("--log-file", default=None, help="Also write logs to this file.")
    group.add_argument("--log-format", default=None, help="Console log format string.")
    group.add_argument(
        "--color",
        dest="log_color",
        action="store_true",
        help="Colour console level names.",
    )
    group.add_argument(
        "--no-color",
        dest="log_color",
        action="store_false",
        help="Plain console output.",
    )
    parser.set_defaults(log_color=None)


def _normalize_logging_config(config: Mapping[str, Any] | None) -> dict[str, Any]:
    """Fill the `logging:` section with defaults; unknown keys are ignored."""
    cfg = config or {}
    return {
        key: cfg[key] if cfg.get(key) is not None else default
        for key, default in DEFAULT_LOGGING.items()
    }


def setup_logging_from_config(config: Mapping[str, Any] | None) -> None:
    """Configure logging from the `logging:` section of an app config."""
    cfg = _normalize_logging_config(config)
    setup_logging(
        cfg["level"],
        fmt=cfg["format"],
        log_file=cfg["file"],
        module_levels=cfg["module_levels"],
        colored=cfg["color"],
    )
