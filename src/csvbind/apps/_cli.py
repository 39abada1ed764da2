"""Shared CLI helpers for csvbind app entrypoints."""

from __future__ import annotations

import argparse
import json
from collections.abc import Mapping
from datetime import tzinfo
from pathlib import Path
from typing import Any


def add_print_config_arg(parser: argparse.ArgumentParser) -> None:
    """Add a `--print-config` flag to a parser."""
    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Print merged config (JSON) and exit.",
    )


def add_dry_run_arg(parser: argparse.ArgumentParser) -> None:
    """Add a `--dry-run` flag to a parser."""
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate config and log the plan without reading any data.",
    )


def collect_logging_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Collect logging override values from parsed CLI args."""
    overrides: dict[str, Any] = {}
    if getattr(args, "log_level", None):
        overrides["level"] = args.log_level
    if getattr(args, "log_file", None):
        overrides["file"] = args.log_file
    if getattr(args, "log_format", None):
        overrides["format"] = args.log_format
    if getattr(args, "log_color", None) is not None:
        overrides["color"] = args.log_color
    return overrides


def _normalize(obj: Any) -> Any:
    """Convert paths, timezones and containers to JSON-serializable values."""
    if isinstance(obj, (Path, tzinfo)):
        return str(obj)
    if isinstance(obj, Mapping):
        return {str(k): _normalize(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple, set)):
        return [_normalize(v) for v in obj]
    return obj


def print_config(config: Mapping[str, Any]) -> None:
    """Pretty-print merged config as deterministic JSON."""
    print(json.dumps(_normalize(config), indent=2, sort_keys=True))


def log_dry_run(logger, plan: Mapping[str, Any]) -> None:
    """Log the dry-run plan as formatted JSON."""
    logger.info("DRY RUN: no data was read.")
    logger.info("DRY RUN plan:\n%s", json.dumps(_normalize(plan), indent=2, sort_keys=True))
