#!/usr/bin/env python
"""Bind every row of a CSV file into a declared record and report failures.

Typical usage:
    python -m csvbind.apps.check --config config/check.yml
    python -m csvbind.apps.check --config config/check.yml --input data/people.csv
    csvbind-check --config config/check.yml --null-marker NULL --fail-fast

Config precedence: CLI > YAML > defaults.

Exits with status 1 when at least one row failed to bind.
"""

from __future__ import annotations

import argparse
import logging
from typing import Any

import polars as pl

from csvbind.apps._cli import (
    add_dry_run_arg,
    add_print_config_arg,
    collect_logging_overrides,
    log_dry_run,
    print_config,
)
from csvbind.check import check_file
from csvbind.cli import (
    DEFAULT_LOGGING,
    add_config_arg,
    add_logging_args,
    build_config,
    resolve_path,
    setup_logging_from_config,
)
from csvbind.options import options_from_config, resolve_options
from csvbind.records import make_record_type

DEFAULT_CONFIG: dict[str, Any] = {
    "logging": DEFAULT_LOGGING,
    "dry_run": False,
    "input": None,
    "encoding": "utf-8",
    "options": {
        "separator": None,
        "null_marker": None,
        "timezone": None,
        "header": None,
    },
    "record": {
        "name": "Record",
        "fields": {},
    },
    "mapping": {},
    "max_rows": None,
    "fail_fast": False,
}


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    """Parse CLI arguments for the check app."""
    parser = argparse.ArgumentParser(
        description="Bind CSV rows into a declared record and report failures."
    )
    add_config_arg(parser)
    add_logging_args(parser)
    add_print_config_arg(parser)
    add_dry_run_arg(parser)

    parser.add_argument(
        "--input",
        type=str,
        default=None,
        help="CSV file to check.",
    )
    parser.add_argument(
        "--encoding",
        type=str,
        default=None,
        help="Text encoding of the CSV file.",
    )
    parser.add_argument(
        "--separator",
        type=str,
        default=None,
        help="Field separator (single character).",
    )
    parser.add_argument(
        "--null-marker",
        type=str,
        default=None,
        help="Value treated as null in addition to empty fields.",
    )
    parser.add_argument(
        "--timezone",
        type=str,
        default=None,
        help="Timezone for date/time columns (IANA name).",
    )
    parser.add_argument(
        "--max-rows",
        type=int,
        default=None,
        help="Stop after this many data rows.",
    )
    parser.add_argument(
        "--fail-fast",
        dest="fail_fast",
        action="store_true",
        help="Abort on the first row that fails to bind.",
    )
    parser.add_argument(
        "--no-fail-fast",
        dest="fail_fast",
        action="store_false",
        help="Log failing rows and keep going.",
    )
    parser.set_defaults(fail_fast=None)

    return parser.parse_args(argv)


def _build_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Build config overrides from parsed CLI arguments."""
    overrides: dict[str, Any] = {}

    if args.input:
        overrides["input"] = args.input
    if args.encoding:
        overrides["encoding"] = args.encoding

    options: dict[str, Any] = {}
    if args.separator is not None:
        options["separator"] = args.separator
    if args.null_marker is not None:
        options["null_marker"] = args.null_marker
    if args.timezone is not None:
        options["timezone"] = args.timezone
    if options:
        overrides["options"] = options

    if args.max_rows is not None:
        overrides["max_rows"] = args.max_rows
    if args.fail_fast is not None:
        overrides["fail_fast"] = args.fail_fast
    if args.dry_run:
        overrides["dry_run"] = True

    logging_overrides = collect_logging_overrides(args)
    if logging_overrides:
        overrides["logging"] = logging_overrides

    return overrides


def main(argv: list[str] | None = None) -> None:
    """Run the check entrypoint."""
    args = _parse_args(argv)
    overrides = _build_overrides(args)
    config = build_config(DEFAULT_CONFIG, args.config, overrides)
    if args.print_config:
        print_config(config)
        return

    setup_logging_from_config(config.get("logging"))
    logger = logging.getLogger(__name__)

    input_path = resolve_path(config.get("input"))
    if input_path is None:
        raise ValueError("input must be set (config `input:` or --input).")

    record_cfg = config.get("record") or {}
    record_type = make_record_type(
        record_cfg.get("name") or "Record",
        record_cfg.get("fields") or {},
    )
    mapping = {str(k): str(v) for k, v in (config.get("mapping") or {}).items()}
    options = options_from_config(config.get("options"))
    # Fail on a bad separator/timezone before touching the file.
    resolved = resolve_options(options)

    logger.info("Input:     %s", input_path)
    logger.info("Separator: %r", resolved.separator)
    logger.info("Null:      %r", resolved.null_marker)
    logger.info("Timezone:  %s", resolved.timezone)
    logger.info("Header:    %s", "from file" if options.header is None else "explicit")
    logger.info("Record:    %s %s", record_type.__name__, record_cfg.get("fields"))

    if config.get("dry_run", False):
        log_dry_run(
            logger,
            {
                "action": "csvbind_check",
                "input": input_path,
                "encoding": config["encoding"],
                "options": config.get("options"),
                "record": record_cfg,
                "mapping": mapping,
                "max_rows": config.get("max_rows"),
                "fail_fast": config["fail_fast"],
            },
        )
        return

    result = check_file(
        input_path,
        record_type,
        mapping,
        options,
        encoding=config["encoding"],
        max_rows=config.get("max_rows"),
        fail_fast=config["fail_fast"],
    )

    with pl.Config(tbl_rows=-1, tbl_hide_dataframe_shape=True):
        logger.info("Column coverage:\n%s", result.coverage)

    if not result.ok:
        logger.error("%d of %d rows failed to bind", result.n_failed, result.n_rows)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
