from __future__ import annotations

import argparse
import os
from pathlib import Path
from typing import Any, Mapping

import yaml


def add_config_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", type=str, default=None, help="Path to a YAML config file.")


def load_yaml_config(path: str | Path | None) -> dict[str, Any]:
    """Read a YAML mapping; `None` means no config file (empty mapping)."""
    if path is None:
        return {}

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config file not found: {p}")

    with p.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError("Config file must contain a YAML mapping at the top level.")
    return data


def deep_merge(
    base: Mapping[str, Any],
    updates: Mapping[str, Any],
) -> dict[str, Any]:
    """Merge `updates` into a copy of `base`; nested mappings merge, the rest replaces."""
    merged: dict[str, Any] = {
        key: deep_merge(value, {}) if isinstance(value, Mapping) else value
        for key, value in base.items()
    }

    for key, value in updates.items():
        current = merged.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value

    return merged


def build_config(
    defaults: Mapping[str, Any],
    yaml_path: str | Path | None,
    overrides: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Layer config sources: CLI overrides > YAML file > defaults."""
    config = deep_merge(defaults, load_yaml_config(yaml_path))
    if overrides:
        config = deep_merge(config, overrides)
    return config


def resolve_path(value: str | Path | None) -> Path | None:
    """Expand `~` and environment variables in a path-like config value."""
    if value is None or isinstance(value, Path):
        return value
    return Path(os.path.expandvars(os.path.expanduser(str(value))))
