from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import pytest
import yaml


@pytest.fixture
def parse_printed_config():
    def _parse(text: str) -> dict[str, Any]:
        return json.loads(text)

    return _parse


@pytest.fixture
def check_config(tmp_path: Path):
    """Write a CSV file plus a check YAML config pointing at it."""

    def _write(csv_text: str, **overrides: Any) -> Path:
        csv_path = tmp_path / "people.csv"
        csv_path.write_text(csv_text, encoding="utf-8")

        config: dict[str, Any] = {
            "input": str(csv_path),
            "options": {"null_marker": "NULL", "timezone": "UTC"},
            "record": {
                "name": "Person",
                "fields": {"ID": "int64", "Name": "string", "JoinedAt": "datetime"},
            },
            "mapping": {"id": "ID", "name": "Name", "joined": "JoinedAt"},
            "logging": {"color": False},
        }
        for key, value in overrides.items():
            if isinstance(value, Mapping) and isinstance(config.get(key), Mapping):
                config[key] = {**config[key], **value}
            else:
                config[key] = value

        cfg_path = tmp_path / "check.yml"
        with cfg_path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(config, f)
        return cfg_path

    return _write
