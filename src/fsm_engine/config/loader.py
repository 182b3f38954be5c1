"""Configuration loader utilities."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import yaml

from .models import Config, LoggingConfig, RunnerConfig


def _normalize_path(path: Path | str) -> Path:
    return path if isinstance(path, Path) else Path(path)


def _load_raw_config(config_path: Path) -> Dict[str, Any]:
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found at {config_path}")

    suffix = config_path.suffix.lower()
    with config_path.open("r", encoding="utf-8") as stream:
        if suffix in {".yaml", ".yml"}:
            return yaml.safe_load(stream) or {}
        if suffix == ".json":
            return json.load(stream)
        raise ValueError(f"Unsupported config format: {suffix}")


def _section(raw: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = raw.get(name) or {}
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{name}' must be a mapping.")
    return dict(value)


def load_config(config_path: Path | str) -> Config:
    """Load configuration file and construct Config dataclass."""

    config_path = _normalize_path(config_path)
    raw = _load_raw_config(config_path)
    if not isinstance(raw, dict):
        raise ValueError("Config root must be a mapping.")

    logging_raw = _section(raw, "logging")
    log_path = logging_raw.get("filepath")
    if log_path:
        # Relative paths follow the config file, not the working directory.
        logging_raw["filepath"] = (config_path.parent / log_path).resolve()
    logging = LoggingConfig(**logging_raw)

    runner_raw = _section(raw, "runner")
    table_path = runner_raw.get("table_path")
    if table_path:
        runner_raw["table_path"] = (config_path.parent / table_path).resolve()
    events = runner_raw.get("events")
    if events is not None:
        if isinstance(events, str) or not isinstance(events, (list, tuple)):
            raise ValueError("runner.events must be a list of event names.")
        runner_raw["events"] = tuple(str(event) for event in events)
    runner = RunnerConfig(**runner_raw)

    return Config(logging=logging, runner=runner)
