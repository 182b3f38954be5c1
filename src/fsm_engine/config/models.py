"""Dataclass definitions for runner configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Optional, Sequence


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    filepath: Optional[Path] = None
    max_bytes: int = 5 * 1024 * 1024
    backup_count: int = 5
    console: bool = True

    def resolved_path(self) -> Optional[Path]:
        if self.filepath is None:
            return None
        path = self.filepath if isinstance(self.filepath, Path) else Path(self.filepath)
        return path.expanduser().resolve()


@dataclass(frozen=True)
class RunnerConfig:
    """Which machine the command-line runner drives, and how."""

    machine: str = "light-switch"
    table_path: Optional[Path] = None
    events: Sequence[str] = ()
    dwell_ms: int = 1000
    cycles: int = 1
    stop_on_reject: bool = False


@dataclass(frozen=True)
class Config:
    """Root configuration object."""

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    runner: RunnerConfig = field(default_factory=RunnerConfig)
