"""Configuration package for the fsm-engine runner."""

from .loader import load_config
from .models import Config, LoggingConfig, RunnerConfig

__all__ = [
    "Config",
    "LoggingConfig",
    "RunnerConfig",
    "load_config",
]
