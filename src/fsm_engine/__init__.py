"""fsm-engine: a table-driven finite state machine."""

from __future__ import annotations

from .state_machine import (
    DEFAULT_STATE,
    NO_OP,
    Action,
    ConfigurationError,
    EventRejected,
    FunctionAction,
    StateDefinition,
    StateMachine,
    StateMachineError,
    Transition,
    load_state_table,
)

__version__ = "0.1.0"

__all__ = [
    "Action",
    "ConfigurationError",
    "DEFAULT_STATE",
    "EventRejected",
    "FunctionAction",
    "NO_OP",
    "StateDefinition",
    "StateMachine",
    "StateMachineError",
    "Transition",
    "load_state_table",
]
