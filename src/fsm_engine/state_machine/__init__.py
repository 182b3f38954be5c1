"""State machine implementation."""

from .errors import ConfigurationError, EventRejected, StateMachineError
from .machine import StateMachine
from .model import (
    DEFAULT_STATE,
    NO_OP,
    Action,
    EventContext,
    EventType,
    FunctionAction,
    StateDefinition,
    StateTable,
    StateType,
    Transition,
    freeze_table,
)
from .table_loader import StateTableSpec, load_state_table, parse_state_table
from .validation import validate_state_table

__all__ = [
    "Action",
    "ConfigurationError",
    "DEFAULT_STATE",
    "EventContext",
    "EventRejected",
    "EventType",
    "FunctionAction",
    "NO_OP",
    "StateDefinition",
    "StateMachine",
    "StateMachineError",
    "StateTable",
    "StateTableSpec",
    "StateType",
    "Transition",
    "freeze_table",
    "load_state_table",
    "parse_state_table",
    "validate_state_table",
]
