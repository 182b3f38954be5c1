"""Exceptions raised by the state machine engine."""

from __future__ import annotations

from .model import EventType, StateType


class StateMachineError(Exception):
    """Base class for every error raised by the engine."""


class EventRejected(StateMachineError):
    """The current state has no transition for the given event.

    Raised before any state change, so the machine is left exactly as it was.
    """

    def __init__(self, state: StateType, event: EventType) -> None:
        super().__init__(f"event '{event}' rejected in state '{state}'")
        self.state = state
        self.event = event


class ConfigurationError(StateMachineError):
    """The state table (or an action chained through it) is malformed."""
