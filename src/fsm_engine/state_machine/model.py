"""Data structures representing a table-driven state machine."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Protocol, runtime_checkable

StateType = str
EventType = str
EventContext = Any

DEFAULT_STATE: StateType = "Default"
"""Pseudo-state every machine starts in unless told otherwise."""

NO_OP: EventType = "NoOp"
"""Event an action returns to settle in the state it was run for."""


@runtime_checkable
class Action(Protocol):
    """Domain logic executed on entering a state.

    The returned event is fed back into the machine; ``NO_OP`` ends the chain.
    """

    def execute(self, context: EventContext) -> EventType: ...


class FunctionAction:
    """Adapt a plain callable ``fn(context) -> event`` to the Action protocol."""

    def __init__(self, fn: Callable[[EventContext], EventType], name: Optional[str] = None) -> None:
        self._fn = fn
        self.name = name or getattr(fn, "__name__", repr(fn))

    def execute(self, context: EventContext) -> EventType:
        return self._fn(context)

    def __repr__(self) -> str:
        return f"FunctionAction({self.name})"


@dataclass(frozen=True, slots=True)
class StateDefinition:
    """Binds a state with its optional action and the events it handles."""

    action: Optional[Action] = None
    events: Mapping[EventType, StateType] = field(default_factory=dict)
    description: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "events", MappingProxyType(dict(self.events)))

    def next_state_for(self, event: EventType) -> StateType | None:
        """Return the destination state for the provided event."""
        return self.events.get(event)

    def accepts(self, event: EventType) -> bool:
        return event in self.events


@dataclass(frozen=True, slots=True)
class Transition:
    """A single accepted step, as seen by transition listeners."""

    previous_state: StateType
    event: EventType
    next_state: StateType

    @property
    def changed(self) -> bool:
        """Return True if the transition changed the state."""
        return self.previous_state != self.next_state


StateTable = Mapping[StateType, StateDefinition]


def freeze_table(states: Mapping[StateType, StateDefinition]) -> StateTable:
    """Return a read-only copy of ``states`` safe to share between machines.

    A mapping proxy is copied too, since its backing dict may still change.
    """
    return MappingProxyType(dict(states))
