"""Eager checks run on a state table before a machine is built."""

from __future__ import annotations

from typing import Mapping

from .errors import ConfigurationError
from .model import DEFAULT_STATE, NO_OP, StateDefinition, StateType


def validate_state_table(states: Mapping[StateType, StateDefinition], start_state: StateType) -> None:
    """Raise ConfigurationError if ``states`` cannot drive a machine from ``start_state``.

    All defects are collected so one failure reports the whole table.
    """
    problems: list[str] = []

    if start_state not in states:
        problems.append(f"start state '{start_state}' is not defined")

    for name, definition in states.items():
        if not isinstance(definition, StateDefinition):
            problems.append(f"state '{name}' is not a StateDefinition ({type(definition).__name__})")
            continue

        action = definition.action
        if action is not None:
            if name == DEFAULT_STATE:
                problems.append(f"'{DEFAULT_STATE}' pseudo-state must not carry an action")
            if not callable(getattr(action, "execute", None)):
                problems.append(f"action of state '{name}' has no execute(context) method")

        for event, target in definition.events.items():
            if event == NO_OP:
                problems.append(f"state '{name}' lists the reserved event '{NO_OP}'")
            if target not in states:
                problems.append(f"state '{name}' routes event '{event}' to undefined state '{target}'")

    if problems:
        raise ConfigurationError("invalid state table: " + "; ".join(problems))
