"""Core state-machine implementation."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Mapping, MutableSequence

from .errors import ConfigurationError, EventRejected
from .model import (
    DEFAULT_STATE,
    NO_OP,
    EventContext,
    EventType,
    StateDefinition,
    StateTable,
    StateType,
    Transition,
    freeze_table,
)
from .validation import validate_state_table

logger = logging.getLogger("fsm.machine")

Listener = Callable[[Transition], None]


class StateMachine:
    """Table-driven finite state machine.

    ``send_event`` holds the instance lock for the whole call, including any
    chain of events produced by actions, so concurrent callers are totally
    ordered and always observe a settled state. The lock is not re-entrant:
    actions return their follow-up event instead of calling ``send_event``.
    """

    def __init__(
        self,
        states: Mapping[StateType, StateDefinition],
        start_state: StateType = DEFAULT_STATE,
        validate: bool = True,
    ) -> None:
        if validate:
            validate_state_table(states, start_state)

        self._states: StateTable = freeze_table(states)
        self._start_state = start_state
        self._current_state = start_state
        self._previous_state: StateType = DEFAULT_STATE
        self._listeners: MutableSequence[Listener] = []
        self._lock = threading.Lock()

    @property
    def states(self) -> StateTable:
        return self._states

    @property
    def start_state(self) -> StateType:
        return self._start_state

    @property
    def current_state(self) -> StateType:
        """Return the name of the current state."""
        return self._current_state

    @property
    def previous_state(self) -> StateType:
        """Return the name of the state left by the last transition."""
        return self._previous_state

    def snapshot(self) -> tuple[StateType, StateType]:
        """Return ``(previous, current)`` as one consistent pair."""
        with self._lock:
            return self._previous_state, self._current_state

    def allowed_events(self) -> tuple[EventType, ...]:
        """Return the events accepted from the current state."""
        with self._lock:
            definition = self._states.get(self._current_state)
        if definition is None:
            return ()
        return tuple(definition.events)

    def can_accept(self, event: EventType) -> bool:
        return event in self.allowed_events()

    def add_listener(self, listener: Listener) -> None:
        """Register a listener called with every accepted Transition.

        Listeners run on the caller's thread while the lock is held, after
        the state fields are updated and before the entered state's action.
        An exception from a listener propagates to the caller: the machine
        stays in the entered state and that action does not run.
        """
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        """Remove a previously registered listener."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def send_event(self, event: EventType, context: EventContext = None) -> None:
        """Drive the machine with ``event`` until an action settles it.

        Raises EventRejected, with no state change, when the current state does
        not accept ``event``. Raises ConfigurationError when an action produces
        an event its own state does not accept; the machine then stays in that
        state since the chain has already run.
        """
        with self._lock:
            chained = False
            while True:
                next_state = self._next_state(event, chained)
                definition = self._states.get(next_state)
                if definition is None:
                    logger.error("Destination state %s (event %s) is not defined", next_state, event)
                    raise ConfigurationError(
                        f"event '{event}' in state '{self._current_state}' leads to undefined state '{next_state}'"
                    )

                transition = Transition(self._current_state, event, next_state)
                self._previous_state = self._current_state
                self._current_state = next_state
                logger.debug("%s --%s--> %s", transition.previous_state, event, next_state)
                self._emit(transition)

                if definition.action is None:
                    return
                produced = definition.action.execute(context)
                if produced == NO_OP:
                    return
                event = produced
                chained = True

    def reset(self) -> None:
        """Return the machine to its start state."""
        with self._lock:
            self._current_state = self._start_state
            self._previous_state = DEFAULT_STATE
        logger.debug("Machine reset to %s", self._start_state)

    def _next_state(self, event: EventType, chained: bool) -> StateType:
        definition = self._states.get(self._current_state)
        next_state = definition.next_state_for(event) if definition is not None else None
        if next_state is not None:
            return next_state

        if chained:
            logger.error("Action of state %s produced unhandled event %s", self._current_state, event)
            raise ConfigurationError(
                f"action of state '{self._current_state}' produced event '{event}' which the state does not accept"
            )
        logger.info("Event %s rejected in state %s", event, self._current_state)
        raise EventRejected(self._current_state, event)

    def _emit(self, transition: Transition) -> None:
        for listener in tuple(self._listeners):
            listener(transition)

    def __repr__(self) -> str:
        return f"StateMachine(current={self._current_state!r}, previous={self._previous_state!r})"
