"""Traffic light cycling Red, Green, Yellow.

The engine has no timers; :func:`run_traffic_light` is the caller-side loop
that advances the light and waits between phases.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from fsm_engine.state_machine import (
    DEFAULT_STATE,
    NO_OP,
    EventContext,
    EventType,
    StateDefinition,
    StateMachine,
    freeze_table,
)

logger = logging.getLogger("fsm.machines.traffic_light")

RED = "Red"
GREEN = "Green"
YELLOW = "Yellow"

POWER_ON = "PowerOn"
ADVANCE = "Advance"

CYCLE = (RED, GREEN, YELLOW)


class LightAction:
    """Announce the light that has just come on."""

    def __init__(self, message: str) -> None:
        self.message = message

    def execute(self, context: EventContext) -> EventType:
        logger.info(self.message)
        return NO_OP


TRAFFIC_LIGHT_STATES = freeze_table({
    DEFAULT_STATE: StateDefinition(events={POWER_ON: RED}),
    RED: StateDefinition(action=LightAction("Red light is on. Stop driving."), events={ADVANCE: GREEN}),
    GREEN: StateDefinition(action=LightAction("Green light is on. You can drive."), events={ADVANCE: YELLOW}),
    YELLOW: StateDefinition(action=LightAction("Yellow light is on. Prepare to stop."), events={ADVANCE: RED}),
})


def new_traffic_light_machine() -> StateMachine:
    return StateMachine(TRAFFIC_LIGHT_STATES)


def run_traffic_light(
    machine: StateMachine,
    cycles: int = 1,
    dwell_s: float = 5.0,
    sleep: Callable[[float], None] = time.sleep,
    on_phase: Optional[Callable[[str], None]] = None,
) -> list[str]:
    """Power the light on if needed and run ``cycles`` full colour cycles.

    Returns the sequence of lit phases.
    """
    phases: list[str] = []

    def _lit(state: str) -> None:
        phases.append(state)
        if on_phase is not None:
            on_phase(state)
        sleep(dwell_s)

    if machine.current_state == DEFAULT_STATE:
        machine.send_event(POWER_ON)
        _lit(machine.current_state)

    for _ in range(cycles * len(CYCLE)):
        machine.send_event(ADVANCE)
        _lit(machine.current_state)
    return phases
