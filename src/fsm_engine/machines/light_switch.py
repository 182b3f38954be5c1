"""Light switch: the smallest useful machine."""

from __future__ import annotations

import logging

from fsm_engine.state_machine import (
    DEFAULT_STATE,
    NO_OP,
    EventContext,
    EventType,
    StateDefinition,
    StateMachine,
    freeze_table,
)

logger = logging.getLogger("fsm.machines.light_switch")

OFF = "Off"
ON = "On"

SWITCH_OFF = "SwitchOff"
SWITCH_ON = "SwitchOn"


class OffAction:
    """Executed on entering the Off state."""

    def execute(self, context: EventContext) -> EventType:
        logger.info("The light has been switched off")
        return NO_OP


class OnAction:
    """Executed on entering the On state."""

    def execute(self, context: EventContext) -> EventType:
        logger.info("The light has been switched on")
        return NO_OP


LIGHT_SWITCH_STATES = freeze_table({
    DEFAULT_STATE: StateDefinition(events={SWITCH_OFF: OFF}),
    OFF: StateDefinition(action=OffAction(), events={SWITCH_ON: ON}, description="Light is off."),
    ON: StateDefinition(action=OnAction(), events={SWITCH_OFF: OFF}, description="Light is on."),
})


def new_light_switch_machine() -> StateMachine:
    return StateMachine(LIGHT_SWITCH_STATES)
