"""Named factories for the bundled machines."""

from __future__ import annotations

from typing import Callable, Dict

from fsm_engine.state_machine import StateMachine

from .light_switch import new_light_switch_machine
from .order import new_order_machine
from .traffic_light import new_traffic_light_machine

MachineFactory = Callable[[], StateMachine]

MACHINES: Dict[str, MachineFactory] = {
    "light-switch": new_light_switch_machine,
    "order": new_order_machine,
    "traffic-light": new_traffic_light_machine,
}


def available_machines() -> list[str]:
    return sorted(MACHINES)


def create_machine(name: str) -> StateMachine:
    """Build a fresh instance of a registered machine. Raises KeyError if unknown."""
    try:
        factory = MACHINES[name]
    except KeyError:
        raise KeyError(f"Unknown machine '{name}'. Available: {', '.join(available_machines())}") from None
    return factory()
