"""Bundled machine configurations."""

from .light_switch import new_light_switch_machine
from .order import OrderCreationContext, OrderShipmentContext, new_order_machine
from .registry import MACHINES, available_machines, create_machine
from .traffic_light import new_traffic_light_machine, run_traffic_light

__all__ = [
    "MACHINES",
    "OrderCreationContext",
    "OrderShipmentContext",
    "available_machines",
    "create_machine",
    "new_light_switch_machine",
    "new_order_machine",
    "new_traffic_light_machine",
    "run_traffic_light",
]
