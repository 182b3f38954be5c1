"""Order pipeline: creation, card charging and shipment.

Two payloads travel through the machine. ``CreateOrder`` is sent with an
:class:`OrderCreationContext`; ``ChargeCard`` with an
:class:`OrderShipmentContext`. Each action validates its payload and chains
into either the success or the failure state within the same
``send_event`` call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from fsm_engine.state_machine import (
    DEFAULT_STATE,
    NO_OP,
    EventContext,
    EventType,
    StateDefinition,
    StateMachine,
    freeze_table,
)

logger = logging.getLogger("fsm.machines.order")

CREATING_ORDER = "CreatingOrder"
ORDER_FAILED = "OrderFailed"
ORDER_PLACED = "OrderPlaced"
CHARGING_CARD = "ChargingCard"
TRANSACTION_FAILED = "TransactionFailed"
ORDER_SHIPPED = "OrderShipped"

CREATE_ORDER = "CreateOrder"
FAIL_ORDER = "FailOrder"
PLACE_ORDER = "PlaceOrder"
CHARGE_CARD = "ChargeCard"
FAIL_TRANSACTION = "FailTransaction"
SHIP_ORDER = "ShipOrder"


@dataclass
class OrderCreationContext:
    """Payload for ``CreateOrder``; ``error`` is filled in by a failed validation."""

    items: list[str] = field(default_factory=list)
    error: Optional[str] = None

    def __str__(self) -> str:
        return f"OrderCreationContext [ items: {','.join(self.items)}, err: {self.error} ]"


@dataclass
class OrderShipmentContext:
    """Payload for ``ChargeCard``."""

    card_number: str = ""
    address: str = ""
    error: Optional[str] = None

    def __str__(self) -> str:
        return (
            f"OrderShipmentContext [ cardNumber: {self.card_number}, "
            f"address: {self.address}, err: {self.error} ]"
        )


def _expect(context: EventContext, kind: type, state: str):
    if not isinstance(context, kind):
        raise TypeError(f"{state} expects {kind.__name__}, got {type(context).__name__}")
    return context


# Order creation ---------------------------------------------------------------


class CreatingOrderAction:
    def execute(self, context: EventContext) -> EventType:
        order: OrderCreationContext = _expect(context, OrderCreationContext, CREATING_ORDER)
        logger.info("Validating order: %s", order)
        if not order.items:
            order.error = "Insufficient number of items in order"
            return FAIL_ORDER
        return PLACE_ORDER


class OrderFailedAction:
    def execute(self, context: EventContext) -> EventType:
        order: OrderCreationContext = _expect(context, OrderCreationContext, ORDER_FAILED)
        logger.warning("Order failed: %s", order.error)
        return NO_OP


class OrderPlacedAction:
    def execute(self, context: EventContext) -> EventType:
        order: OrderCreationContext = _expect(context, OrderCreationContext, ORDER_PLACED)
        logger.info("Order placed, items: %s", order.items)
        return NO_OP


# Payment and shipment ---------------------------------------------------------


class ChargingCardAction:
    def execute(self, context: EventContext) -> EventType:
        shipment: OrderShipmentContext = _expect(context, OrderShipmentContext, CHARGING_CARD)
        logger.info("Validating card: %s", shipment)
        if not shipment.card_number:
            shipment.error = "Card number is invalid"
            return FAIL_TRANSACTION
        return SHIP_ORDER


class TransactionFailedAction:
    def execute(self, context: EventContext) -> EventType:
        shipment: OrderShipmentContext = _expect(context, OrderShipmentContext, TRANSACTION_FAILED)
        logger.warning("Transaction failed: %s", shipment.error)
        return NO_OP


class OrderShippedAction:
    def execute(self, context: EventContext) -> EventType:
        shipment: OrderShipmentContext = _expect(context, OrderShipmentContext, ORDER_SHIPPED)
        logger.info("Order shipped to %s", shipment.address)
        return NO_OP


ORDER_STATES = freeze_table({
    DEFAULT_STATE: StateDefinition(events={CREATE_ORDER: CREATING_ORDER}),
    CREATING_ORDER: StateDefinition(
        action=CreatingOrderAction(),
        events={FAIL_ORDER: ORDER_FAILED, PLACE_ORDER: ORDER_PLACED},
    ),
    ORDER_FAILED: StateDefinition(action=OrderFailedAction(), events={CREATE_ORDER: CREATING_ORDER}),
    ORDER_PLACED: StateDefinition(action=OrderPlacedAction(), events={CHARGE_CARD: CHARGING_CARD}),
    CHARGING_CARD: StateDefinition(
        action=ChargingCardAction(),
        events={FAIL_TRANSACTION: TRANSACTION_FAILED, SHIP_ORDER: ORDER_SHIPPED},
    ),
    TRANSACTION_FAILED: StateDefinition(action=TransactionFailedAction(), events={CHARGE_CARD: CHARGING_CARD}),
    ORDER_SHIPPED: StateDefinition(action=OrderShippedAction(), description="Terminal: accepts no events."),
})


def new_order_machine() -> StateMachine:
    return StateMachine(ORDER_STATES)
