"""Ledger — журнал заказов и машина состояний заказа."""

from .ledger import OrderLedger
from .state_machine import (
    ORDER_TRANSITIONS,
    OrderStateMachine,
    OrderTransitionResult,
)

__all__ = [
    "OrderLedger",
    "OrderStateMachine",
    "OrderTransitionResult",
    "ORDER_TRANSITIONS",
]
