"""
P2P marketplace order lifecycle engine.

Participants register with a role, sellers publish products, buyers place
orders, and orders move Pending → Shipped → Received under per-step
authorization.
"""

import logging

from marketplace.core.config import EngineConfig, configure_logging
from marketplace.core.domain import Order, OrderState, Product, Role, RoleChanged, User
from marketplace.core.errors import ErrorKind, MarketplaceError
from marketplace.engine import MarketplaceEngine
from marketplace.reporting import MarketView, ReportsView

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "MarketplaceEngine",
    "EngineConfig",
    "configure_logging",
    "ErrorKind",
    "MarketplaceError",
    "Role",
    "User",
    "Product",
    "Order",
    "OrderState",
    "RoleChanged",
    "MarketView",
    "ReportsView",
]
