"""
Domain models and value objects.

Contains fundamental domain entities like Role, User, Product, Order.
"""

from marketplace.core.domain.events import RoleChanged
from marketplace.core.domain.order import Order, OrderState
from marketplace.core.domain.product import Product
from marketplace.core.domain.role import ALLOWED_ROLE_CHANGES, Role
from marketplace.core.domain.user import Principal, User

__all__ = [
    # Role
    "Role",
    "ALLOWED_ROLE_CHANGES",
    # Records
    "Principal",
    "User",
    "Product",
    "Order",
    "OrderState",
    # Events
    "RoleChanged",
]
