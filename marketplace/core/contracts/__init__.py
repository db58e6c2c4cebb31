"""
Contract Validation Module

Модуль для валидации JSON контрактов записей маркетплейса.
"""

from .validators import (
    ContractValidator,
    OrderValidator,
    ProductValidator,
    RoleChangedValidator,
    SchemaLoader,
    UserValidator,
    validate_order,
    validate_product,
    validate_role_changed,
    validate_user,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "UserValidator",
    "ProductValidator",
    "OrderValidator",
    "RoleChangedValidator",
    # Functions
    "validate_user",
    "validate_product",
    "validate_order",
    "validate_role_changed",
]
