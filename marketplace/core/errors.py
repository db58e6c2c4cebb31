"""
Ошибки движка маркетплейса

Все отказы — локальные ошибки валидации, возвращаемые синхронно.
Ни одна ошибка не фатальна для движка: после отказа состояние не меняется,
движок готов к следующему вызову.
"""

from enum import Enum


# =============================================================================
# ENUMS
# =============================================================================


class ErrorKind(str, Enum):
    """Таксономия ошибок (kind передаётся вызывающему без изменений)."""

    ALREADY_REGISTERED = "AlreadyRegistered"
    NOT_REGISTERED = "NotRegistered"
    WRONG_ROLE = "WrongRole"
    INVALID_ROLE_CHANGE = "InvalidRoleChange"
    INVALID_QUANTITY = "InvalidQuantity"
    INSUFFICIENT_STOCK = "InsufficientStock"
    PRODUCT_NOT_FOUND = "ProductNotFound"
    NO_PRODUCTS = "NoProducts"
    ORDER_NOT_FOUND = "OrderNotFound"
    INVALID_STATE = "InvalidState"


# =============================================================================
# EXCEPTION
# =============================================================================


class MarketplaceError(Exception):
    """
    Отказ операции движка.

    Attributes:
        kind: категория ошибки из ErrorKind
        details: человекочитаемое пояснение для логов/диагностики
    """

    def __init__(self, kind: ErrorKind, details: str = ""):
        self.kind = kind
        self.details = details
        super().__init__(f"{kind.value}: {details}" if details else kind.value)
