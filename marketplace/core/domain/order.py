"""
Order — заказ покупателя на товар продавца

Immutable Pydantic модель. buyer/seller/product_id/quantity фиксируются
при создании; state меняется только вперёд через OrderStateMachine.
"""

from enum import Enum

from pydantic import BaseModel, Field

from .user import Principal


# =============================================================================
# ENUMS
# =============================================================================


class OrderState(str, Enum):
    """
    Состояние заказа.

    PENDING → SHIPPED → RECEIVED (терминальное).
    CANCELLED зарезервировано моделью данных, переходов в него нет.
    """

    PENDING = "Pending"
    SHIPPED = "Shipped"
    RECEIVED = "Received"
    CANCELLED = "Cancelled"


# =============================================================================
# ORDER MODEL
# =============================================================================


class Order(BaseModel):
    """Модель заказа."""

    id: int = Field(..., ge=0, description="Последовательный идентификатор")
    buyer: Principal = Field(..., description="Покупатель")
    seller: Principal = Field(..., description="Продавец (владелец товара)")
    product_id: int = Field(..., ge=0, description="Идентификатор товара")
    quantity: int = Field(..., gt=0, description="Количество (фиксировано)")
    state: OrderState = Field(default=OrderState.PENDING, description="Текущее состояние")

    # Флаги защиты от повторной оценки (в текущем ядре не выставляются)
    buyer_rated: bool = Field(default=False)
    seller_rated: bool = Field(default=False)

    model_config = {"frozen": True}

    @property
    def is_active(self) -> bool:
        """Заказ удерживает зарезервированный остаток."""
        return self.state != OrderState.CANCELLED

    def with_state(self, state: OrderState) -> "Order":
        return self.model_copy(update={"state": state})
