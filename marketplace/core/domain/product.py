"""
Product — товарная позиция в каталоге

Immutable Pydantic модель. Остаток (quantity) только уменьшается
при создании заказов; пополнение и удаление не предусмотрены.
"""

from pydantic import BaseModel, Field

from .user import Principal


class Product(BaseModel):
    """Модель товара."""

    id: int = Field(..., ge=0, description="Последовательный идентификатор")
    name: str = Field(..., description="Название")
    description: str = Field(..., description="Описание")
    price: int = Field(..., ge=0, description="Цена в минимальных денежных единицах")
    quantity: int = Field(..., ge=0, description="Доступный остаток")
    category: str = Field(..., description="Категория")
    owner: Principal = Field(..., description="Продавец-владелец")

    model_config = {"frozen": True}

    def has_stock_for(self, quantity: int) -> bool:
        return quantity <= self.quantity

    def with_quantity_reserved(self, quantity: int) -> "Product":
        """
        Новый экземпляр с остатком, уменьшенным на quantity.

        Raises:
            ValueError: если остатка недостаточно
        """
        if not self.has_stock_for(quantity):
            raise ValueError(
                f"cannot reserve {quantity} units of product {self.id}: only {self.quantity} left"
            )
        return self.model_copy(update={"quantity": self.quantity - quantity})
