"""
MarketView — read-only снапшот закоммиченных записей

Снапшот не хранит ссылок на движок или хранилище: только кортежи
неизменяемых записей. Мутирующих методов у него нет.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from marketplace.core.contracts import validate_order, validate_product, validate_user
from marketplace.core.domain import Order, Product, User


@dataclass(frozen=True)
class MarketView:
    """Снапшот пользователей, товаров и заказов."""

    users: tuple[User, ...] = ()
    products: tuple[Product, ...] = ()
    orders: tuple[Order, ...] = ()

    def get_user(self, principal: str) -> Optional[User]:
        return next((u for u in self.users if u.principal == principal), None)

    def get_product(self, product_id: int) -> Optional[Product]:
        return next((p for p in self.products if p.id == product_id), None)

    def get_order(self, order_id: int) -> Optional[Order]:
        return next((o for o in self.orders if o.id == order_id), None)

    def export(self, validate: bool = True) -> Dict[str, List[Dict[str, Any]]]:
        """
        Экспорт снапшота в JSON-совместимые dict для внешних потребителей.

        Args:
            validate: проверить каждую запись по JSON Schema контракту

        Raises:
            jsonschema.ValidationError: если запись нарушает контракт
        """
        users = [u.model_dump(mode="json") for u in self.users]
        products = [p.model_dump(mode="json") for p in self.products]
        orders = [o.model_dump(mode="json") for o in self.orders]

        if validate:
            for record in users:
                validate_user(record)
            for record in products:
                validate_product(record)
            for record in orders:
                validate_order(record)

        return {"users": users, "products": products, "orders": orders}
