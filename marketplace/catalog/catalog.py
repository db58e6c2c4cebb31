"""
ProductCatalog — каталог товаров и учёт остатков

Порядок проверок publish():
1. Пользователь зарегистрирован → иначе NOT_REGISTERED
2. Роль покрывает SELLER → иначе WRONG_ROLE
3. quantity > 0 → иначе INVALID_QUANTITY

Остаток уменьшается только через reserve_stock(), которую вызывает
OrderLedger в той же транзакции, что и вставку заказа.
"""

import logging

from marketplace.core.contracts import ProductValidator
from marketplace.core.domain import Product, Role
from marketplace.core.errors import ErrorKind, MarketplaceError
from marketplace.gatekeeper import AuthorizationGuard
from marketplace.identity import IdentityRegistry
from marketplace.storage import KeyValueStore, RecordCollection, SequenceCounter


logger = logging.getLogger(__name__)


class ProductCatalog:
    """Каталог товаров поверх KeyValueStore."""

    def __init__(
        self,
        store: KeyValueStore,
        registry: IdentityRegistry,
        guard: AuthorizationGuard | None = None,
        validate_contracts: bool = True,
    ):
        self._products: RecordCollection[Product] = RecordCollection(
            store, "product", Product, ProductValidator() if validate_contracts else None
        )
        self._ids = SequenceCounter(store, "product")
        self._registry = registry
        self._guard = guard or AuthorizationGuard()

    # -------------------------------------------------------------------------
    # Публикация и выборки
    # -------------------------------------------------------------------------

    def publish(
        self,
        caller: str,
        name: str,
        description: str,
        price: int,
        quantity: int,
        category: str,
    ) -> int:
        """
        Публикация товара продавцом.

        Args:
            caller: principal продавца
            name, description, category: описание товара
            price: цена в минимальных денежных единицах (>= 0)
            quantity: начальный остаток (> 0)

        Returns:
            Идентификатор нового товара

        Raises:
            MarketplaceError(NOT_REGISTERED | WRONG_ROLE | INVALID_QUANTITY)
            pydantic.ValidationError: если price < 0
        """
        seller = self._registry.require_user(caller)
        self._guard.require_role(seller, Role.SELLER).raise_if_blocked()

        if quantity <= 0:
            raise MarketplaceError(
                ErrorKind.INVALID_QUANTITY, f"quantity must be positive, got {quantity}"
            )

        product = Product(
            id=self._ids.peek(),
            name=name,
            description=description,
            price=price,
            quantity=quantity,
            category=category,
            owner=caller,
        )
        self._ids.next()
        self._products.put(product.id, product)
        logger.debug("product %d published by %s (qty=%d)", product.id, caller, quantity)
        return product.id

    def list_by_seller(self, seller: str) -> list[Product]:
        """
        Все товары продавца.

        Пустой результат — ошибка NO_PRODUCTS, а не пустой список.

        Raises:
            MarketplaceError(NOT_REGISTERED | WRONG_ROLE | NO_PRODUCTS)
        """
        user = self._registry.require_user(seller)
        self._guard.require_role(user, Role.SELLER).raise_if_blocked()

        products = [p for p in self.all() if p.owner == seller]
        if not products:
            raise MarketplaceError(ErrorKind.NO_PRODUCTS, f"{seller} has no products")
        return products

    def get(self, product_id: int) -> Product:
        """
        Raises:
            MarketplaceError(PRODUCT_NOT_FOUND)
        """
        product = self._products.get(product_id)
        if product is None:
            raise MarketplaceError(
                ErrorKind.PRODUCT_NOT_FOUND, f"product {product_id} does not exist"
            )
        return product

    def all(self) -> list[Product]:
        return sorted(self._products.values(), key=lambda p: p.id)

    # -------------------------------------------------------------------------
    # Остатки (только для OrderLedger)
    # -------------------------------------------------------------------------

    def reserve_stock(self, product_id: int, quantity: int) -> str:
        """
        Списание quantity единиц товара.

        Должна выполняться в одной транзакции со вставкой заказа.

        Returns:
            principal владельца товара

        Raises:
            MarketplaceError(PRODUCT_NOT_FOUND | INSUFFICIENT_STOCK)
        """
        product = self.get(product_id)
        if not product.has_stock_for(quantity):
            raise MarketplaceError(
                ErrorKind.INSUFFICIENT_STOCK,
                f"requested {quantity} of product {product_id}, only {product.quantity} available",
            )

        self._products.put(product_id, product.with_quantity_reserved(quantity))
        return product.owner
