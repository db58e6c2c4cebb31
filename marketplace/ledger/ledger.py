"""
OrderLedger — заказы и их жизненный цикл

create_order():
1. Покупатель зарегистрирован → NOT_REGISTERED
2. Роль BUYER или BOTH → WRONG_ROLE
3. quantity > 0 → INVALID_QUANTITY
4. Товар существует → PRODUCT_NOT_FOUND
5. quantity <= остаток → INSUFFICIENT_STOCK
6. Списание остатка + вставка PENDING заказа одной транзакцией

mark_shipped() / mark_received():
1. Вызывающий зарегистрирован → NOT_REGISTERED
2. Заказ существует → ORDER_NOT_FOUND
3. Актор перехода (продавец / покупатель заказа) → WRONG_ROLE
4. Переход допустим из текущего состояния → INVALID_STATE

Все проверки выполняются до мутаций: отклонённый вызов не меняет
ни каталог, ни журнал заказов.
"""

import logging

from marketplace.catalog import ProductCatalog
from marketplace.core.contracts import OrderValidator
from marketplace.core.domain import Order, OrderState
from marketplace.core.errors import ErrorKind, MarketplaceError
from marketplace.gatekeeper import AuthorizationGuard
from marketplace.identity import IdentityRegistry
from marketplace.ledger.state_machine import OrderStateMachine, OrderTransitionResult
from marketplace.storage import KeyValueStore, RecordCollection, SequenceCounter


logger = logging.getLogger(__name__)


class OrderLedger:
    """Журнал заказов поверх KeyValueStore."""

    def __init__(
        self,
        store: KeyValueStore,
        registry: IdentityRegistry,
        catalog: ProductCatalog,
        guard: AuthorizationGuard | None = None,
        state_machine: OrderStateMachine | None = None,
        validate_contracts: bool = True,
    ):
        self._store = store
        self._orders: RecordCollection[Order] = RecordCollection(
            store, "order", Order, OrderValidator() if validate_contracts else None
        )
        self._ids = SequenceCounter(store, "order")
        self._registry = registry
        self._catalog = catalog
        self._guard = guard or AuthorizationGuard()
        self._state_machine = state_machine or OrderStateMachine()

    # -------------------------------------------------------------------------
    # Создание заказа
    # -------------------------------------------------------------------------

    def create_order(self, caller: str, product_id: int, quantity: int) -> int:
        """
        Создание заказа с атомарным списанием остатка.

        Args:
            caller: principal покупателя
            product_id: идентификатор товара
            quantity: количество (> 0)

        Returns:
            Идентификатор заказа

        Raises:
            MarketplaceError(NOT_REGISTERED | WRONG_ROLE | INVALID_QUANTITY |
                             PRODUCT_NOT_FOUND | INSUFFICIENT_STOCK)
        """
        buyer = self._registry.require_user(caller)
        self._guard.require_can_buy(buyer).raise_if_blocked()

        if quantity <= 0:
            raise MarketplaceError(
                ErrorKind.INVALID_QUANTITY, f"quantity must be positive, got {quantity}"
            )

        product = self._catalog.get(product_id)
        if not product.has_stock_for(quantity):
            raise MarketplaceError(
                ErrorKind.INSUFFICIENT_STOCK,
                f"requested {quantity} of product {product_id}, only {product.quantity} available",
            )

        with self._store.transaction():
            seller = self._catalog.reserve_stock(product_id, quantity)
            order = Order(
                id=self._ids.next(),
                buyer=caller,
                seller=seller,
                product_id=product_id,
                quantity=quantity,
            )
            self._orders.put(order.id, order)

        logger.debug(
            "order %d created: %s buys %d of product %d from %s",
            order.id, caller, quantity, product_id, seller,
        )
        return order.id

    # -------------------------------------------------------------------------
    # Переходы состояний
    # -------------------------------------------------------------------------

    def mark_shipped(self, caller: str, order_id: int) -> OrderTransitionResult:
        """Продавец отмечает заказ отправленным (PENDING → SHIPPED)."""
        return self._advance(caller, order_id, OrderState.SHIPPED)

    def mark_received(self, caller: str, order_id: int) -> OrderTransitionResult:
        """Покупатель отмечает заказ полученным (SHIPPED → RECEIVED)."""
        return self._advance(caller, order_id, OrderState.RECEIVED)

    def _advance(self, caller: str, order_id: int, target_state: OrderState) -> OrderTransitionResult:
        self._registry.require_user(caller)
        order = self.get(order_id)

        # Актор проверяется независимо от текущего состояния, затем таблица переходов
        self._guard.require_order_transition_actor(order, caller, target_state).raise_if_blocked()
        result = self._state_machine.evaluate_transition(order.state, target_state)
        result.raise_if_rejected()

        self._orders.put(order_id, order.with_state(result.new_state))
        logger.debug("order %d: %s by %s", order_id, result.details, caller)
        return result

    # -------------------------------------------------------------------------
    # Чтение
    # -------------------------------------------------------------------------

    def get(self, order_id: int) -> Order:
        """
        Raises:
            MarketplaceError(ORDER_NOT_FOUND)
        """
        order = self._orders.get(order_id)
        if order is None:
            raise MarketplaceError(ErrorKind.ORDER_NOT_FOUND, f"order {order_id} does not exist")
        return order

    def all(self) -> list[Order]:
        return sorted(self._orders.values(), key=lambda o: o.id)
