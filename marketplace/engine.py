"""
MarketplaceEngine — фасад движка жизненного цикла заказов

Владеет одним экземпляром каждого компонента:
- IdentityRegistry — участники и роли
- ProductCatalog — товары и остатки
- OrderLedger — заказы и их состояния
- EventOutbox — исходящие события (только RoleChanged)

Модель исполнения — один последовательный актор: каждая публичная
операция выполняется целиком под одной глобальной блокировкой и внутри
одной транзакции хранилища. Частично применённая операция никогда
не видна снаружи.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Callable, List, Optional

from pydantic import BaseModel

from marketplace.catalog import ProductCatalog
from marketplace.core.config import EngineConfig
from marketplace.core.domain import Order, Product, Role, User
from marketplace.core.errors import MarketplaceError
from marketplace.gatekeeper import AuthorizationGuard
from marketplace.identity import IdentityRegistry
from marketplace.ledger import OrderLedger, OrderStateMachine
from marketplace.notifications import EventHandler, EventOutbox
from marketplace.reporting import MarketView
from marketplace.storage import InMemoryKeyValueStore, KeyValueStore


logger = logging.getLogger(__name__)


class MarketplaceEngine:
    """Точка входа для всех операций маркетплейса.

    Principal вызывающего передаётся явно в каждую операцию; движок
    считает его уже проверенным внешней стороной.
    """

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        config: Optional[EngineConfig] = None,
    ):
        """
        Args:
            store: KV-хранилище (по умолчанию in-memory)
            config: конфигурация движка
        """
        self.config = config or EngineConfig()
        self._store = store if store is not None else InMemoryKeyValueStore()
        self._lock = threading.RLock()

        guard = AuthorizationGuard()
        validate = self.config.validate_contracts
        self._registry = IdentityRegistry(self._store, guard, validate_contracts=validate)
        self._catalog = ProductCatalog(
            self._store, self._registry, guard, validate_contracts=validate
        )
        self._ledger = OrderLedger(
            self._store,
            self._registry,
            self._catalog,
            guard,
            OrderStateMachine(),
            validate_contracts=validate,
        )
        self._outbox = EventOutbox(buffer_events=self.config.buffer_events)

    @contextmanager
    def _operation(self, name: str, caller: str):
        """Одна операция: глобальная блокировка + одна транзакция хранилища."""
        with self._lock:
            try:
                with self._store.transaction():
                    yield
            except MarketplaceError as e:
                logger.debug("%s rejected for %s: %s", name, caller, e)
                raise

    # -------------------------------------------------------------------------
    # Участники
    # -------------------------------------------------------------------------

    def register(self, caller: str, role: Role) -> None:
        with self._operation("register", caller):
            self._registry.register(caller, role)

    def change_role(self, caller: str, new_role: Role) -> None:
        """Смена роли; при успехе публикуется RoleChanged."""
        with self._lock:
            with self._operation("change_role", caller):
                event = self._registry.change_role(caller, new_role)
            self._outbox.publish(event)

    def is_registered(self, principal: str) -> bool:
        with self._lock:
            return self._registry.is_registered(principal)

    def lookup(self, principal: str) -> Optional[User]:
        with self._lock:
            return self._registry.lookup(principal)

    # -------------------------------------------------------------------------
    # Каталог
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
        with self._operation("publish", caller):
            return self._catalog.publish(caller, name, description, price, quantity, category)

    def list_my_products(self, caller: str) -> List[Product]:
        return self.list_products_by_seller(caller)

    def list_products_by_seller(self, seller: str) -> List[Product]:
        with self._lock:
            return self._catalog.list_by_seller(seller)

    def get_product(self, product_id: int) -> Product:
        with self._lock:
            return self._catalog.get(product_id)

    # -------------------------------------------------------------------------
    # Заказы
    # -------------------------------------------------------------------------

    def create_order(self, caller: str, product_id: int, quantity: int) -> int:
        with self._operation("create_order", caller):
            return self._ledger.create_order(caller, product_id, quantity)

    def mark_shipped(self, caller: str, order_id: int) -> None:
        with self._operation("mark_shipped", caller):
            self._ledger.mark_shipped(caller, order_id)

    def mark_received(self, caller: str, order_id: int) -> None:
        with self._operation("mark_received", caller):
            self._ledger.mark_received(caller, order_id)

    def get_order(self, order_id: int) -> Order:
        with self._lock:
            return self._ledger.get(order_id)

    # -------------------------------------------------------------------------
    # Read-only доступ и события
    # -------------------------------------------------------------------------

    def view(self) -> MarketView:
        """Снапшот закоммиченных записей для read-only потребителей."""
        with self._lock:
            return MarketView(
                users=tuple(self._registry.all()),
                products=tuple(self._catalog.all()),
                orders=tuple(self._ledger.all()),
            )

    def subscribe(self, handler: EventHandler) -> Callable[[], None]:
        with self._lock:
            return self._outbox.subscribe(handler)

    def drain_events(self) -> List[BaseModel]:
        with self._lock:
            return self._outbox.drain()
