"""Unit тесты для OrderLedger.

Coverage:
- create_order: порядок проверок и атомарное списание остатка
- mark_shipped / mark_received: актор, затем таблица переходов
- Отклонённые вызовы не меняют состояние
"""

import pytest

from marketplace.catalog import ProductCatalog
from marketplace.core.domain import OrderState, Role
from marketplace.core.errors import ErrorKind, MarketplaceError
from marketplace.identity import IdentityRegistry
from marketplace.ledger import OrderLedger
from marketplace.storage import InMemoryKeyValueStore


@pytest.fixture
def setup():
    """Продавец bob с товаром 0 (5 шт.), покупатель carol, BOTH dana, SELLER erin."""
    store = InMemoryKeyValueStore()
    registry = IdentityRegistry(store)
    catalog = ProductCatalog(store, registry)
    ledger = OrderLedger(store, registry, catalog)

    registry.register("bob", Role.SELLER)
    registry.register("carol", Role.BUYER)
    registry.register("dana", Role.BOTH)
    registry.register("erin", Role.SELLER)
    catalog.publish("bob", "Widget", "d", 100, 5, "Tools")
    return store, catalog, ledger


def _kind(exc_info) -> ErrorKind:
    return exc_info.value.kind


# =============================================================================
# CREATE ORDER
# =============================================================================


class TestCreateOrder:
    def test_create_ok(self, setup):
        _, catalog, ledger = setup

        order_id = ledger.create_order("carol", 0, 3)

        order = ledger.get(order_id)
        assert order_id == 0
        assert order.buyer == "carol"
        assert order.seller == "bob"
        assert order.product_id == 0
        assert order.quantity == 3
        assert order.state == OrderState.PENDING
        assert not order.buyer_rated and not order.seller_rated
        assert catalog.get(0).quantity == 2

    def test_both_role_can_buy(self, setup):
        _, _, ledger = setup
        assert ledger.get(ledger.create_order("dana", 0, 1)).buyer == "dana"

    def test_sequential_order_ids(self, setup):
        _, _, ledger = setup
        assert [ledger.create_order("carol", 0, 1) for _ in range(3)] == [0, 1, 2]

    def test_unregistered(self, setup):
        _, _, ledger = setup
        with pytest.raises(MarketplaceError) as exc_info:
            ledger.create_order("ghost", 0, 1)
        assert _kind(exc_info) == ErrorKind.NOT_REGISTERED

    def test_seller_cannot_buy(self, setup):
        _, _, ledger = setup
        with pytest.raises(MarketplaceError) as exc_info:
            ledger.create_order("erin", 0, 1)
        assert _kind(exc_info) == ErrorKind.WRONG_ROLE

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_invalid_quantity(self, setup, quantity):
        _, _, ledger = setup
        with pytest.raises(MarketplaceError) as exc_info:
            ledger.create_order("carol", 0, quantity)
        assert _kind(exc_info) == ErrorKind.INVALID_QUANTITY

    def test_quantity_checked_before_product(self, setup):
        _, _, ledger = setup
        with pytest.raises(MarketplaceError) as exc_info:
            ledger.create_order("carol", 99, 0)
        assert _kind(exc_info) == ErrorKind.INVALID_QUANTITY

    def test_product_not_found(self, setup):
        _, _, ledger = setup
        with pytest.raises(MarketplaceError) as exc_info:
            ledger.create_order("carol", 99, 1)
        assert _kind(exc_info) == ErrorKind.PRODUCT_NOT_FOUND

    def test_insufficient_stock_leaves_state_unchanged(self, setup):
        _, catalog, ledger = setup

        with pytest.raises(MarketplaceError) as exc_info:
            ledger.create_order("carol", 0, 7)

        assert _kind(exc_info) == ErrorKind.INSUFFICIENT_STOCK
        assert catalog.get(0).quantity == 5
        assert ledger.all() == []
        # id не израсходован
        assert ledger.create_order("carol", 0, 1) == 0

    def test_stock_and_order_commit_together(self, setup, monkeypatch):
        """Сбой вставки заказа откатывает и списание остатка"""
        _, catalog, ledger = setup

        def failing_put(record_id, record):
            raise RuntimeError("storage failure")

        monkeypatch.setattr(ledger._orders, "put", failing_put)

        with pytest.raises(RuntimeError):
            ledger.create_order("carol", 0, 2)

        assert catalog.get(0).quantity == 5


# =============================================================================
# TRANSITIONS
# =============================================================================


class TestTransitions:
    @pytest.fixture
    def order_id(self, setup):
        _, _, ledger = setup
        return ledger.create_order("carol", 0, 3)

    def test_full_lifecycle(self, setup, order_id):
        _, _, ledger = setup

        shipped = ledger.mark_shipped("bob", order_id)
        assert shipped.new_state == OrderState.SHIPPED
        assert ledger.get(order_id).state == OrderState.SHIPPED

        ledger.mark_received("carol", order_id)
        assert ledger.get(order_id).state == OrderState.RECEIVED

    def test_received_on_pending_is_invalid_state(self, setup, order_id):
        _, _, ledger = setup
        with pytest.raises(MarketplaceError) as exc_info:
            ledger.mark_received("carol", order_id)
        assert _kind(exc_info) == ErrorKind.INVALID_STATE

    def test_non_buyer_received_is_wrong_role(self, setup, order_id):
        _, _, ledger = setup
        ledger.mark_shipped("bob", order_id)

        for caller in ("bob", "dana"):
            with pytest.raises(MarketplaceError) as exc_info:
                ledger.mark_received(caller, order_id)
            assert _kind(exc_info) == ErrorKind.WRONG_ROLE

    def test_actor_checked_before_state(self, setup, order_id):
        """Чужой покупатель на PENDING заказе получает WRONG_ROLE, а не INVALID_STATE"""
        _, _, ledger = setup
        with pytest.raises(MarketplaceError) as exc_info:
            ledger.mark_received("dana", order_id)
        assert _kind(exc_info) == ErrorKind.WRONG_ROLE

    def test_non_seller_shipped_is_wrong_role(self, setup, order_id):
        _, _, ledger = setup
        for caller in ("carol", "erin", "dana"):
            with pytest.raises(MarketplaceError) as exc_info:
                ledger.mark_shipped(caller, order_id)
            assert _kind(exc_info) == ErrorKind.WRONG_ROLE
        assert ledger.get(order_id).state == OrderState.PENDING

    def test_ship_twice_is_invalid_state(self, setup, order_id):
        _, _, ledger = setup
        ledger.mark_shipped("bob", order_id)
        with pytest.raises(MarketplaceError) as exc_info:
            ledger.mark_shipped("bob", order_id)
        assert _kind(exc_info) == ErrorKind.INVALID_STATE

    def test_ship_after_received_is_invalid_state(self, setup, order_id):
        _, _, ledger = setup
        ledger.mark_shipped("bob", order_id)
        ledger.mark_received("carol", order_id)
        with pytest.raises(MarketplaceError) as exc_info:
            ledger.mark_shipped("bob", order_id)
        assert _kind(exc_info) == ErrorKind.INVALID_STATE
        assert ledger.get(order_id).state == OrderState.RECEIVED

    def test_unregistered_caller(self, setup, order_id):
        _, _, ledger = setup
        with pytest.raises(MarketplaceError) as exc_info:
            ledger.mark_shipped("ghost", order_id)
        assert _kind(exc_info) == ErrorKind.NOT_REGISTERED

    @pytest.mark.parametrize("method", ["mark_shipped", "mark_received"])
    def test_order_not_found(self, setup, method):
        _, _, ledger = setup
        with pytest.raises(MarketplaceError) as exc_info:
            getattr(ledger, method)("bob", 17)
        assert _kind(exc_info) == ErrorKind.ORDER_NOT_FOUND

    def test_registration_checked_before_order_lookup(self, setup):
        _, _, ledger = setup
        with pytest.raises(MarketplaceError) as exc_info:
            ledger.mark_shipped("ghost", 17)
        assert _kind(exc_info) == ErrorKind.NOT_REGISTERED
