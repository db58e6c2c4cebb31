"""Unit тесты для AuthorizationGuard.

Coverage:
- require_role (BOTH покрывает, BUYER/SELLER не взаимозаменяемы)
- require_can_buy
- require_role_change_allowed (полная таблица 3x3)
- require_order_transition_actor (только продавец/покупатель заказа)
- raise_if_blocked
"""

import pytest

from marketplace.core.domain import Order, OrderState, Role, User
from marketplace.core.errors import ErrorKind, MarketplaceError
from marketplace.gatekeeper import AuthorizationGuard, GuardResult


@pytest.fixture
def guard():
    """Fixture для AuthorizationGuard."""
    return AuthorizationGuard()


@pytest.fixture
def order():
    return Order(id=7, buyer="carol", seller="bob", product_id=0, quantity=1)


def _user(role: Role) -> User:
    return User(principal="u", role=role)


# =============================================================================
# ROLE CHECKS
# =============================================================================


def test_require_role_pass_exact(guard):
    result = guard.require_role(_user(Role.SELLER), Role.SELLER)
    assert result.allowed
    assert result.block_reason is None


def test_require_role_pass_both(guard):
    assert guard.require_role(_user(Role.BOTH), Role.SELLER).allowed
    assert guard.require_role(_user(Role.BOTH), Role.BUYER).allowed


def test_require_role_block_buyer_for_seller(guard):
    result = guard.require_role(_user(Role.BUYER), Role.SELLER)
    assert not result.allowed
    assert result.block_reason == ErrorKind.WRONG_ROLE


def test_require_role_block_seller_for_buyer(guard):
    result = guard.require_role(_user(Role.SELLER), Role.BUYER)
    assert result.block_reason == ErrorKind.WRONG_ROLE


@pytest.mark.parametrize(
    "role, allowed",
    [(Role.BUYER, True), (Role.BOTH, True), (Role.SELLER, False)],
)
def test_require_can_buy(guard, role, allowed):
    result = guard.require_can_buy(_user(role))
    assert result.allowed is allowed
    if not allowed:
        assert result.block_reason == ErrorKind.WRONG_ROLE


# =============================================================================
# ROLE CHANGE TABLE
# =============================================================================


@pytest.mark.parametrize(
    "current, requested, allowed",
    [
        (Role.SELLER, Role.BUYER, True),
        (Role.BUYER, Role.SELLER, True),
        (Role.BOTH, Role.BUYER, True),
        (Role.BOTH, Role.SELLER, True),
        (Role.BUYER, Role.BUYER, False),
        (Role.SELLER, Role.SELLER, False),
        (Role.BOTH, Role.BOTH, False),
        (Role.BUYER, Role.BOTH, False),
        (Role.SELLER, Role.BOTH, False),
    ],
)
def test_require_role_change_allowed(guard, current, requested, allowed):
    result = guard.require_role_change_allowed(_user(current), requested)
    assert result.allowed is allowed
    if not allowed:
        assert result.block_reason == ErrorKind.INVALID_ROLE_CHANGE


# =============================================================================
# ORDER TRANSITION ACTOR
# =============================================================================


def test_shipped_requires_seller(guard, order):
    assert guard.require_order_transition_actor(order, "bob", OrderState.SHIPPED).allowed

    result = guard.require_order_transition_actor(order, "carol", OrderState.SHIPPED)
    assert result.block_reason == ErrorKind.WRONG_ROLE

    result = guard.require_order_transition_actor(order, "mallory", OrderState.SHIPPED)
    assert result.block_reason == ErrorKind.WRONG_ROLE


def test_received_requires_buyer(guard, order):
    assert guard.require_order_transition_actor(order, "carol", OrderState.RECEIVED).allowed

    result = guard.require_order_transition_actor(order, "bob", OrderState.RECEIVED)
    assert result.block_reason == ErrorKind.WRONG_ROLE


def test_actor_check_ignores_current_state(guard, order):
    """Проверка актора не зависит от текущего состояния заказа"""
    shipped = order.with_state(OrderState.SHIPPED)
    received = order.with_state(OrderState.RECEIVED)
    assert not guard.require_order_transition_actor(shipped, "bob", OrderState.RECEIVED).allowed
    assert not guard.require_order_transition_actor(received, "carol", OrderState.SHIPPED).allowed
    assert guard.require_order_transition_actor(received, "carol", OrderState.RECEIVED).allowed


@pytest.mark.parametrize("target", [OrderState.PENDING, OrderState.CANCELLED])
def test_other_targets_are_delegated(guard, order, target):
    """Для прочих целевых состояний решение за машиной состояний"""
    assert guard.require_order_transition_actor(order, "mallory", target).allowed


# =============================================================================
# RESULT
# =============================================================================


def test_raise_if_blocked():
    GuardResult(allowed=True, block_reason=None, details="ok").raise_if_blocked()

    with pytest.raises(MarketplaceError) as exc_info:
        GuardResult(
            allowed=False, block_reason=ErrorKind.WRONG_ROLE, details="nope"
        ).raise_if_blocked()

    assert exc_info.value.kind == ErrorKind.WRONG_ROLE
    assert exc_info.value.details == "nope"
    assert str(exc_info.value) == "WrongRole: nope"
