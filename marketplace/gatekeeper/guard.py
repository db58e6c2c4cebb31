"""AuthorizationGuard — stateless проверки прав перед любой мутацией

Проверки работают над уже загруженными записями (User, Order) и
собственного состояния не имеют:
- require_role: роль пользователя покрывает требуемую (BOTH покрывает всё)
- require_can_buy: BUYER или BOTH
- require_role_change_allowed: таблица допустимых смен роли
- require_order_transition_actor: SHIPPED — только продавец заказа,
  RECEIVED — только покупатель заказа

Каждая проверка возвращает GuardResult. Превращение в исключение
происходит на границе операции через raise_if_blocked().
"""

from dataclasses import dataclass
from typing import Optional

from marketplace.core.domain import ALLOWED_ROLE_CHANGES, Order, OrderState, Role, User
from marketplace.core.errors import ErrorKind, MarketplaceError


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class GuardResult:
    """Результат проверки AuthorizationGuard."""

    allowed: bool
    block_reason: Optional[ErrorKind]

    # Детали
    details: str

    def raise_if_blocked(self) -> None:
        """
        Raises:
            MarketplaceError: с block_reason, если проверка не пройдена
        """
        if not self.allowed:
            raise MarketplaceError(self.block_reason, self.details)


def _pass(details: str) -> GuardResult:
    return GuardResult(allowed=True, block_reason=None, details=details)


def _block(reason: ErrorKind, details: str) -> GuardResult:
    return GuardResult(allowed=False, block_reason=reason, details=details)


# =============================================================================
# GUARD
# =============================================================================


class AuthorizationGuard:
    """AuthorizationGuard: предикаты авторизации.

    BUYER и SELLER никогда не покрывают друг друга; BOTH покрывает обе роли.
    """

    def __init__(self):
        """AuthorizationGuard не требует зависимостей (stateless)."""
        pass

    def require_role(self, user: User, required: Role) -> GuardResult:
        """Роль пользователя должна совпадать с required или быть BOTH.

        Args:
            user: загруженная запись пользователя
            required: требуемая роль

        Returns:
            GuardResult (WRONG_ROLE при несоответствии)
        """
        if user.role.satisfies(required):
            return _pass(f"PASS: role={user.role.value} satisfies {required.value}")

        return _block(
            ErrorKind.WRONG_ROLE,
            f"{user.principal} has role {user.role.value}, {required.value} required",
        )

    def require_can_buy(self, user: User) -> GuardResult:
        """Покупать могут BUYER и BOTH."""
        if user.role.can_buy:
            return _pass(f"PASS: role={user.role.value} can buy")

        return _block(
            ErrorKind.WRONG_ROLE,
            f"{user.principal} has role {user.role.value} and cannot place orders",
        )

    def require_role_change_allowed(self, user: User, requested: Role) -> GuardResult:
        """Проверка смены роли по таблице ALLOWED_ROLE_CHANGES.

        Повторное назначение текущей роли и переход в BOTH отклоняются.
        """
        if (user.role, requested) in ALLOWED_ROLE_CHANGES:
            return _pass(f"PASS: {user.role.value} → {requested.value}")

        return _block(
            ErrorKind.INVALID_ROLE_CHANGE,
            f"role change {user.role.value} → {requested.value} is not allowed",
        )

    def require_order_transition_actor(
        self,
        order: Order,
        caller: str,
        target_state: OrderState,
    ) -> GuardResult:
        """Проверка, что caller — единственный допустимый автор перехода.

        Проверка не зависит от текущего состояния заказа: допустимость самого
        перехода проверяет OrderStateMachine. Для целевых состояний, кроме
        SHIPPED и RECEIVED, актор здесь не ограничивается.

        Args:
            order: заказ
            caller: principal вызывающего
            target_state: целевое состояние

        Returns:
            GuardResult (WRONG_ROLE если caller не тот участник заказа)
        """
        if target_state == OrderState.SHIPPED and caller != order.seller:
            return _block(
                ErrorKind.WRONG_ROLE,
                f"only the seller of order {order.id} can mark it {target_state.value}",
            )

        if target_state == OrderState.RECEIVED and caller != order.buyer:
            return _block(
                ErrorKind.WRONG_ROLE,
                f"only the buyer of order {order.id} can mark it {target_state.value}",
            )

        return _pass(f"PASS: {caller} may request {target_state.value} on order {order.id}")
