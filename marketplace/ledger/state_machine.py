"""Order State Machine — жизненный цикл заказа

Переходы (только вперёд):
- PENDING → SHIPPED
- SHIPPED → RECEIVED (терминальное)

Любая другая пара (from, to) отклоняется с INVALID_STATE, включая повтор
текущего состояния, пропуск состояния и движение назад.
CANCELLED — именованное состояние без входящих переходов.
"""

from dataclasses import dataclass

from marketplace.core.domain import OrderState
from marketplace.core.errors import ErrorKind, MarketplaceError


ORDER_TRANSITIONS: frozenset[tuple[OrderState, OrderState]] = frozenset(
    {
        (OrderState.PENDING, OrderState.SHIPPED),
        (OrderState.SHIPPED, OrderState.RECEIVED),
    }
)

TERMINAL_STATES: frozenset[OrderState] = frozenset({OrderState.RECEIVED, OrderState.CANCELLED})


@dataclass(frozen=True)
class OrderTransitionResult:
    """Результат оценки перехода состояния заказа."""

    new_state: OrderState
    previous_state: OrderState

    # Диагностика
    transition_occurred: bool
    transition_reason: str

    # Для отладки
    details: str

    def raise_if_rejected(self) -> None:
        """
        Raises:
            MarketplaceError(INVALID_STATE): если переход не состоялся
        """
        if not self.transition_occurred:
            raise MarketplaceError(ErrorKind.INVALID_STATE, self.details)


class OrderStateMachine:
    """Таблица переходов заказа.

    Stateless: текущее состояние передаётся явно, результат описывает
    новое состояние и причину решения.
    """

    def evaluate_transition(
        self, current_state: OrderState, target_state: OrderState
    ) -> OrderTransitionResult:
        """Оценка перехода current_state → target_state.

        Args:
            current_state: текущее состояние заказа
            target_state: запрошенное состояние

        Returns:
            OrderTransitionResult; при отказе new_state == current_state
        """
        if (current_state, target_state) in ORDER_TRANSITIONS:
            return OrderTransitionResult(
                new_state=target_state,
                previous_state=current_state,
                transition_occurred=True,
                transition_reason=f"{current_state.value.lower()}_to_{target_state.value.lower()}",
                details=f"Transition {current_state.value} → {target_state.value}",
            )

        if current_state in TERMINAL_STATES:
            reason = "terminal_state"
        elif current_state == target_state:
            reason = "already_in_state"
        else:
            reason = "invalid_transition"

        return OrderTransitionResult(
            new_state=current_state,
            previous_state=current_state,
            transition_occurred=False,
            transition_reason=reason,
            details=f"cannot move order from {current_state.value} to {target_state.value}",
        )

    def can_transition(self, current_state: OrderState, target_state: OrderState) -> bool:
        return (current_state, target_state) in ORDER_TRANSITIONS
