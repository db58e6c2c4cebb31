"""
Role — роль зарегистрированного участника

Закрытое перечисление с асимметричным сопоставлением:
BOTH покрывает возможности BUYER и SELLER, а BUYER и SELLER
друг друга не покрывают.
"""

from enum import Enum


class Role(str, Enum):
    """Роль участника маркетплейса."""

    BUYER = "Buyer"
    SELLER = "Seller"
    BOTH = "Both"

    def satisfies(self, required: "Role") -> bool:
        """
        Проверка, покрывает ли роль требуемую.

        Args:
            required: требуемая роль

        Returns:
            True если роли совпадают или текущая роль — BOTH
        """
        return self == Role.BOTH or self == required

    @property
    def can_buy(self) -> bool:
        return self.satisfies(Role.BUYER)

    @property
    def can_sell(self) -> bool:
        return self.satisfies(Role.SELLER)


# Допустимые смены роли: single-роль меняется только на противоположную,
# BOTH сужается до любой single-роли. Переход в BOTH и no-op запрещены.
ALLOWED_ROLE_CHANGES: frozenset[tuple[Role, Role]] = frozenset(
    {
        (Role.SELLER, Role.BUYER),
        (Role.BUYER, Role.SELLER),
        (Role.BOTH, Role.BUYER),
        (Role.BOTH, Role.SELLER),
    }
)
