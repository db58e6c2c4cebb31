"""
IdentityRegistry — реестр участников и их ролей

Append-only реестр: principal → User. Регистрация идемпотентна
(повторная регистрация всегда отклоняется), удаление не предусмотрено.
"""

import logging
from typing import Optional

from marketplace.core.contracts import RoleChangedValidator, UserValidator
from marketplace.core.domain import Role, RoleChanged, User
from marketplace.core.errors import ErrorKind, MarketplaceError
from marketplace.gatekeeper import AuthorizationGuard
from marketplace.storage import KeyValueStore, RecordCollection


logger = logging.getLogger(__name__)


class IdentityRegistry:
    """Реестр пользователей поверх KeyValueStore."""

    def __init__(
        self,
        store: KeyValueStore,
        guard: Optional[AuthorizationGuard] = None,
        validate_contracts: bool = True,
    ):
        self._users: RecordCollection[User] = RecordCollection(
            store, "user", User, UserValidator() if validate_contracts else None
        )
        self._event_validator = RoleChangedValidator() if validate_contracts else None
        self._guard = guard or AuthorizationGuard()

    def register(self, caller: str, role: Role) -> User:
        """
        Регистрация caller с ролью role.

        Raises:
            MarketplaceError(ALREADY_REGISTERED): если запись уже существует
        """
        role = Role(role)
        if self._users.contains(caller):
            raise MarketplaceError(
                ErrorKind.ALREADY_REGISTERED, f"{caller} is already registered"
            )

        user = User(principal=caller, role=role)
        self._users.put(caller, user)
        logger.debug("registered %s as %s", caller, role.value)
        return user

    def is_registered(self, principal: str) -> bool:
        return self._users.contains(principal)

    def lookup(self, principal: str) -> Optional[User]:
        return self._users.get(principal)

    def require_user(self, principal: str) -> User:
        """
        Загрузка записи зарегистрированного пользователя.

        Raises:
            MarketplaceError(NOT_REGISTERED): если записи нет
        """
        user = self._users.get(principal)
        if user is None:
            raise MarketplaceError(ErrorKind.NOT_REGISTERED, f"{principal} is not registered")
        return user

    def change_role(self, caller: str, new_role: Role) -> RoleChanged:
        """
        Смена роли caller.

        Допустимы только SELLER→BUYER, BUYER→SELLER, BOTH→BUYER, BOTH→SELLER.

        Returns:
            Событие RoleChanged для публикации после коммита

        Raises:
            MarketplaceError(NOT_REGISTERED | INVALID_ROLE_CHANGE)
            jsonschema.ValidationError: если событие нарушает контракт
        """
        new_role = Role(new_role)
        user = self.require_user(caller)
        self._guard.require_role_change_allowed(user, new_role).raise_if_blocked()

        event = RoleChanged(principal=caller, previous_role=user.role, new_role=new_role)
        if self._event_validator is not None:
            self._event_validator.validate(event.model_dump(mode="json"))

        self._users.put(caller, user.with_role(new_role))
        logger.info("role changed for %s: %s → %s", caller, user.role.value, new_role.value)
        return event

    def all(self) -> list[User]:
        return sorted(self._users.values(), key=lambda u: u.principal)
