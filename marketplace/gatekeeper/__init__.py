"""Gatekeeper — проверки авторизации, выполняемые перед каждой мутацией."""

from .guard import AuthorizationGuard, GuardResult

__all__ = [
    "AuthorizationGuard",
    "GuardResult",
]
