"""Identity — реестр участников маркетплейса."""

from .registry import IdentityRegistry

__all__ = ["IdentityRegistry"]
