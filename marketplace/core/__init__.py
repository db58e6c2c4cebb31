"""
Core domain models, contracts, errors and configuration.

This module contains the foundational building blocks that are independent
of storage and of the engine's components.
"""

from marketplace.core.config import EngineConfig, configure_logging
from marketplace.core.errors import ErrorKind, MarketplaceError

__all__ = [
    "EngineConfig",
    "configure_logging",
    "ErrorKind",
    "MarketplaceError",
]
