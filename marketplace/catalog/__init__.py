"""Catalog — товары и их остатки."""

from .catalog import ProductCatalog

__all__ = ["ProductCatalog"]
