"""Reporting — read-only снапшот и отчёты маркетплейса."""

from .reports import CategoryStats, ProductSales, ReportsView, UserOrderCount
from .view import MarketView

__all__ = [
    "MarketView",
    "ReportsView",
    "ProductSales",
    "CategoryStats",
    "UserOrderCount",
]
