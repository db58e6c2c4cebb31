"""
ReportsView — агрегаты поверх MarketView

Только чтение: отчёты считаются по снапшоту и не могут публиковать
товары, менять заказы или выставлять оценки.

Отчёты:
- top_sellers / top_buyers — по накопленной репутации
- best_selling_products — по количеству единиц в активных заказах
- category_stats — товары, заказы, единицы и выручка по категориям
- orders_per_user — число активных заказов как покупателя и как продавца
"""

from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List

from marketplace.core.domain import Product, User
from marketplace.reporting.view import MarketView


DEFAULT_TOP_LIMIT = 5


@dataclass(frozen=True)
class ProductSales:
    product: Product
    units_sold: int
    orders: int


@dataclass(frozen=True)
class CategoryStats:
    category: str
    products: int
    orders: int
    units_sold: int
    revenue: int


@dataclass(frozen=True)
class UserOrderCount:
    principal: str
    as_buyer: int
    as_seller: int

    @property
    def total(self) -> int:
        return self.as_buyer + self.as_seller


class ReportsView:
    """Отчёты маркетплейса (read-only)."""

    def __init__(self, view: MarketView):
        self._view = view

    def top_sellers(self, limit: int = DEFAULT_TOP_LIMIT) -> List[User]:
        """Продавцы (SELLER/BOTH) с наибольшей reputation_as_seller."""
        sellers = [u for u in self._view.users if u.role.can_sell]
        sellers.sort(key=lambda u: (-u.reputation_as_seller, u.principal))
        return sellers[:limit]

    def top_buyers(self, limit: int = DEFAULT_TOP_LIMIT) -> List[User]:
        """Покупатели (BUYER/BOTH) с наибольшей reputation_as_buyer."""
        buyers = [u for u in self._view.users if u.role.can_buy]
        buyers.sort(key=lambda u: (-u.reputation_as_buyer, u.principal))
        return buyers[:limit]

    def best_selling_products(self, limit: int = DEFAULT_TOP_LIMIT) -> List[ProductSales]:
        """Товары по убыванию проданных единиц (товары без продаж не включаются)."""
        units: Dict[int, int] = defaultdict(int)
        counts: Dict[int, int] = defaultdict(int)
        for order in self._view.orders:
            if not order.is_active:
                continue
            units[order.product_id] += order.quantity
            counts[order.product_id] += 1

        sales = [
            ProductSales(product=p, units_sold=units[p.id], orders=counts[p.id])
            for p in self._view.products
            if units.get(p.id)
        ]
        sales.sort(key=lambda s: (-s.units_sold, s.product.id))
        return sales[:limit]

    def category_stats(self) -> Dict[str, CategoryStats]:
        products_by_id = {p.id: p for p in self._view.products}

        product_count: Dict[str, int] = defaultdict(int)
        for product in self._view.products:
            product_count[product.category] += 1

        orders: Dict[str, int] = defaultdict(int)
        units: Dict[str, int] = defaultdict(int)
        revenue: Dict[str, int] = defaultdict(int)
        for order in self._view.orders:
            product = products_by_id.get(order.product_id)
            if product is None or not order.is_active:
                continue
            orders[product.category] += 1
            units[product.category] += order.quantity
            revenue[product.category] += order.quantity * product.price

        return {
            category: CategoryStats(
                category=category,
                products=count,
                orders=orders[category],
                units_sold=units[category],
                revenue=revenue[category],
            )
            for category, count in sorted(product_count.items())
        }

    def orders_per_user(self) -> Dict[str, UserOrderCount]:
        as_buyer: Dict[str, int] = defaultdict(int)
        as_seller: Dict[str, int] = defaultdict(int)
        for order in self._view.orders:
            if not order.is_active:
                continue
            as_buyer[order.buyer] += 1
            as_seller[order.seller] += 1

        return {
            user.principal: UserOrderCount(
                principal=user.principal,
                as_buyer=as_buyer[user.principal],
                as_seller=as_seller[user.principal],
            )
            for user in self._view.users
        }
