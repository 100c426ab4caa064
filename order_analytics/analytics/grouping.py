"""
Grouping Helpers

Shared building blocks for the per-category views: category ordering, a
single-pass accumulator per group and money rounding.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, Optional, Tuple

from .snapshot import Product

CENT = Decimal("0.01")


def category_sort_key(category: Optional[str]) -> Tuple[bool, str]:
    """Order categories alphabetically with the absent category last."""
    return (category is None, category or "")


def quantize_money(value: Decimal) -> Decimal:
    """Round a monetary value to cents, half up."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass
class GroupAccumulator:
    """Running aggregates for one group of products"""
    count: int = 0
    price_sum: Decimal = Decimal("0")
    value_sum: Decimal = Decimal("0")
    stock_sum: int = 0
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None

    def add(self, product: Product) -> None:
        self.count += 1
        self.price_sum += product.price
        self.value_sum += product.stock_value
        self.stock_sum += product.stock_quantity
        if self.min_price is None or product.price < self.min_price:
            self.min_price = product.price
        if self.max_price is None or product.price > self.max_price:
            self.max_price = product.price

    @property
    def average_price(self) -> Decimal:
        """Exact mean price; callers round for presentation"""
        return self.price_sum / self.count

    @property
    def average_value(self) -> Decimal:
        return self.value_sum / self.count


def accumulate_by_category(products: Iterable[Product]) -> Dict[Optional[str], GroupAccumulator]:
    """Group products by category in one pass."""
    groups: Dict[Optional[str], GroupAccumulator] = {}
    for product in products:
        groups.setdefault(product.category, GroupAccumulator()).add(product)
    return groups


def category_averages(products: Iterable[Product]) -> Dict[Optional[str], Decimal]:
    """Exact average price per category."""
    return {
        category: acc.average_price
        for category, acc in accumulate_by_category(products).items()
    }
