"""
Price and Inventory Distribution

Bucketing of active products into fixed price tiers, and per-category
inventory value.
"""

from decimal import Decimal
from typing import Dict, List, NamedTuple, Optional

import structlog

from .exceptions import InvalidArgumentError
from .grouping import GroupAccumulator, accumulate_by_category, category_sort_key, quantize_money
from .results import InventoryRow, PriceDistributionBucket
from .snapshot import CatalogSnapshot

logger = structlog.get_logger(__name__)


class PriceTier(NamedTuple):
    """Price tier covering [lower, upper); upper None means unbounded"""
    lower: Decimal
    upper: Optional[Decimal]
    label_format: str

    def contains(self, price: Decimal) -> bool:
        return price >= self.lower and (self.upper is None or price < self.upper)

    def label(self, currency: str) -> str:
        return self.label_format.format(currency=currency)


PRICE_TIERS = (
    PriceTier(Decimal("-Infinity"), Decimal("50"), "Budget (< 50{currency})"),
    PriceTier(Decimal("50"), Decimal("200"), "Mid-Range (50-200{currency})"),
    PriceTier(Decimal("200"), Decimal("500"), "Premium (200-500{currency})"),
    PriceTier(Decimal("500"), None, "Luxury (> 500{currency})"),
)


def tier_for(price: Decimal) -> PriceTier:
    """
    The tier a price falls in.

    Raises:
        InvalidArgumentError: If the price is not a number
    """
    if not price.is_nan():
        for tier in PRICE_TIERS:
            if tier.contains(price):
                return tier
    raise InvalidArgumentError("price", "Price does not fall in any price tier", price)


def price_distribution(snapshot: CatalogSnapshot, currency: str = "€") -> List[PriceDistributionBucket]:
    """
    Count and average price of active products per price tier.

    Empty tiers are omitted; buckets are ordered by average price ascending.
    """
    tiers: Dict[str, GroupAccumulator] = {}
    for product in snapshot.active_products():
        tier = tier_for(product.price)
        tiers.setdefault(tier.label(currency), GroupAccumulator()).add(product)

    buckets = [
        PriceDistributionBucket(
            label=label,
            product_count=acc.count,
            average_price=quantize_money(acc.average_price),
        )
        for label, acc in tiers.items()
    ]
    buckets.sort(key=lambda b: b.average_price)

    logger.info("Price distribution computed", buckets=len(buckets))
    return buckets


def inventory_analysis(snapshot: CatalogSnapshot) -> List[InventoryRow]:
    """
    Stock totals and inventory value (price x stock) per category.

    Returns:
        Rows ordered by inventory value, largest first
    """
    groups = accumulate_by_category(snapshot.active_products())

    rows = [
        InventoryRow(
            category=category,
            product_count=acc.count,
            total_stock=acc.stock_sum,
            inventory_value=acc.value_sum,
            average_product_value=quantize_money(acc.average_value),
        )
        for category, acc in groups.items()
    ]
    rows.sort(key=lambda r: (-r.inventory_value, category_sort_key(r.category)))

    logger.info("Inventory analysis computed", categories=len(rows))
    return rows
