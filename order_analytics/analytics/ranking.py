"""
Product Ranking

Ordinal price rankings of active products, inside each category and across
the whole catalog. Ties on price are broken by product id ascending so the
ranking is fully determined by the snapshot.
"""

from decimal import Decimal, ROUND_HALF_UP
from itertools import groupby
from typing import Dict, List, Optional

import structlog

from .grouping import CENT, category_averages, category_sort_key, quantize_money
from .results import ProductRanking
from .snapshot import CatalogSnapshot, Product

logger = structlog.get_logger(__name__)


def price_ratio(price: Decimal, average: Optional[Decimal]) -> Optional[Decimal]:
    """Price relative to its category average, or None when the average is not positive."""
    if average is None or average <= 0:
        return None
    return (price / average).quantize(CENT, rounding=ROUND_HALF_UP)


def _by_price(product: Product):
    return (-product.price, product.id)


def _category_ranks(products: List[Product]) -> Dict[int, int]:
    ordered = sorted(
        products,
        key=lambda p: (category_sort_key(p.category), -p.price, p.id),
    )
    ranks: Dict[int, int] = {}
    for _, members in groupby(ordered, key=lambda p: p.category):
        for position, product in enumerate(members, start=1):
            ranks[product.id] = position
    return ranks


def rank_products(snapshot: CatalogSnapshot) -> List[ProductRanking]:
    """
    Rank active products by price.

    Returns:
        Rankings ordered by category (absent category last), then
        category rank.
    """
    active = snapshot.active_products()

    category_rank = _category_ranks(active)
    overall_rank = {
        product.id: position
        for position, product in enumerate(sorted(active, key=_by_price), start=1)
    }
    averages = category_averages(active)

    rankings = []
    for product in active:
        average = averages.get(product.category)
        rankings.append(
            ProductRanking(
                id=product.id,
                name=product.name,
                category=product.category,
                price=product.price,
                stock_quantity=product.stock_quantity,
                created_at=product.created_at,
                category_rank=category_rank[product.id],
                overall_rank=overall_rank[product.id],
                category_average_price=quantize_money(average) if average is not None else None,
                price_ratio=price_ratio(product.price, average),
            )
        )

    rankings.sort(key=lambda r: (category_sort_key(r.category), r.category_rank))
    logger.info("Product rankings computed", products=len(rankings))
    return rankings
