"""
Category Aggregation

Grouped statistics over active products and the peer-average filter. Each
view builds its per-category aggregates in a single pass and then filters or
sorts the groups.
"""

from typing import Dict, List, Optional

import structlog

from .exceptions import InvalidArgumentError
from .grouping import (
    GroupAccumulator,
    accumulate_by_category,
    category_averages,
    category_sort_key,
    quantize_money,
)
from .results import CategoryStatistics
from .snapshot import CatalogSnapshot, Product

logger = structlog.get_logger(__name__)


def _check_min_count(min_product_count: int) -> None:
    if min_product_count < 0:
        raise InvalidArgumentError(
            "min_product_count",
            "Minimum product count must not be negative",
            min_product_count,
        )


def category_statistics(
    snapshot: CatalogSnapshot,
    min_product_count: int = 1,
) -> List[CategoryStatistics]:
    """
    Count and average price per category.

    Args:
        snapshot: Catalog to aggregate
        min_product_count: Categories with fewer active products are dropped

    Returns:
        Statistics ordered by product count, largest first

    Raises:
        InvalidArgumentError: If min_product_count is negative
    """
    _check_min_count(min_product_count)
    groups = accumulate_by_category(snapshot.active_products())
    kept = [
        (category, acc) for category, acc in groups.items()
        if acc.count >= min_product_count
    ]
    kept.sort(key=lambda item: (-item[1].count, category_sort_key(item[0])))

    statistics = [
        CategoryStatistics(
            category=category,
            product_count=acc.count,
            average_price=quantize_money(acc.average_price),
        )
        for category, acc in kept
    ]
    logger.info(
        "Category statistics computed",
        categories=len(statistics),
        min_product_count=min_product_count,
    )
    return statistics


def _ordinal_ranks(groups: Dict[Optional[str], GroupAccumulator], key) -> Dict[Optional[str], int]:
    ordered = sorted(groups, key=lambda category: (key(groups[category]), category_sort_key(category)))
    return {category: rank for rank, category in enumerate(ordered, start=1)}


def advanced_category_statistics(
    snapshot: CatalogSnapshot,
    min_product_count: int = 1,
) -> List[CategoryStatistics]:
    """
    Full statistics per category, ordered by total stock value.

    Groups are ranked both by total value and by product count; the output
    follows the total value ranking.
    """
    _check_min_count(min_product_count)
    groups = {
        category: acc
        for category, acc in accumulate_by_category(snapshot.active_products()).items()
        if acc.count >= min_product_count
    }

    value_rank = _ordinal_ranks(groups, lambda acc: -acc.value_sum)
    count_rank = _ordinal_ranks(groups, lambda acc: -acc.count)
    logger.debug("Category ranks assigned", value_rank=value_rank, count_rank=count_rank)

    statistics = [
        CategoryStatistics(
            category=category,
            product_count=acc.count,
            average_price=quantize_money(acc.average_price),
            total_value=acc.value_sum,
            min_price=acc.min_price,
            max_price=acc.max_price,
            total_stock=acc.stock_sum,
        )
        for category, acc in sorted(groups.items(), key=lambda item: value_rank[item[0]])
    ]
    logger.info("Advanced category statistics computed", categories=len(statistics))
    return statistics


def products_above_category_average(snapshot: CatalogSnapshot) -> List[Product]:
    """
    Active products priced strictly above their own category's average.

    A category with a single product never contributes, since its only
    member is priced exactly at the average.
    """
    active = snapshot.active_products()
    averages = category_averages(active)

    above = [p for p in active if p.price > averages[p.category]]
    above.sort(key=lambda p: (category_sort_key(p.category), -p.price, p.id))

    logger.info("Products above category average found", products=len(above))
    return above
