"""
Product Search

Relevance-ordered substring search over active products, and the
category/price-range finder.
"""

from decimal import Decimal
from typing import List, Optional

import structlog

from .exceptions import InvalidArgumentError
from .results import SearchPage
from .snapshot import CatalogSnapshot, Product

logger = structlog.get_logger(__name__)

NAME_MATCH = 1
DESCRIPTION_MATCH = 2


def relevance_tier(product: Product, needle: str) -> Optional[int]:
    """
    Match tier of a product for a lower-cased search term.

    Returns:
        NAME_MATCH, DESCRIPTION_MATCH, or None when the product does not match
    """
    if needle in product.name.lower():
        return NAME_MATCH
    if product.description and needle in product.description.lower():
        return DESCRIPTION_MATCH
    return None


def search_products(
    snapshot: CatalogSnapshot,
    term: str,
    page: int = 0,
    page_size: int = 10,
) -> SearchPage:
    """
    Case-insensitive search on product name and description.

    Name matches rank before description-only matches; within a tier results
    are alphabetical by name. A page past the last match is empty but still
    reports the total.

    Args:
        snapshot: Catalog to search
        term: Substring to look for
        page: 0-based page index
        page_size: Results per page

    Raises:
        InvalidArgumentError: On a missing term, negative page or non-positive page size
    """
    if term is None:
        raise InvalidArgumentError("query", "Search term is required")
    if page < 0:
        raise InvalidArgumentError("page", "Page index must not be negative", page)
    if page_size <= 0:
        raise InvalidArgumentError("size", "Page size must be positive", page_size)

    needle = term.lower()
    matches = []
    for product in snapshot.active_products():
        tier = relevance_tier(product, needle)
        if tier is not None:
            matches.append((tier, product.name.lower(), product.name, product.id, product))
    matches.sort(key=lambda m: m[:4])

    offset = page * page_size
    items = [m[-1] for m in matches[offset:offset + page_size]]

    logger.info(
        "Product search completed",
        term=term,
        page=page,
        page_size=page_size,
        total=len(matches),
        returned=len(items),
    )
    return SearchPage(items=items, total=len(matches), page=page, page_size=page_size)


def find_products_in_price_range(
    snapshot: CatalogSnapshot,
    category: str,
    min_price: Decimal,
    max_price: Decimal,
) -> List[Product]:
    """Active, in-stock products of one category priced within [min_price, max_price], cheapest first."""
    if min_price > max_price:
        raise InvalidArgumentError(
            "min_price",
            "Minimum price must not exceed maximum price",
            f"{min_price} > {max_price}",
        )

    products = [
        p for p in snapshot.active_products()
        if p.category == category
        and p.stock_quantity > 0
        and min_price <= p.price <= max_price
    ]
    products.sort(key=lambda p: (p.price, p.id))

    logger.info(
        "Category price range search completed",
        category=category,
        min_price=str(min_price),
        max_price=str(max_price),
        products=len(products),
    )
    return products
