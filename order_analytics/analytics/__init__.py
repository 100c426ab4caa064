"""
Product Analytics Module
"""
from .snapshot import CatalogSnapshot, Product
from .exceptions import AnalyticsError, InvalidArgumentError
from .ranking import rank_products
from .aggregation import (
    advanced_category_statistics,
    category_statistics,
    products_above_category_average,
)
from .trends import monthly_creation_trends, products_created_between, trend_points
from .distribution import inventory_analysis, price_distribution
from .search import find_products_in_price_range, search_products
from .dashboard import build_dashboard, performance_snapshot

__all__ = [
    "CatalogSnapshot",
    "Product",
    "AnalyticsError",
    "InvalidArgumentError",
    "rank_products",
    "category_statistics",
    "advanced_category_statistics",
    "products_above_category_average",
    "monthly_creation_trends",
    "products_created_between",
    "trend_points",
    "price_distribution",
    "inventory_analysis",
    "search_products",
    "find_products_in_price_range",
    "build_dashboard",
    "performance_snapshot",
]
