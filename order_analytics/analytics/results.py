"""
Analytics Result Types

Value objects produced by the analytics operations. They are built fresh for
every call and carry no identity beyond their fields.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from .snapshot import Product


@dataclass(frozen=True)
class ProductRanking:
    """Product with its price rank inside its category and across the catalog"""
    id: int
    name: str
    category: Optional[str]
    price: Decimal
    stock_quantity: int
    created_at: datetime
    category_rank: int
    overall_rank: int
    category_average_price: Optional[Decimal]
    price_ratio: Optional[Decimal]


@dataclass(frozen=True)
class CategoryStatistics:
    """Grouped statistics for one category; advanced fields are None in the basic variant"""
    category: Optional[str]
    product_count: int
    average_price: Decimal
    total_value: Optional[Decimal] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    total_stock: Optional[int] = None


@dataclass(frozen=True)
class PriceDistributionBucket:
    """Active products falling in one price tier"""
    label: str
    product_count: int
    average_price: Decimal


@dataclass(frozen=True)
class InventoryRow:
    """Stock and inventory value of one category"""
    category: Optional[str]
    product_count: int
    total_stock: int
    inventory_value: Decimal
    average_product_value: Decimal


@dataclass(frozen=True)
class TrendPoint:
    """Number of products created in one calendar month"""
    month: str
    product_count: int


@dataclass(frozen=True)
class SearchPage:
    """One page of search results plus the total number of matches"""
    items: List[Product]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        if self.total == 0:
            return 0
        return (self.total + self.page_size - 1) // self.page_size


@dataclass(frozen=True)
class PerformanceSnapshot:
    """Catalog counts and wall-clock timing of a computation"""
    total_products: int
    active_products: int
    category_count: int
    query_execution_time_ms: float
    timestamp: datetime


@dataclass(frozen=True)
class DashboardReport:
    """Combined analytics dashboard"""
    category_statistics: List[CategoryStatistics]
    inventory_analysis: List[InventoryRow]
    price_distribution: List[PriceDistributionBucket]
    monthly_trends: Dict[str, int]
    performance_metrics: PerformanceSnapshot
    generated_at: datetime = field(default_factory=datetime.now)
