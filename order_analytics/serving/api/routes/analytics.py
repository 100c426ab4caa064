"""
Analytics API Endpoints

REST API for product analytics and the analytics dashboard. Every endpoint
computes its view from one catalog snapshot loaded for the request.
"""

from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
import structlog

from order_analytics.analytics import (
    CatalogSnapshot,
    advanced_category_statistics,
    build_dashboard,
    category_statistics,
    find_products_in_price_range,
    inventory_analysis,
    monthly_creation_trends,
    performance_snapshot,
    price_distribution,
    products_above_category_average,
    products_created_between,
    rank_products,
    search_products,
    trend_points,
)
from order_analytics.analytics.results import (
    CategoryStatistics as CategoryStatisticsResult,
    InventoryRow as InventoryRowResult,
    PerformanceSnapshot,
    PriceDistributionBucket as PriceBucketResult,
)
from order_analytics.config import Settings
from order_analytics.serving.api.dependencies import get_app_settings, get_catalog_snapshot
from order_analytics.serving.api.routes.products import ProductResponse

router = APIRouter()
logger = structlog.get_logger(__name__)


def _money(value: Optional[Decimal]) -> Optional[float]:
    return float(value) if value is not None else None


class ProductRankingResponse(BaseModel):
    """Product with category and overall price rank"""
    id: int
    name: str
    category: Optional[str]
    price: float
    stock_quantity: int
    created_at: datetime
    category_rank: int
    overall_rank: int
    category_average_price: Optional[float]
    price_ratio: Optional[float]


class CategoryStatisticsResponse(BaseModel):
    """Per-category statistics"""
    category: Optional[str]
    product_count: int
    average_price: float
    total_value: Optional[float] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    total_stock: Optional[int] = None

    @classmethod
    def from_result(cls, stats: CategoryStatisticsResult) -> "CategoryStatisticsResponse":
        return cls(
            category=stats.category,
            product_count=stats.product_count,
            average_price=float(stats.average_price),
            total_value=_money(stats.total_value),
            min_price=_money(stats.min_price),
            max_price=_money(stats.max_price),
            total_stock=stats.total_stock,
        )


class InventoryRowResponse(BaseModel):
    """Inventory value of one category"""
    category: Optional[str]
    product_count: int
    total_stock: int
    inventory_value: float
    average_product_value: float

    @classmethod
    def from_result(cls, row: InventoryRowResult) -> "InventoryRowResponse":
        return cls(
            category=row.category,
            product_count=row.product_count,
            total_stock=row.total_stock,
            inventory_value=float(row.inventory_value),
            average_product_value=float(row.average_product_value),
        )


class PriceBucketResponse(BaseModel):
    """Products in one price tier"""
    price_category: str
    product_count: int
    average_price: float

    @classmethod
    def from_result(cls, bucket: PriceBucketResult) -> "PriceBucketResponse":
        return cls(
            price_category=bucket.label,
            product_count=bucket.product_count,
            average_price=float(bucket.average_price),
        )


class TrendPointResponse(BaseModel):
    """Products created in one month"""
    month: str
    product_count: int


class PerformanceResponse(BaseModel):
    """Catalog counts and timing"""
    total_products: int
    active_products: int
    category_count: int
    query_execution_time_ms: float
    timestamp: datetime

    @classmethod
    def from_result(cls, perf: PerformanceSnapshot) -> "PerformanceResponse":
        return cls(
            total_products=perf.total_products,
            active_products=perf.active_products,
            category_count=perf.category_count,
            query_execution_time_ms=perf.query_execution_time_ms,
            timestamp=perf.timestamp,
        )


class SearchResponse(BaseModel):
    """Paginated search results"""
    items: List[ProductResponse]
    total: int
    page: int
    page_size: int
    total_pages: int


class DashboardResponse(BaseModel):
    """Combined analytics dashboard"""
    category_statistics: List[CategoryStatisticsResponse]
    inventory_analysis: List[InventoryRowResponse]
    price_distribution: List[PriceBucketResponse]
    monthly_trends: Dict[str, int]
    performance_metrics: PerformanceResponse
    generated_at: datetime


@router.get("/product-rankings", response_model=List[ProductRankingResponse])
async def get_product_rankings(
    snapshot: CatalogSnapshot = Depends(get_catalog_snapshot),
) -> List[ProductRankingResponse]:
    """Rank active products by price within their category and overall."""
    return [
        ProductRankingResponse(
            id=r.id,
            name=r.name,
            category=r.category,
            price=float(r.price),
            stock_quantity=r.stock_quantity,
            created_at=r.created_at,
            category_rank=r.category_rank,
            overall_rank=r.overall_rank,
            category_average_price=_money(r.category_average_price),
            price_ratio=_money(r.price_ratio),
        )
        for r in rank_products(snapshot)
    ]


@router.get("/category-statistics", response_model=List[CategoryStatisticsResponse])
async def get_category_statistics(
    min_product_count: int = Query(1),
    snapshot: CatalogSnapshot = Depends(get_catalog_snapshot),
) -> List[CategoryStatisticsResponse]:
    """Category counts and average prices, dropping categories below a minimum size."""
    return [
        CategoryStatisticsResponse.from_result(s)
        for s in category_statistics(snapshot, min_product_count=min_product_count)
    ]


@router.get("/category-statistics/advanced", response_model=List[CategoryStatisticsResponse])
async def get_advanced_category_statistics(
    snapshot: CatalogSnapshot = Depends(get_catalog_snapshot),
) -> List[CategoryStatisticsResponse]:
    """Full category statistics ordered by total stock value."""
    return [
        CategoryStatisticsResponse.from_result(s)
        for s in advanced_category_statistics(snapshot)
    ]


@router.get("/products/above-average", response_model=List[ProductResponse])
async def get_products_above_category_average(
    snapshot: CatalogSnapshot = Depends(get_catalog_snapshot),
) -> List[ProductResponse]:
    """Products priced above their category's average."""
    return [ProductResponse.from_product(p) for p in products_above_category_average(snapshot)]


@router.get("/products/time-range", response_model=List[ProductResponse])
async def get_products_by_time_range(
    start_date: datetime = Query(...),
    end_date: datetime = Query(...),
    snapshot: CatalogSnapshot = Depends(get_catalog_snapshot),
) -> List[ProductResponse]:
    """Active products created in a date range, newest first."""
    return [
        ProductResponse.from_product(p)
        for p in products_created_between(snapshot, start_date, end_date)
    ]


@router.get("/trends/monthly", response_model=Dict[str, int])
async def get_monthly_creation_trends(
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    snapshot: CatalogSnapshot = Depends(get_catalog_snapshot),
    settings: Settings = Depends(get_app_settings),
) -> Dict[str, int]:
    """Products created per month over the trailing window."""
    return monthly_creation_trends(
        snapshot,
        start=start_date,
        end=end_date,
        window_months=settings.analytics.trend_window_months,
    )


@router.get("/trends/monthly/series", response_model=List[TrendPointResponse])
async def get_monthly_creation_series(
    snapshot: CatalogSnapshot = Depends(get_catalog_snapshot),
    settings: Settings = Depends(get_app_settings),
) -> List[TrendPointResponse]:
    """Monthly creation counts as an ordered series for charting."""
    trends = monthly_creation_trends(snapshot, window_months=settings.analytics.trend_window_months)
    return [
        TrendPointResponse(month=p.month, product_count=p.product_count)
        for p in trend_points(trends)
    ]


@router.get("/search/advanced", response_model=SearchResponse)
async def search_products_advanced(
    query: str,
    page: int = Query(0),
    size: Optional[int] = Query(None),
    snapshot: CatalogSnapshot = Depends(get_catalog_snapshot),
    settings: Settings = Depends(get_app_settings),
) -> SearchResponse:
    """Relevance-ordered product search; name matches rank before description matches."""
    page_size = size if size is not None else settings.analytics.default_page_size
    page_size = min(page_size, settings.analytics.max_page_size)

    result = search_products(snapshot, query, page=page, page_size=page_size)
    return SearchResponse(
        items=[ProductResponse.from_product(p) for p in result.items],
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        total_pages=result.total_pages,
    )


@router.get("/products/optimized", response_model=List[ProductResponse])
async def find_products_optimized(
    category: str,
    min_price: Decimal = Query(...),
    max_price: Decimal = Query(...),
    snapshot: CatalogSnapshot = Depends(get_catalog_snapshot),
) -> List[ProductResponse]:
    """In-stock products of a category within a price range, cheapest first."""
    return [
        ProductResponse.from_product(p)
        for p in find_products_in_price_range(snapshot, category, min_price, max_price)
    ]


@router.get("/inventory", response_model=List[InventoryRowResponse])
async def get_inventory_analysis(
    snapshot: CatalogSnapshot = Depends(get_catalog_snapshot),
) -> List[InventoryRowResponse]:
    """Stock and inventory value per category."""
    return [InventoryRowResponse.from_result(r) for r in inventory_analysis(snapshot)]


@router.get("/price-distribution", response_model=List[PriceBucketResponse])
async def get_price_distribution(
    snapshot: CatalogSnapshot = Depends(get_catalog_snapshot),
    settings: Settings = Depends(get_app_settings),
) -> List[PriceBucketResponse]:
    """Active products per price tier."""
    return [
        PriceBucketResponse.from_result(b)
        for b in price_distribution(snapshot, currency=settings.analytics.currency_symbol)
    ]


@router.get("/performance", response_model=PerformanceResponse)
async def get_performance_metrics(
    snapshot: CatalogSnapshot = Depends(get_catalog_snapshot),
) -> PerformanceResponse:
    """Catalog counts with the time taken to compute them."""
    perf = performance_snapshot(snapshot)
    logger.info(
        "Performance metrics generated",
        query_time_ms=perf.query_execution_time_ms,
        total_products=perf.total_products,
    )
    return PerformanceResponse.from_result(perf)


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard_analytics(
    snapshot: CatalogSnapshot = Depends(get_catalog_snapshot),
    settings: Settings = Depends(get_app_settings),
) -> DashboardResponse:
    """Category, inventory, price and trend views in one response."""
    report = build_dashboard(
        snapshot,
        currency=settings.analytics.currency_symbol,
        trend_window_months=settings.analytics.trend_window_months,
    )
    return DashboardResponse(
        category_statistics=[CategoryStatisticsResponse.from_result(s) for s in report.category_statistics],
        inventory_analysis=[InventoryRowResponse.from_result(r) for r in report.inventory_analysis],
        price_distribution=[PriceBucketResponse.from_result(b) for b in report.price_distribution],
        monthly_trends=report.monthly_trends,
        performance_metrics=PerformanceResponse.from_result(report.performance_metrics),
        generated_at=report.generated_at,
    )
