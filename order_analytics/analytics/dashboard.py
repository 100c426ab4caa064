"""
Analytics Dashboard

Combines the category, inventory, price and trend views of one snapshot
into a single report with timing metadata.
"""

import time
from datetime import datetime
from typing import Optional

import structlog

from .aggregation import advanced_category_statistics
from .distribution import inventory_analysis, price_distribution
from .results import DashboardReport, PerformanceSnapshot
from .snapshot import CatalogSnapshot
from .trends import monthly_creation_trends

logger = structlog.get_logger(__name__)


def performance_snapshot(
    snapshot: CatalogSnapshot,
    started: Optional[float] = None,
) -> PerformanceSnapshot:
    """
    Catalog counts plus elapsed wall-clock time.

    Args:
        snapshot: Catalog to count
        started: ``time.perf_counter()`` reading to time from; defaults to now,
            which times the counting itself
    """
    if started is None:
        started = time.perf_counter()

    total = len(snapshot)
    active = len(snapshot.active_products())
    categories = {p.category for p in snapshot if p.category is not None}
    elapsed_ms = (time.perf_counter() - started) * 1000

    return PerformanceSnapshot(
        total_products=total,
        active_products=active,
        category_count=len(categories),
        query_execution_time_ms=round(elapsed_ms, 3),
        timestamp=datetime.now(),
    )


def build_dashboard(
    snapshot: CatalogSnapshot,
    now: Optional[datetime] = None,
    currency: str = "€",
    trend_window_months: int = 12,
) -> DashboardReport:
    """
    Assemble the analytics dashboard for one snapshot.

    Every section reads the same snapshot, so the report is consistent
    across views.
    """
    started = time.perf_counter()
    now = now or datetime.now()

    report = DashboardReport(
        category_statistics=advanced_category_statistics(snapshot, min_product_count=1),
        inventory_analysis=inventory_analysis(snapshot),
        price_distribution=price_distribution(snapshot, currency=currency),
        monthly_trends=monthly_creation_trends(snapshot, now=now, window_months=trend_window_months),
        performance_metrics=performance_snapshot(snapshot, started=started),
        generated_at=now,
    )

    logger.info(
        "Dashboard analytics generated",
        duration_ms=report.performance_metrics.query_execution_time_ms,
        categories=len(report.category_statistics),
    )
    return report
