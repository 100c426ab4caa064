"""
Creation Trends

Time-based views of the catalog: monthly product creation counts over a
trailing window, and the products created in a date range.
"""

from collections import Counter
from datetime import datetime, timezone
from typing import Dict, List, Optional

import structlog

from .exceptions import InvalidArgumentError
from .results import TrendPoint
from .snapshot import CatalogSnapshot, Product

logger = structlog.get_logger(__name__)


def _naive_utc(value: datetime) -> datetime:
    """Drop timezone info so stored (naive) timestamps can be compared."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def months_before(moment: datetime, months: int) -> datetime:
    """Shift a timestamp back by whole months, clamping the day to the target month."""
    month_index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = moment.day
    while True:
        try:
            return moment.replace(year=year, month=month, day=day)
        except ValueError:
            day -= 1


def _check_range(start: datetime, end: datetime) -> None:
    if start > end:
        raise InvalidArgumentError(
            "start_date",
            "Start of the time range must not be after its end",
            f"{start.isoformat()} > {end.isoformat()}",
        )


def monthly_creation_trends(
    snapshot: CatalogSnapshot,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    now: Optional[datetime] = None,
    window_months: int = 12,
) -> Dict[str, int]:
    """
    Count products created per calendar month.

    Every product counts, active or not. Bounds are inclusive; by default the
    window is the trailing ``window_months`` months ending now. Months with no
    products are absent from the result.

    Returns:
        Mapping of "YYYY-MM" to product count, in ascending month order
    """
    end = _naive_utc(end or now or datetime.now())
    start = _naive_utc(start) if start is not None else months_before(end, window_months)
    _check_range(start, end)

    counts = Counter(
        stamp.strftime("%Y-%m")
        for stamp in (_naive_utc(p.created_at) for p in snapshot)
        if start <= stamp <= end
    )
    trends = dict(sorted(counts.items()))

    logger.info(
        "Monthly creation trends computed",
        months=len(trends),
        start=start.isoformat(),
        end=end.isoformat(),
    )
    return trends


def trend_points(trends: Dict[str, int]) -> List[TrendPoint]:
    """Series form of a monthly trend mapping."""
    return [TrendPoint(month=month, product_count=count) for month, count in sorted(trends.items())]


def products_created_between(
    snapshot: CatalogSnapshot,
    start: datetime,
    end: datetime,
) -> List[Product]:
    """Active products created in [start, end], newest first."""
    start, end = _naive_utc(start), _naive_utc(end)
    _check_range(start, end)

    products = [
        p for p in snapshot.active_products()
        if start <= _naive_utc(p.created_at) <= end
    ]
    products.sort(key=lambda p: _naive_utc(p.created_at), reverse=True)

    logger.info("Products in time range found", products=len(products))
    return products
