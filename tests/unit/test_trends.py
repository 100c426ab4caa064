"""
Unit Tests - Creation Trends
"""
from datetime import datetime, timedelta, timezone

import pytest

from order_analytics.analytics import (
    CatalogSnapshot,
    InvalidArgumentError,
    monthly_creation_trends,
    products_created_between,
    trend_points,
)
from order_analytics.analytics.trends import months_before


class TestMonthlyCreationTrends:
    """Tests for monthly_creation_trends"""

    def test_default_window(self, catalog_snapshot, now):
        """Test the trailing twelve months, inactive products included"""
        trends = monthly_creation_trends(catalog_snapshot, now=now)

        assert trends == {
            "2024-11": 1,
            "2025-01": 1,
            "2025-03": 1,
            "2025-04": 1,
            "2025-05": 2,
            "2025-06": 1,
        }
        assert list(trends) == sorted(trends)

    def test_explicit_range(self, catalog_snapshot):
        """Test explicit bounds override the window"""
        trends = monthly_creation_trends(
            catalog_snapshot,
            start=datetime(2023, 1, 1),
            end=datetime(2023, 12, 31),
        )
        assert trends == {"2023-01": 1}

    def test_bounds_are_inclusive(self, product_factory):
        """Test products created exactly on a bound are counted"""
        start, end = datetime(2025, 1, 1), datetime(2025, 2, 1)
        snapshot = CatalogSnapshot([
            product_factory(1, 10, created_at=start),
            product_factory(2, 10, created_at=end),
            product_factory(3, 10, created_at=end + timedelta(seconds=1)),
        ])

        assert monthly_creation_trends(snapshot, start=start, end=end) == {"2025-01": 1, "2025-02": 1}

    def test_timezone_aware_bounds(self, catalog_snapshot):
        """Test aware bounds are compared in UTC"""
        trends = monthly_creation_trends(
            catalog_snapshot,
            start=datetime(2025, 5, 1, tzinfo=timezone.utc),
            end=datetime(2025, 5, 31, tzinfo=timezone.utc),
        )
        assert trends == {"2025-05": 2}

    def test_start_after_end_rejected(self, catalog_snapshot):
        """Test an inverted range is an invalid argument"""
        with pytest.raises(InvalidArgumentError):
            monthly_creation_trends(
                catalog_snapshot,
                start=datetime(2025, 6, 1),
                end=datetime(2025, 1, 1),
            )

    def test_empty_snapshot(self, now):
        """Test empty input gives an empty mapping"""
        assert monthly_creation_trends(CatalogSnapshot(), now=now) == {}


class TestMonthsBefore:
    """Tests for months_before"""

    def test_whole_year(self):
        assert months_before(datetime(2025, 6, 15, 12), 12) == datetime(2024, 6, 15, 12)

    def test_day_clamped_to_month_end(self):
        assert months_before(datetime(2024, 3, 31), 1) == datetime(2024, 2, 29)
        assert months_before(datetime(2025, 3, 31), 1) == datetime(2025, 2, 28)

    def test_crosses_year_boundary(self):
        assert months_before(datetime(2025, 1, 10), 2) == datetime(2024, 11, 10)


def test_trend_points():
    """Test the series form keeps month order"""
    points = trend_points({"2025-02": 3, "2025-01": 1})
    assert [(p.month, p.product_count) for p in points] == [("2025-01", 1), ("2025-02", 3)]


class TestProductsCreatedBetween:
    """Tests for products_created_between"""

    def test_newest_first(self, catalog_snapshot):
        """Test active products in range, newest first"""
        products = products_created_between(
            catalog_snapshot,
            datetime(2025, 4, 1),
            datetime(2025, 5, 31),
        )
        assert [p.id for p in products] == [2, 1, 3]

    def test_inactive_excluded(self, catalog_snapshot):
        """Test inactive products are not listed"""
        products = products_created_between(
            catalog_snapshot,
            datetime(2025, 1, 1),
            datetime(2025, 1, 31),
        )
        assert products == []

    def test_start_after_end_rejected(self, catalog_snapshot):
        """Test an inverted range is an invalid argument"""
        with pytest.raises(InvalidArgumentError) as exc_info:
            products_created_between(catalog_snapshot, datetime(2025, 2, 1), datetime(2025, 1, 1))
        assert exc_info.value.parameter == "start_date"
