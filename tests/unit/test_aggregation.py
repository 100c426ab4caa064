"""
Unit Tests - Category Aggregation
"""
from decimal import Decimal

import pytest

from order_analytics.analytics import (
    CatalogSnapshot,
    InvalidArgumentError,
    advanced_category_statistics,
    category_statistics,
    products_above_category_average,
)


class TestCategoryStatistics:
    """Tests for category_statistics"""

    def test_counts_and_order(self, catalog_snapshot):
        """Test categories are ordered by product count, then name, absent last"""
        stats = category_statistics(catalog_snapshot)

        assert [(s.category, s.product_count) for s in stats] == [
            ("Elektronik", 3),
            ("Möbel", 2),
            ("Bürobedarf", 1),
            (None, 1),
        ]

    def test_counts_cover_active_products(self, catalog_snapshot):
        """Test every active product is counted exactly once"""
        stats = category_statistics(catalog_snapshot, min_product_count=0)
        assert sum(s.product_count for s in stats) == len(catalog_snapshot.active_products())

    def test_average_price_rounded(self, catalog_snapshot):
        """Test averages are rounded to cents"""
        stats = {s.category: s for s in category_statistics(catalog_snapshot)}

        assert stats["Elektronik"].average_price == Decimal("473.32")
        assert stats["Möbel"].average_price == Decimal("424.99")
        assert stats["Elektronik"].total_value is None

    def test_min_product_count(self, catalog_snapshot):
        """Test small categories are dropped"""
        stats = category_statistics(catalog_snapshot, min_product_count=2)
        assert [s.category for s in stats] == ["Elektronik", "Möbel"]

    def test_negative_min_count_rejected(self, catalog_snapshot):
        """Test a negative minimum is an invalid argument"""
        with pytest.raises(InvalidArgumentError) as exc_info:
            category_statistics(catalog_snapshot, min_product_count=-1)

        assert exc_info.value.parameter == "min_product_count"
        assert exc_info.value.status_code == 400

    def test_empty_snapshot(self):
        """Test empty input gives empty output"""
        assert category_statistics(CatalogSnapshot()) == []


class TestAdvancedCategoryStatistics:
    """Tests for advanced_category_statistics"""

    def test_ordered_by_total_value(self, catalog_snapshot):
        """Test groups follow total stock value, largest first"""
        stats = advanced_category_statistics(catalog_snapshot)

        assert [s.category for s in stats] == ["Elektronik", "Möbel", None, "Bürobedarf"]
        assert [s.total_value for s in stats] == [
            Decimal("23249.10"),
            Decimal("5999.83"),
            Decimal("799.80"),
            Decimal("799.60"),
        ]

    def test_full_fields(self, catalog_snapshot):
        """Test min, max and stock totals"""
        electronics = advanced_category_statistics(catalog_snapshot)[0]

        assert electronics.product_count == 3
        assert electronics.min_price == Decimal("29.99")
        assert electronics.max_price == Decimal("1299.99")
        assert electronics.total_stock == 90

    def test_min_product_count(self, catalog_snapshot):
        """Test the minimum size filter also applies here"""
        stats = advanced_category_statistics(catalog_snapshot, min_product_count=2)
        assert [s.category for s in stats] == ["Elektronik", "Möbel"]


class TestProductsAboveCategoryAverage:
    """Tests for products_above_category_average"""

    def test_abc_scenario(self, abc_snapshot):
        """Test only the product above its peers' average is returned"""
        assert [p.name for p in products_above_category_average(abc_snapshot)] == ["B"]

    def test_mixed_catalog(self, catalog_snapshot):
        """Test single-product categories never contribute"""
        result = products_above_category_average(catalog_snapshot)
        assert [p.name for p in result] == ["Laptop Pro", "Standing Desk"]

    def test_equal_prices_not_above(self, product_factory):
        """Test products priced exactly at the average are excluded"""
        snapshot = CatalogSnapshot([product_factory(1, "25"), product_factory(2, "25")])
        assert products_above_category_average(snapshot) == []
