"""
Unit Tests - Synthetic Catalog Generator
"""
from datetime import datetime
from decimal import Decimal

from order_analytics.analytics import CatalogSnapshot, price_distribution
from order_analytics.data.generators import CATEGORIES, ProductGenerator

NOW = datetime(2025, 6, 15, 12, 0, 0)


class TestProductGenerator:
    """Tests for ProductGenerator"""

    def test_generate_columns(self):
        """Test generated frame shape and columns"""
        df = ProductGenerator(now=NOW).generate(50)

        assert len(df) == 50
        for column in ["id", "name", "description", "price", "stock_quantity",
                       "category", "image_url", "active", "created_at"]:
            assert column in df.columns
        assert df["id"].to_list() == list(range(1, 51))

    def test_values_in_range(self):
        df = ProductGenerator(now=NOW).generate(100)

        assert all(price > 0 for price in df["price"].to_list())
        assert df["stock_quantity"].min() >= 0
        assert all(created <= NOW for created in df["created_at"].to_list())
        assert set(df["category"].drop_nulls().to_list()) <= set(CATEGORIES)

    def test_reproducible_with_seed(self):
        """Test the same seed gives the same catalog"""
        first = ProductGenerator(seed=7, now=NOW).generate(20)
        second = ProductGenerator(seed=7, now=NOW).generate(20)

        assert first["name"].to_list() == second["name"].to_list()
        assert first["price"].to_list() == second["price"].to_list()

    def test_rates_respected(self):
        """Test zero rates give only active, categorised products"""
        df = ProductGenerator(inactive_rate=0.0, uncategorised_rate=0.0, now=NOW).generate(30)

        assert all(df["active"].to_list())
        assert df["category"].null_count() == 0

    def test_snapshot_from_generated_frame(self):
        """Test a generated frame feeds the analytics engine"""
        snapshot = CatalogSnapshot.from_frame(ProductGenerator(now=NOW).generate(60))
        buckets = price_distribution(snapshot)

        assert len(snapshot) == 60
        assert isinstance(snapshot.products[0].price, Decimal)
        assert sum(b.product_count for b in buckets) == len(snapshot.active_products())
