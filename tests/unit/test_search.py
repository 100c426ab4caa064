"""
Unit Tests - Product Search
"""
from decimal import Decimal

import pytest

from order_analytics.analytics import (
    CatalogSnapshot,
    InvalidArgumentError,
    find_products_in_price_range,
    search_products,
)


class TestSearchProducts:
    """Tests for search_products"""

    def test_name_matches_before_description_matches(self, product_factory):
        """Test relevance tiers"""
        snapshot = CatalogSnapshot([
            product_factory(1, 20, name="Mouse", description="works with any laptop"),
            product_factory(2, 900, name="Laptop Pro", description="fast"),
            product_factory(3, 5, name="Cable", description="usb"),
        ])
        page = search_products(snapshot, "lap")

        assert [p.name for p in page.items] == ["Laptop Pro", "Mouse"]
        assert page.total == 2

    def test_case_insensitive(self, catalog_snapshot):
        page = search_products(catalog_snapshot, "LAPTOP")
        assert [p.name for p in page.items] == ["Laptop Pro"]

    def test_alphabetical_within_tier(self, catalog_snapshot):
        """Test name matches are alphabetical, then description matches"""
        page = search_products(catalog_snapshot, "desk")
        assert [p.name for p in page.items] == ["LED Desk Lamp", "Standing Desk", "Office Chair"]

    def test_inactive_excluded(self, catalog_snapshot):
        assert search_products(catalog_snapshot, "notebook").total == 0

    def test_pagination(self, product_factory):
        """Test pages slice the ordered matches"""
        snapshot = CatalogSnapshot([
            product_factory(i, 10, name=f"Lamp {i}") for i in range(1, 6)
        ])

        first = search_products(snapshot, "lamp", page=0, page_size=2)
        last = search_products(snapshot, "lamp", page=2, page_size=2)

        assert [p.name for p in first.items] == ["Lamp 1", "Lamp 2"]
        assert [p.name for p in last.items] == ["Lamp 5"]
        assert first.total == last.total == 5
        assert first.total_pages == 3

    def test_page_past_end(self, catalog_snapshot):
        """Test a page beyond the matches is empty but reports the total"""
        page = search_products(catalog_snapshot, "desk", page=5, page_size=10)

        assert page.items == []
        assert page.total == 3

    def test_idempotent(self, catalog_snapshot):
        """Test repeating a search gives the same page"""
        assert search_products(catalog_snapshot, "e") == search_products(catalog_snapshot, "e")

    @pytest.mark.parametrize("kwargs,parameter", [
        ({"term": None}, "query"),
        ({"term": "lamp", "page": -1}, "page"),
        ({"term": "lamp", "page_size": 0}, "size"),
        ({"term": "lamp", "page_size": -5}, "size"),
    ])
    def test_invalid_arguments(self, catalog_snapshot, kwargs, parameter):
        with pytest.raises(InvalidArgumentError) as exc_info:
            search_products(catalog_snapshot, **kwargs)
        assert exc_info.value.parameter == parameter


class TestFindProductsInPriceRange:
    """Tests for find_products_in_price_range"""

    def test_category_and_range(self, catalog_snapshot):
        """Test inclusive range, cheapest first"""
        products = find_products_in_price_range(
            catalog_snapshot, "Elektronik", Decimal("20"), Decimal("89.99")
        )
        assert [p.name for p in products] == ["Wireless Mouse", "Mechanical Keyboard"]

    def test_out_of_stock_excluded(self, product_factory):
        snapshot = CatalogSnapshot([
            product_factory(1, 10, stock_quantity=0),
            product_factory(2, 12, stock_quantity=1),
        ])
        products = find_products_in_price_range(snapshot, "X", Decimal("0"), Decimal("100"))
        assert [p.id for p in products] == [2]

    def test_inverted_range_rejected(self, catalog_snapshot):
        with pytest.raises(InvalidArgumentError):
            find_products_in_price_range(catalog_snapshot, "Elektronik", Decimal("100"), Decimal("10"))
