"""
Test Suite Configuration
"""
from datetime import datetime
from decimal import Decimal

import polars as pl
import pytest
from fastapi.testclient import TestClient

from order_analytics.analytics import CatalogSnapshot, Product
from order_analytics.serving.api import create_api_app
from order_analytics.serving.api.dependencies import get_catalog_snapshot

NOW = datetime(2025, 6, 15, 12, 0, 0)


@pytest.fixture
def now() -> datetime:
    """Fixed reference time for trend windows"""
    return NOW


@pytest.fixture
def product_factory():
    """Build Product instances with sensible defaults"""
    def make(
        id: int,
        price,
        category="X",
        name=None,
        description=None,
        stock_quantity: int = 10,
        active: bool = True,
        created_at: datetime = NOW,
    ) -> Product:
        return Product(
            id=id,
            name=name or f"Product {id}",
            description=description,
            price=Decimal(str(price)),
            stock_quantity=stock_quantity,
            category=category,
            active=active,
            created_at=created_at,
        )
    return make


@pytest.fixture
def abc_snapshot(product_factory) -> CatalogSnapshot:
    """A=100 and B=300 in category X, C=50 in category Y"""
    return CatalogSnapshot([
        product_factory(1, "100", "X", name="A"),
        product_factory(2, "300", "X", name="B"),
        product_factory(3, "50", "Y", name="C"),
    ])


@pytest.fixture
def catalog_snapshot(product_factory) -> CatalogSnapshot:
    """
    Mixed catalog: three categories, one uncategorised product, one inactive
    product and one product created outside the default trend window.
    """
    return CatalogSnapshot([
        product_factory(1, "1299.99", "Elektronik", name="Laptop Pro",
                        description="High-performance laptop for professionals",
                        stock_quantity=15, created_at=datetime(2025, 5, 10, 9, 0)),
        product_factory(2, "29.99", "Elektronik", name="Wireless Mouse",
                        description="Ergonomic cordless mouse",
                        stock_quantity=50, created_at=datetime(2025, 5, 20, 14, 30)),
        product_factory(3, "89.99", "Elektronik", name="Mechanical Keyboard",
                        description="Gaming keyboard with mechanical switches",
                        stock_quantity=25, created_at=datetime(2025, 4, 2, 8, 15)),
        product_factory(4, "249.99", "Möbel", name="Office Chair",
                        description="Ergonomic chair that fits under any desk",
                        stock_quantity=12, created_at=datetime(2025, 3, 15, 10, 0)),
        product_factory(5, "599.99", "Möbel", name="Standing Desk",
                        description="Height adjustable desk",
                        stock_quantity=5, created_at=datetime(2024, 11, 30, 16, 45)),
        product_factory(6, "39.99", None, name="LED Desk Lamp",
                        description="Dimmable LED lamp",
                        stock_quantity=20, created_at=datetime(2025, 6, 1, 11, 0)),
        product_factory(7, "12.99", "Bürobedarf", name="Notebook A4",
                        description="Squared paper notebook",
                        stock_quantity=3, active=False, created_at=datetime(2025, 1, 10, 9, 0)),
        product_factory(8, "19.99", "Bürobedarf", name="Pen Set",
                        description="Set of five pens",
                        stock_quantity=40, created_at=datetime(2023, 1, 1, 12, 0)),
    ])


@pytest.fixture
def sample_products_df() -> pl.DataFrame:
    """Sample products DataFrame"""
    return pl.DataFrame({
        "id": [3, 1, 2],
        "name": ["Monitor Stand", "Wireless Mouse", "USB Keyboard"],
        "description": ["Adjustable stand", None, "Full-size keyboard"],
        "price": [39.99, 29.99, 49.99],
        "stock_quantity": [25, 100, 50],
        "category": ["home_garden", "electronics", "electronics"],
        "active": [True, True, False],
        "created_at": [
            datetime(2025, 1, 1, 10, 0),
            datetime(2025, 1, 15, 14, 30),
            datetime(2025, 1, 20, 9, 15),
        ],
    })


@pytest.fixture
def api_client(catalog_snapshot) -> TestClient:
    """API client serving the mixed catalog instead of the database"""
    app = create_api_app()
    app.dependency_overrides[get_catalog_snapshot] = lambda: catalog_snapshot
    return TestClient(app)
