"""
Catalog Snapshot

Immutable, point-in-time view of the product catalog. Every analytics
operation takes one snapshot as its only data input.
"""

from dataclasses import asdict, dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Iterable, Iterator, List, Mapping, Optional, Tuple

import polars as pl

from .exceptions import InvalidArgumentError


@dataclass(frozen=True)
class Product:
    """A catalog product as seen by the analytics engine"""
    id: int
    name: str
    price: Decimal
    stock_quantity: int
    created_at: datetime
    description: Optional[str] = None
    category: Optional[str] = None
    active: bool = True
    image_url: Optional[str] = None

    @property
    def stock_value(self) -> Decimal:
        """Price times units in stock"""
        return self.price * self.stock_quantity

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Product":
        """Build a product from a row-like mapping, coercing price to Decimal."""
        price = data["price"]
        if not isinstance(price, Decimal):
            price = Decimal(str(price))
        active = data.get("active")
        return cls(
            id=int(data["id"]),
            name=data["name"],
            description=data.get("description"),
            price=price,
            stock_quantity=int(data.get("stock_quantity") or 0),
            category=data.get("category"),
            active=True if active is None else bool(active),
            created_at=data["created_at"],
            image_url=data.get("image_url"),
        )


# Column types of an exported empty snapshot
FRAME_SCHEMA = {
    "id": pl.Int64,
    "name": pl.String,
    "price": pl.Decimal(scale=2),
    "stock_quantity": pl.Int64,
    "created_at": pl.Datetime,
    "description": pl.String,
    "category": pl.String,
    "active": pl.Boolean,
    "image_url": pl.String,
}


class CatalogSnapshot:
    """
    Frozen collection of products.

    Products are kept in id order so that every derived view is
    deterministic for a given snapshot.
    """

    __slots__ = ("_products",)

    def __init__(self, products: Iterable[Product] = ()):
        ordered = sorted(products, key=lambda p: p.id)
        for previous, current in zip(ordered, ordered[1:]):
            if previous.id == current.id:
                raise InvalidArgumentError("id", "Product ids must be unique within a snapshot", current.id)
        self._products: Tuple[Product, ...] = tuple(ordered)

    def __iter__(self) -> Iterator[Product]:
        return iter(self._products)

    def __len__(self) -> int:
        return len(self._products)

    def __repr__(self) -> str:
        return f"CatalogSnapshot(products={len(self._products)})"

    @property
    def products(self) -> Tuple[Product, ...]:
        return self._products

    def active_products(self) -> List[Product]:
        """Products that take part in analytic views"""
        return [p for p in self._products if p.active]

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "CatalogSnapshot":
        return cls(Product.from_mapping(r) for r in records)

    @classmethod
    def from_frame(cls, df: pl.DataFrame) -> "CatalogSnapshot":
        """
        Build a snapshot from a polars DataFrame.

        The frame needs at least id, name, price, stock_quantity and
        created_at columns; optional columns default as on Product.
        """
        return cls.from_records(df.iter_rows(named=True))

    def to_frame(self) -> pl.DataFrame:
        """Export the products as a polars DataFrame, one row per product in id order."""
        if not self._products:
            return pl.DataFrame(schema=FRAME_SCHEMA)
        return pl.DataFrame([asdict(p) for p in self._products], infer_schema_length=None)
