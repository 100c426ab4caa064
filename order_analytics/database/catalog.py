"""
Catalog Loader

Reads the products table into an immutable CatalogSnapshot.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from order_analytics.analytics.snapshot import CatalogSnapshot, Product
from order_analytics.database.models import ProductRecord

logger = structlog.get_logger(__name__)


def to_product(record: ProductRecord) -> Product:
    """Detach an ORM row into an analytics Product."""
    return Product(
        id=record.id,
        name=record.name,
        description=record.description,
        price=record.price,
        stock_quantity=record.stock_quantity,
        category=record.category,
        active=record.active,
        created_at=record.created_at,
        image_url=record.image_url,
    )


async def load_catalog(db: AsyncSession) -> CatalogSnapshot:
    """
    Load every product, active or not, in a single query.

    One statement means every view computed from the snapshot sees the
    same state of the table.
    """
    result = await db.execute(select(ProductRecord).order_by(ProductRecord.id))
    snapshot = CatalogSnapshot(to_product(r) for r in result.scalars().all())
    logger.debug("Catalog snapshot loaded", products=len(snapshot))
    return snapshot
