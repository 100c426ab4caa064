"""
API Dependencies
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from order_analytics.analytics.snapshot import CatalogSnapshot
from order_analytics.config import Settings, get_settings
from order_analytics.database.catalog import load_catalog
from order_analytics.database.connection import get_db_dependency


async def get_catalog_snapshot(
    db: AsyncSession = Depends(get_db_dependency),
) -> CatalogSnapshot:
    """Load one consistent catalog snapshot for the current request."""
    return await load_catalog(db)


def get_app_settings() -> Settings:
    return get_settings()
