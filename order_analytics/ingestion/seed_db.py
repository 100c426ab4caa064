"""
Catalog Seeding

Creates the products table and fills it with a generated catalog.

Usage:
    python -m order_analytics.ingestion.seed_db --products 500
"""

import argparse
import asyncio
from typing import Any, Dict, List, Optional

import polars as pl
from sqlalchemy import delete, insert

from order_analytics.config.logging import configure_logging, get_logger
from order_analytics.data.generators import ProductGenerator
from order_analytics.database.connection import (
    close_database,
    create_tables,
    get_db,
    init_database,
)
from order_analytics.database.models import ProductRecord

logger = get_logger(__name__, component="seed")

CHUNK_SIZE = 1000


async def insert_products(records: List[Dict[str, Any]]) -> int:
    """Insert product rows in chunks; returns the number inserted"""
    if not records:
        return 0

    async with get_db() as db:
        for i in range(0, len(records), CHUNK_SIZE):
            await db.execute(insert(ProductRecord), records[i:i + CHUNK_SIZE])

    logger.info("Inserted products", table=ProductRecord.__tablename__, rows=len(records))
    return len(records)


async def seed_products(
    df: pl.DataFrame,
    replace: bool = False,
) -> int:
    """
    Load a product DataFrame into the products table.

    Args:
        df: Frame with the ProductRecord columns
        replace: Delete existing products first
    """
    await create_tables()

    if replace:
        async with get_db() as db:
            await db.execute(delete(ProductRecord))
        logger.info("Existing products removed")

    # Let the database assign ids so its sequence stays in step
    return await insert_products(df.drop("id").to_dicts())


async def main(count: int, replace: bool, url: Optional[str] = None) -> None:
    configure_logging()
    await init_database(url)
    try:
        df = ProductGenerator().generate(count)
        await seed_products(df, replace=replace)
    finally:
        await close_database()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the product catalog")
    parser.add_argument("--products", type=int, default=200, help="Number of products to generate")
    parser.add_argument("--replace", action="store_true", help="Delete existing products first")
    parser.add_argument("--database-url", default=None, help="Override the configured database URL")
    args = parser.parse_args()

    asyncio.run(main(args.products, args.replace, args.database_url))
