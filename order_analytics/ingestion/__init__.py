"""
Catalog Ingestion Module
"""
from .seed_db import insert_products, seed_products

__all__ = ["insert_products", "seed_products"]
