"""
Database Module
"""
from .connection import init_database, close_database, get_db, get_db_dependency
from .models import Base, ProductRecord
from .catalog import load_catalog

__all__ = [
    "init_database",
    "close_database",
    "get_db",
    "get_db_dependency",
    "Base",
    "ProductRecord",
    "load_catalog",
]
