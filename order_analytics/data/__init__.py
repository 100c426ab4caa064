"""
Data Generation Module
"""
from .generators import ProductGenerator

__all__ = ["ProductGenerator"]
