"""
Order Analytics Service

Product catalog backend with a read-only product analytics engine.
"""

__version__ = "1.0.0"
