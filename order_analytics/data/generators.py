"""
Synthetic Catalog Generator

Generates a realistic product catalog for development and testing, including
inactive and uncategorised products so every analytics branch has data.
"""

import random
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional

import numpy as np
import polars as pl
from faker import Faker


CATEGORIES = {
    "Elektronik": ["Laptop", "Monitor", "Webcam", "Keyboard", "Mouse", "Headphones"],
    "Möbel": ["Desk", "Office Chair", "Shelf", "Cabinet"],
    "Beleuchtung": ["Desk Lamp", "Floor Lamp", "LED Strip"],
    "Bürobedarf": ["Notebook", "Pen Set", "Stapler", "Folder"],
    "Audio": ["Speaker", "Earbuds", "Microphone"],
}

# Lognormal price parameters per category (mean, sigma of the underlying normal)
PRICE_PROFILES = {
    "Elektronik": (5.0, 0.9),
    "Möbel": (5.3, 0.6),
    "Beleuchtung": (3.8, 0.5),
    "Bürobedarf": (2.7, 0.6),
    "Audio": (4.6, 0.8),
}


class ProductGenerator:
    """Generate a product catalog as a polars DataFrame"""

    def __init__(
        self,
        seed: int = 42,
        inactive_rate: float = 0.1,
        uncategorised_rate: float = 0.05,
        now: Optional[datetime] = None,
    ):
        self.rng = np.random.default_rng(seed)
        self.random = random.Random(seed)
        self.fake = Faker()
        self.fake.seed_instance(seed)
        self.inactive_rate = inactive_rate
        self.uncategorised_rate = uncategorised_rate
        self.now = now or datetime.now().replace(microsecond=0)

    def _price(self, category: Optional[str]) -> Decimal:
        mean, sigma = PRICE_PROFILES.get(category, (4.0, 1.0))
        value = float(self.rng.lognormal(mean, sigma))
        return Decimal(f"{value:.2f}")

    def generate(self, n: int = 200) -> pl.DataFrame:
        """Generate n products with ids 1..n, created over the last two years"""
        products = []

        for product_id in range(1, n + 1):
            category = self.random.choice(list(CATEGORIES))
            kind = self.random.choice(CATEGORIES[category])
            if self.random.random() < self.uncategorised_rate:
                category = None

            created_at = self.now - timedelta(
                days=int(self.rng.integers(0, 730)),
                seconds=int(self.rng.integers(0, 86400)),
            )

            products.append({
                "id": product_id,
                "name": f"{self.fake.last_name()} {kind}",
                "description": self.fake.sentence(nb_words=10),
                "price": self._price(category),
                "stock_quantity": int(self.rng.poisson(20)),
                "category": category,
                "image_url": f"/images/{kind.lower().replace(' ', '-')}.jpg",
                "active": self.random.random() >= self.inactive_rate,
                "created_at": created_at,
            })

        return pl.DataFrame(products)
