"""
Static product catalog.

Defined once per process and never mutated.
"""

from typing import Tuple

from recommender.schemas.products import Product

PRODUCTS: Tuple[Product, ...] = (
    Product(id="p1", name="PocketPhone A1", price=299, category="phone", features=["5.5in", "64GB", "dual-sim"]),
    Product(id="p2", name="PocketPhone Pro", price=549, category="phone", features=["6.2in", "128GB", "fast-charge"]),
    Product(id="p3", name="BudgetPhone B2", price=199, category="phone", features=["5.0in", "32GB"]),
    Product(id="p4", name="CameraZoom X", price=699, category="camera", features=["50MP", "optical-zoom"]),
    Product(id="p5", name="WorkTablet T1", price=429, category="tablet", features=["10in", "64GB"]),
    Product(id="p6", name="Lifestyle Earbuds", price=89, category="audio", features=["noise-cancel", "bluetooth 5.2"]),
)


def get_catalog() -> Tuple[Product, ...]:
    """Return the static catalog."""
    return PRODUCTS
