"""
Pydantic schemas for catalog products.

The catalog is static and read-only; these models only describe its shape.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    """A purchasable catalog product."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(
        ...,
        description="Unique product identifier referenced by recommended_ids",
        min_length=1,
        examples=["p1"]
    )
    name: str = Field(
        ...,
        description="Commercial product name",
        examples=["PocketPhone A1"]
    )
    price: float = Field(
        ...,
        description="Price in USD",
        ge=0,
        examples=[299]
    )
    category: str = Field(
        ...,
        description="Lower-case product category",
        examples=["phone", "camera", "audio"]
    )
    features: List[str] = Field(
        default_factory=list,
        description="Short feature labels in display order",
        examples=[["5.5in", "64GB", "dual-sim"]]
    )


class ProductListResponse(BaseModel):
    """Response model for GET /api/products."""

    products: List[Product] = Field(
        ...,
        description="The full static catalog"
    )
