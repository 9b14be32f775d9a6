"""Pydantic models for the flattened catalog output and response envelope."""

from typing import Optional, List, Dict, Any
from pydantic import BaseModel, Field, ConfigDict


TransformedMetafields = Dict[str, Any]


class CatalogVariant(BaseModel):
    """Variant with metafields flattened to ``namespace.key`` entries."""
    id: str
    title: str
    sku: Optional[str] = None
    price: Optional[str] = None
    inventory_quantity: Optional[int] = Field(None, alias="inventoryQuantity")
    metafields: TransformedMetafields = Field(default_factory=dict)

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class CatalogProduct(BaseModel):
    """Product with flattened metafields and variants."""
    id: str
    title: str
    handle: str
    status: Optional[str] = None
    product_type: Optional[str] = Field(None, alias="productType")
    vendor: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    metafields: TransformedMetafields = Field(default_factory=dict)
    variants: List[CatalogVariant] = Field(default_factory=list)

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "gid://shopify/Product/123456",
                "title": "Premium T-Shirt",
                "handle": "premium-t-shirt",
                "status": "ACTIVE",
                "productType": "Apparel",
                "vendor": "BrandX",
                "tags": ["cotton", "summer"],
                "metafields": {
                    "custom.material": "Cotton",
                    "custom.care": {"wash": "cold"}
                },
                "variants": [
                    {
                        "id": "gid://shopify/ProductVariant/1",
                        "title": "Red / Small",
                        "sku": "RS",
                        "price": "29.99",
                        "inventoryQuantity": 10,
                        "metafields": {}
                    }
                ]
            }
        }
    )


class CatalogData(BaseModel):
    """``data`` section of the products envelope."""
    products: List[CatalogProduct] = Field(default_factory=list)
    total_count: int = Field(0, alias="totalCount")
    has_next_page: bool = Field(False, alias="hasNextPage")
    cursor: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class ResponseMetadata(BaseModel):
    fetched_at: str = Field(alias="fetchedAt")
    execution_time: str = Field(alias="executionTime")
    warning: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class ProductsEnvelope(BaseModel):
    """Top-level response of ``GET /api/products``."""
    success: bool
    data: CatalogData = Field(default_factory=CatalogData)
    metadata: ResponseMetadata
    error: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class HealthStatus(BaseModel):
    status: str = "ok"
    timestamp: str
