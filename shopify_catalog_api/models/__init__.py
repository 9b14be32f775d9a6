"""Data models for Shopify responses and the flattened catalog format."""

from .shopify_models import (
    Metafield,
    MetafieldEdge,
    MetafieldConnection,
    Variant,
    VariantEdge,
    VariantConnection,
    Product,
    ProductEdge,
    PageInfo,
    ProductConnection,
    ProductsResponse,
)
from .catalog_models import (
    TransformedMetafields,
    CatalogVariant,
    CatalogProduct,
    CatalogData,
    ResponseMetadata,
    ProductsEnvelope,
    HealthStatus,
)

__all__ = [
    "Metafield",
    "MetafieldEdge",
    "MetafieldConnection",
    "Variant",
    "VariantEdge",
    "VariantConnection",
    "Product",
    "ProductEdge",
    "PageInfo",
    "ProductConnection",
    "ProductsResponse",
    "TransformedMetafields",
    "CatalogVariant",
    "CatalogProduct",
    "CatalogData",
    "ResponseMetadata",
    "ProductsEnvelope",
    "HealthStatus",
]
