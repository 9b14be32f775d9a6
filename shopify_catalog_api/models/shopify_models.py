"""Pydantic models for Shopify Admin GraphQL responses."""

from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict


class Metafield(BaseModel):
    """Namespaced, typed custom attribute."""
    namespace: str
    key: str
    value: str
    type: str

    model_config = ConfigDict(frozen=True)


class MetafieldEdge(BaseModel):
    node: Metafield

    model_config = ConfigDict(frozen=True)


class MetafieldConnection(BaseModel):
    edges: List[MetafieldEdge] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class Variant(BaseModel):
    """Shopify product variant."""
    id: str
    title: str
    sku: Optional[str] = None
    price: Optional[str] = None
    inventory_quantity: Optional[int] = Field(None, alias="inventoryQuantity")
    metafields: MetafieldConnection = Field(default_factory=MetafieldConnection)

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class VariantEdge(BaseModel):
    node: Variant

    model_config = ConfigDict(frozen=True)


class VariantConnection(BaseModel):
    edges: List[VariantEdge] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class Product(BaseModel):
    """Shopify product with its metafields and variants."""
    id: str
    title: str
    handle: str
    status: Optional[str] = None
    product_type: Optional[str] = Field(None, alias="productType")
    vendor: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    metafields: MetafieldConnection = Field(default_factory=MetafieldConnection)
    variants: VariantConnection = Field(default_factory=VariantConnection)

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class ProductEdge(BaseModel):
    node: Product
    cursor: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class PageInfo(BaseModel):
    """Whether more products exist and the cursor to fetch them."""
    has_next_page: bool = Field(alias="hasNextPage")
    end_cursor: Optional[str] = Field(None, alias="endCursor")

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class ProductConnection(BaseModel):
    edges: List[ProductEdge] = Field(default_factory=list)
    page_info: PageInfo = Field(alias="pageInfo")

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class ProductsResponse(BaseModel):
    """``data`` payload of the products query."""
    products: ProductConnection

    model_config = ConfigDict(frozen=True)
