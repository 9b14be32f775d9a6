"""Flatten Shopify GraphQL products into the catalog output format."""

import json
from typing import Iterable, List

from .models.shopify_models import MetafieldEdge, Product, Variant
from .models.catalog_models import CatalogProduct, CatalogVariant, TransformedMetafields

# Metafield types whose value is a JSON document
STRUCTURED_METAFIELD_TYPES = frozenset({"json", "list.metaobject_reference"})


def extract_id(gid: str) -> str:
    """Return the trailing numeric part of a GID ("gid://shopify/Product/123" -> "123")."""
    return gid.rsplit("/", 1)[-1]


def metafield_key(namespace: str, key: str) -> str:
    """Composite key identifying a metafield within its owner."""
    return f"{namespace}.{key}"


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def decode_json_value(raw: str):
    """Decode a strict JSON document, returning ``raw`` unchanged if it does not parse."""
    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except (TypeError, ValueError, RecursionError):
        return raw


def transform_metafields(edges: Iterable[MetafieldEdge]) -> TransformedMetafields:
    """
    Collapse metafield edges into a ``namespace.key`` mapping.

    Values of structured types are decoded as JSON, falling back to the raw
    string when the value does not parse. A later edge with the same key
    replaces an earlier one.
    """
    result: TransformedMetafields = {}

    for edge in edges:
        metafield = edge.node
        value = metafield.value
        if metafield.type in STRUCTURED_METAFIELD_TYPES:
            value = decode_json_value(metafield.value)
        result[metafield_key(metafield.namespace, metafield.key)] = value

    return result


def transform_variant(variant: Variant) -> CatalogVariant:
    """Copy scalar fields and flatten the variant's metafields."""
    return CatalogVariant(
        id=variant.id,
        title=variant.title,
        sku=variant.sku,
        price=variant.price,
        inventory_quantity=variant.inventory_quantity,
        metafields=transform_metafields(variant.metafields.edges),
    )


def transform_product(product: Product) -> CatalogProduct:
    """Copy scalar fields and tags, flatten metafields and transform each variant."""
    return CatalogProduct(
        id=product.id,
        title=product.title,
        handle=product.handle,
        status=product.status,
        product_type=product.product_type,
        vendor=product.vendor,
        tags=list(product.tags),
        metafields=transform_metafields(product.metafields.edges),
        variants=[transform_variant(edge.node) for edge in product.variants.edges],
    )


def transform_products(products: Iterable[Product]) -> List[CatalogProduct]:
    """Transform products in order."""
    return [transform_product(product) for product in products]
