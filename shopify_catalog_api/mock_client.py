"""Mock Shopify GraphQL client for sandbox mode."""

import json
from typing import Any, Dict, List, Optional


def sample_product(index: int) -> Dict[str, Any]:
    """Build one raw GraphQL product node."""
    return {
        "id": f"gid://shopify/Product/{1000 + index}",
        "title": f"Mock T-Shirt {index}",
        "handle": f"mock-t-shirt-{index}",
        "status": "ACTIVE",
        "productType": "Apparel",
        "vendor": "MockBrand",
        "tags": ["mock", "cotton"],
        "metafields": {
            "edges": [
                {"node": {"namespace": "custom", "key": "material", "value": "Cotton", "type": "single_line_text_field"}},
                {"node": {"namespace": "custom", "key": "care", "value": json.dumps({"wash": "cold"}), "type": "json"}},
            ]
        },
        "variants": {
            "edges": [
                {
                    "node": {
                        "id": f"gid://shopify/ProductVariant/{5000 + index}",
                        "title": "Red / Small",
                        "sku": f"RS-{index}",
                        "price": "29.99",
                        "inventoryQuantity": 10,
                        "metafields": {"edges": []},
                    }
                }
            ]
        },
    }


class MockShopifyClient:
    """
    In-memory GraphQL transport that pages through a fixed catalog.

    Cursors are the string index of the last product in a page.
    """

    def __init__(self, products: Optional[List[Dict[str, Any]]] = None, product_count: int = 3):
        self.products = products if products is not None else [sample_product(i) for i in range(product_count)]
        self.calls: List[Dict[str, Any]] = []

    async def request(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        variables = variables or {}
        self.calls.append(variables)

        start = int(variables["cursor"]) + 1 if variables.get("cursor") else 0
        limit = variables.get("limit") or 50
        page = self.products[start:start + limit]
        end = start + len(page)

        return {
            "products": {
                "pageInfo": {
                    "hasNextPage": end < len(self.products),
                    "endCursor": str(end - 1) if page else None,
                },
                "edges": [{"cursor": str(start + i), "node": node} for i, node in enumerate(page)],
            }
        }

    async def close(self) -> None:
        return None
