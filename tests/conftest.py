"""Shared fixtures for catalog API tests."""

import json

import pytest

from shopify_catalog_api.config import AppConfig


def make_config(**overrides):
    data = {
        "shopify": {
            "shop_url": "https://mystore.myshopify.com/",
            "access_token": "shpat_test",
            "api_version": "2024-10",
        },
        "fetch": {"page_size": 2, "page_delay_seconds": 0.5},
    }
    data.update(overrides)
    return AppConfig(**data)


def metafield(namespace, key, value, type_="single_line_text_field"):
    return {"node": {"namespace": namespace, "key": key, "value": value, "type": type_}}


def sample_product(index=1):
    return {
        "id": f"gid://shopify/Product/{index}",
        "title": f"T-Shirt {index}",
        "handle": f"t-shirt-{index}",
        "status": "ACTIVE",
        "productType": "Apparel",
        "vendor": "BrandX",
        "tags": ["cotton", "summer"],
        "metafields": {
            "edges": [
                metafield("custom", "material", "Cotton"),
                metafield("custom", "care", json.dumps({"wash": "cold"}), "json"),
            ]
        },
        "variants": {
            "edges": [
                {
                    "node": {
                        "id": f"gid://shopify/ProductVariant/{index}1",
                        "title": "Red / Small",
                        "sku": "RS",
                        "price": "29.99",
                        "inventoryQuantity": 4,
                        "metafields": {"edges": [metafield("custom", "fit", "slim")]},
                    }
                },
                {
                    "node": {
                        "id": f"gid://shopify/ProductVariant/{index}2",
                        "title": "Blue / Large",
                        "sku": None,
                        "price": "39.99",
                        "inventoryQuantity": 0,
                        "metafields": {"edges": []},
                    }
                },
            ]
        },
    }


def products_page(nodes, has_next_page, end_cursor):
    return {
        "products": {
            "pageInfo": {"hasNextPage": has_next_page, "endCursor": end_cursor},
            "edges": [{"node": node} for node in nodes],
        }
    }


class RecordingSleep:
    """Awaitable sleep replacement that records requested delays."""

    def __init__(self):
        self.delays = []

    async def __call__(self, seconds):
        self.delays.append(seconds)


class ScriptedTransport:
    """Transport returning queued responses, raising queued exceptions."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    async def request(self, query, variables=None):
        self.calls.append(variables)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    async def close(self):
        return None


@pytest.fixture
def config():
    return make_config()


@pytest.fixture
def recording_sleep():
    return RecordingSleep()
