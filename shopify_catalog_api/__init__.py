"""
Shopify Catalog API

An HTTP service that pages through a shop's products, variants and
metafields over the Shopify Admin GraphQL API and serves them as flat JSON.
"""

__version__ = "0.1.0"

from .app import create_app
from .client import ShopifyGraphQLClient
from .config import AppConfig
from .fetcher import CatalogFetcher, FetchResult
from .mock_client import MockShopifyClient
from .router import get_catalog_router

__all__ = [
    "create_app",
    "ShopifyGraphQLClient",
    "AppConfig",
    "CatalogFetcher",
    "FetchResult",
    "MockShopifyClient",
    "get_catalog_router",
]
