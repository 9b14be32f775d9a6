"""FastAPI application factory."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from .client import ShopifyGraphQLClient
from .config import AppConfig
from .fetcher import CatalogFetcher, GraphQLTransport
from .router import get_catalog_router
from .telemetry import init_metrics


def create_app(config: AppConfig, client: Optional[GraphQLTransport] = None) -> FastAPI:
    """
    Create the catalog API application.

    Args:
        config: Application configuration
        client: Optional transport (e.g., MockShopifyClient). When omitted a
            ShopifyGraphQLClient is created and closed with the app.

    Returns:
        FastAPI app ready to run

    Example:
        app = create_app(AppConfig.from_env())

        # Run with uvicorn:
        # uvicorn app:app --host 0.0.0.0 --port 3000
    """
    transport = client if client is not None else ShopifyGraphQLClient(config.shopify)
    fetcher = CatalogFetcher(transport, config.fetch)

    if config.server.enable_metrics:
        init_metrics()

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        yield
        if client is None:
            await transport.close()

    app = FastAPI(title="Shopify Catalog API", lifespan=lifespan)
    app.state.config = config
    app.state.fetcher = fetcher
    app.include_router(get_catalog_router(fetcher, config.response))
    return app
