"""Paginated product fetching from the Shopify Admin GraphQL API."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Protocol

from pydantic import BaseModel, Field, ValidationError

from .config import FetchConfig
from .errors import UpstreamError
from .models.shopify_models import Product, ProductsResponse
from .queries import PRODUCTS_QUERY
from .retry import call_with_retry

logger = logging.getLogger("shopify_catalog_api.fetcher")


class GraphQLTransport(Protocol):
    async def request(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        ...


class FetchResult(BaseModel):
    """
    Products accumulated by a fetch.

    ``error`` is set when a page failed after some products had already been
    collected; the products fetched up to that point are still returned.
    """
    products: List[Product] = Field(default_factory=list)
    total_count: int = 0
    has_next_page: bool = False
    end_cursor: Optional[str] = None
    pages_fetched: int = 0
    error: Optional[str] = None

    @property
    def is_partial(self) -> bool:
        return self.error is not None


class CatalogFetcher:
    """Walks the products connection page by page."""

    def __init__(
        self,
        client: GraphQLTransport,
        config: Optional[FetchConfig] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        """
        Initialize the fetcher.

        Args:
            client: Transport exposing ``request(query, variables)``
            config: Pagination and retry settings
            sleep: Awaitable sleep used for page delays and retry backoff
        """
        self.client = client
        self.config = config or FetchConfig()
        self.sleep = sleep

    async def _fetch_page(self, cursor: Optional[str], page_size: int) -> ProductsResponse:
        variables = {"cursor": cursor, "limit": page_size}
        data = await call_with_retry(
            lambda: self.client.request(PRODUCTS_QUERY, variables),
            self.config.max_attempts,
            base_delay=self.config.retry_base_delay_seconds,
            sleep=self.sleep,
        )
        try:
            return ProductsResponse.model_validate(data)
        except ValidationError as e:
            raise UpstreamError(f"Unexpected products response shape: {e}") from e

    async def fetch_all_products(
        self,
        cursor: Optional[str] = None,
        page_size: Optional[int] = None,
        max_items: Optional[int] = None,
    ) -> FetchResult:
        """
        Fetch every product reachable from ``cursor``.

        Paging stops when Shopify reports no next page, or when at least
        ``max_items`` products are held. Whole pages are kept, so the result
        can exceed ``max_items`` by up to one page.

        Args:
            cursor: Cursor to start after (None for the beginning)
            page_size: Products per request (defaults to config)
            max_items: Optional cap on products (defaults to config)

        Returns:
            FetchResult with the accumulated products

        Raises:
            CatalogError: If a page fails before any product is held. The
                error from the retry wrapper propagates unchanged.
        """
        page_size = page_size or self.config.page_size
        if max_items is None:
            max_items = self.config.max_products

        products: List[Product] = []
        has_next_page = True
        pages_fetched = 0
        error: Optional[str] = None

        logger.info("Starting product fetch", extra={"page_size": page_size, "max_items": max_items})

        while has_next_page and (max_items is None or len(products) < max_items):
            try:
                page = await self._fetch_page(cursor, page_size)
            except Exception as e:
                logger.error("Error fetching products: %s", e)
                if products:
                    logger.warning("Returning %d products fetched before error", len(products))
                    error = str(e)
                    break
                raise

            batch = [edge.node for edge in page.products.edges]
            products.extend(batch)
            has_next_page = page.products.page_info.has_next_page
            cursor = page.products.page_info.end_cursor
            pages_fetched += 1

            logger.info(
                "Fetched page %d: %d products (Total: %d)",
                pages_fetched, len(batch), len(products),
            )

            if has_next_page:
                await self.sleep(self.config.page_delay_seconds)

        logger.info("Fetch complete", extra={"total": len(products), "pages": pages_fetched})

        return FetchResult(
            products=products,
            total_count=len(products),
            has_next_page=has_next_page,
            end_cursor=cursor,
            pages_fetched=pages_fetched,
            error=error,
        )
