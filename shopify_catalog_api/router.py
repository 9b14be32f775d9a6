"""FastAPI router serving the flattened product catalog."""

from typing import Optional
from datetime import datetime, timezone
from time import perf_counter
import logging
from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from .config import ResponseConfig
from .fetcher import CatalogFetcher
from .models.catalog_models import CatalogData, HealthStatus, ProductsEnvelope, ResponseMetadata
from .telemetry import get_products_returned_counter, get_request_duration_histogram
from .transformer import transform_products

logger = logging.getLogger("shopify_catalog_api")


def utc_timestamp() -> str:
    """Current UTC time as ISO 8601 with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_execution_time(seconds: float) -> str:
    return f"{seconds:.1f}s"


def envelope_to_json(envelope: ProductsEnvelope) -> dict:
    """Serialize an envelope, leaving out ``error`` and ``metadata.warning`` when unset."""
    content = envelope.model_dump(mode="json", by_alias=True)
    if content.get("error") is None:
        content.pop("error", None)
    if content["metadata"].get("warning") is None:
        content["metadata"].pop("warning", None)
    return content


def get_catalog_router(fetcher: CatalogFetcher, response_config: Optional[ResponseConfig] = None) -> APIRouter:
    """
    Create a FastAPI router for the catalog endpoints.

    Args:
        fetcher: Fetcher used to page through Shopify products
        response_config: Envelope options

    Returns:
        APIRouter with ``/health`` and ``/api/products``
    """
    router = APIRouter(tags=["catalog"])
    response_config = response_config or ResponseConfig()
    duration_histogram = get_request_duration_histogram()
    products_counter = get_products_returned_counter()

    @router.get("/health")
    async def health():
        """Liveness probe."""
        return HealthStatus(timestamp=utc_timestamp()).model_dump()

    @router.get("/api/products")
    async def get_products(cursor: Optional[str] = Query(None, description="Cursor to start after")):
        """Fetch every product with its variants and metafields."""
        start = perf_counter()
        logger.info("API Request: GET /api/products", extra={"cursor": cursor})

        try:
            result = await fetcher.fetch_all_products(cursor=cursor)
            logger.info("Transforming data...")
            products = transform_products(result.products)
        except Exception as e:
            logger.exception("Error processing request: %s", e)
            envelope = ProductsEnvelope(
                success=False,
                data=CatalogData(),
                metadata=ResponseMetadata(fetched_at=utc_timestamp(), execution_time="0s"),
                error=str(e) or "Unknown error occurred",
            )
            return JSONResponse(status_code=500, content=envelope_to_json(envelope))

        elapsed = perf_counter() - start

        if response_config.report_pagination:
            has_next_page, next_cursor = result.has_next_page, result.end_cursor
        else:
            has_next_page, next_cursor = False, None

        envelope = ProductsEnvelope(
            success=True,
            data=CatalogData(
                products=products,
                total_count=len(products),
                has_next_page=has_next_page,
                cursor=next_cursor,
            ),
            metadata=ResponseMetadata(
                fetched_at=utc_timestamp(),
                execution_time=format_execution_time(elapsed),
                warning=result.error,
            ),
        )

        duration_ms = elapsed * 1000
        duration_histogram.record(duration_ms, attributes={"partial": result.is_partial})
        products_counter.add(len(products))
        logger.info(
            "Response ready",
            extra={"total_products": len(products), "duration_ms": duration_ms, "partial": result.is_partial},
        )

        return envelope_to_json(envelope)

    return router
