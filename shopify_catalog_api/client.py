"""Async GraphQL transport for the Shopify Admin API."""

import logging
from typing import Optional, Dict, Any

import httpx

from .config import ShopifyConfig
from .errors import RateLimited, TransientTransportError, UpstreamError

logger = logging.getLogger("shopify_catalog_api.client")


class ShopifyGraphQLClient:
    """
    Executes GraphQL documents against a shop's Admin API endpoint.

    Every failure is raised as one of the catalog error types so callers
    can decide what to retry:

    - HTTP 429 or a ``THROTTLED`` GraphQL error: ``RateLimited``
    - connection errors, timeouts and 5xx: ``TransientTransportError``
    - other 4xx, GraphQL ``errors``, unreadable bodies: ``UpstreamError``
    """

    def __init__(self, config: ShopifyConfig, http_client: Optional[httpx.AsyncClient] = None):
        """
        Initialize the client.

        Args:
            config: Shopify configuration (shop URL, token, API version)
            http_client: Optional preconfigured ``httpx.AsyncClient``
        """
        self.config = config

        if http_client is not None:
            self.http_client = http_client
            self._owns_client = False
        else:
            self.http_client = httpx.AsyncClient(
                base_url=f"https://{config.shop_domain}",
                headers={
                    "X-Shopify-Access-Token": config.access_token,
                    "Content-Type": "application/json",
                },
                timeout=config.timeout_seconds
            )
            self._owns_client = True

    async def close(self):
        """Close HTTP client."""
        if self._owns_client:
            await self.http_client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def request(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Execute a GraphQL query.

        Args:
            query: GraphQL document
            variables: Variables bound to the document

        Returns:
            The ``data`` member of the GraphQL response
        """
        payload = {"query": query, "variables": variables or {}}

        try:
            response = await self.http_client.post(self.config.graphql_endpoint, json=payload)
        except httpx.RequestError as e:
            raise TransientTransportError(f"Request to Shopify failed: {e}") from e

        if response.status_code == 429:
            raise RateLimited("Shopify returned 429 Too Many Requests")
        if response.status_code >= 500:
            raise TransientTransportError(
                f"Shopify returned {response.status_code}", status_code=response.status_code
            )
        if response.status_code >= 400:
            raise UpstreamError(
                f"Shopify returned {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise UpstreamError(
                "Shopify returned a non-JSON body", status_code=response.status_code
            ) from e
        if not isinstance(body, dict):
            raise UpstreamError("Shopify returned an unexpected body", status_code=response.status_code)

        errors = body.get("errors")
        if errors:
            if _is_throttled(errors):
                raise RateLimited("Shopify GraphQL query was THROTTLED")
            logger.error("graphql_errors", extra={"errors": errors})
            raise UpstreamError(f"GraphQL errors: {_error_messages(errors)}", status_code=response.status_code)

        data = body.get("data")
        if data is None:
            raise UpstreamError("GraphQL response missing 'data'", status_code=response.status_code)

        cost = body.get("extensions", {}).get("cost")
        if cost:
            logger.debug("graphql_cost", extra={"cost": cost})

        return data


def _is_throttled(errors: Any) -> bool:
    if not isinstance(errors, list):
        return False
    for error in errors:
        if isinstance(error, dict) and error.get("extensions", {}).get("code") == "THROTTLED":
            return True
    return False


def _error_messages(errors: Any) -> str:
    if not isinstance(errors, list):
        return str(errors)
    return "; ".join(
        error.get("message", str(error)) if isinstance(error, dict) else str(error)
        for error in errors
    )
