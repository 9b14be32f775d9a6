"""Exceptions raised while loading config and talking to Shopify."""

from typing import Optional


class CatalogError(Exception):
    """Base class for catalog API errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ConfigError(CatalogError):
    """Raised when required configuration is missing or invalid."""


class RateLimited(CatalogError):
    """Raised when Shopify answers with HTTP 429 or a THROTTLED error."""

    def __init__(self, message: str = "Rate limit exceeded", status_code: Optional[int] = 429):
        super().__init__(message, status_code)


class TransientTransportError(CatalogError):
    """Raised for connection failures, timeouts and 5xx responses."""


class UpstreamError(CatalogError):
    """Raised for non-retryable errors reported by the GraphQL API."""


class ExhaustedRetries(CatalogError):
    """Raised when every attempt of a retried call was rate limited."""

    def __init__(self, message: str, attempts: int):
        super().__init__(message)
        self.attempts = attempts
