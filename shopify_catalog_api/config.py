"""Configuration management for the Shopify catalog API."""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ConfigDict, ValidationError

from .errors import ConfigError


class ShopifyConfig(BaseModel):
    """Shopify Admin API configuration."""
    shop_url: str = Field(..., description="Shop URL or domain (e.g., 'mystore.myshopify.com')")
    access_token: str = Field(..., description="Shopify Admin API access token")
    api_version: str = Field("2024-10", description="Shopify API version")
    timeout_seconds: float = Field(30.0, gt=0, description="HTTP timeout for a single GraphQL call")

    model_config = ConfigDict(frozen=True)

    @property
    def shop_domain(self) -> str:
        """Shop host without scheme or trailing slash."""
        return self.shop_url.replace("https://", "").replace("http://", "").rstrip("/")

    @property
    def graphql_endpoint(self) -> str:
        return f"/admin/api/{self.api_version}/graphql.json"


class FetchConfig(BaseModel):
    """Pagination and retry configuration."""
    page_size: int = Field(50, gt=0, le=250, description="Products requested per page")
    max_products: Optional[int] = Field(None, gt=0, description="Stop paging once this many products are held")
    page_delay_seconds: float = Field(0.5, ge=0, description="Pause between pages")
    max_attempts: int = Field(3, ge=1, description="Attempts per page request")
    retry_base_delay_seconds: float = Field(1.0, ge=0, description="Base unit for retry backoff")

    model_config = ConfigDict(frozen=True)


class ResponseConfig(BaseModel):
    """Response envelope configuration."""
    report_pagination: bool = Field(
        False,
        description="Report the fetcher's real hasNextPage/cursor instead of always exhausted"
    )

    model_config = ConfigDict(frozen=True)


class ServerConfig(BaseModel):
    """HTTP listener configuration."""
    host: str = Field("0.0.0.0", description="Host to bind to")
    port: int = Field(3000, gt=0, lt=65536, description="Port to bind to")
    log_level: str = Field("INFO", description="Root log level")
    log_file: Optional[str] = Field(None, description="Optional log file path")
    enable_metrics: bool = Field(False, description="Export OpenTelemetry metrics to the console")

    model_config = ConfigDict(frozen=True)


class AppConfig(BaseModel):
    """Main configuration for the catalog API."""
    shopify: ShopifyConfig
    fetch: FetchConfig = Field(default_factory=FetchConfig)
    response: ResponseConfig = Field(default_factory=ResponseConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "shopify": {
                    "shop_url": "mystore.myshopify.com",
                    "access_token": "shpat_xxxxx",
                    "api_version": "2024-10"
                },
                "fetch": {
                    "page_size": 50,
                    "max_products": None,
                    "page_delay_seconds": 0.5,
                    "max_attempts": 3
                },
                "response": {
                    "report_pagination": False
                },
                "server": {
                    "port": 3000
                }
            }
        }
    )

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "AppConfig":
        """
        Build configuration from environment variables.

        A ``.env`` file is loaded first when present. Existing environment
        variables win over values in the file.

        Raises:
            ConfigError: If SHOP_URL or ADMIN_API_ACCESS_TOKEN is missing,
                or an optional value does not validate.
        """
        load_dotenv(env_file)

        shop_url = os.getenv("SHOP_URL")
        access_token = os.getenv("ADMIN_API_ACCESS_TOKEN")
        missing = [
            name for name, value in (("SHOP_URL", shop_url), ("ADMIN_API_ACCESS_TOKEN", access_token))
            if not value
        ]
        if missing:
            raise ConfigError(
                f"Missing required environment variables: {', '.join(missing)} must be set"
            )

        shopify = {"shop_url": shop_url, "access_token": access_token}
        _copy_env(shopify, "api_version", "SHOPIFY_API_VERSION")

        fetch: dict = {}
        _copy_env(fetch, "page_size", "PAGE_SIZE")
        _copy_env(fetch, "max_products", "MAX_PRODUCTS")
        _copy_env(fetch, "page_delay_seconds", "PAGE_DELAY_SECONDS")
        _copy_env(fetch, "max_attempts", "MAX_ATTEMPTS")

        response: dict = {}
        _copy_env(response, "report_pagination", "REPORT_PAGINATION")

        server: dict = {}
        _copy_env(server, "host", "HOST")
        _copy_env(server, "port", "PORT")
        _copy_env(server, "log_level", "LOG_LEVEL")
        _copy_env(server, "log_file", "LOG_FILE")
        _copy_env(server, "enable_metrics", "ENABLE_METRICS")

        try:
            return cls(shopify=shopify, fetch=fetch, response=response, server=server)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e


def _copy_env(target: dict, field: str, variable: str) -> None:
    value = os.getenv(variable)
    if value:
        target[field] = value


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Load configuration from a JSON file, or from the environment when no
    path is given.

    Raises:
        ConfigError: If the file is missing or the configuration is invalid.
    """
    if config_path is None:
        return AppConfig.from_env()

    config_file = Path(config_path)
    if not config_file.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    with open(config_file) as f:
        config_data = json.load(f)

    try:
        return AppConfig(**config_data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Configure root logging for the service."""
    logging.basicConfig(
        filename=log_file,
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
