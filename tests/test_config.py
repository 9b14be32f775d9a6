import json

import pytest
from pydantic import ValidationError

from shopify_catalog_api.config import AppConfig, load_config
from shopify_catalog_api.errors import ConfigError

ENV_VARS = [
    "SHOP_URL", "ADMIN_API_ACCESS_TOKEN", "SHOPIFY_API_VERSION", "PORT", "HOST",
    "PAGE_SIZE", "MAX_PRODUCTS", "PAGE_DELAY_SECONDS", "MAX_ATTEMPTS",
    "REPORT_PAGINATION", "LOG_LEVEL", "LOG_FILE", "ENABLE_METRICS",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        # setenv first so the variable is restored to absent afterwards
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


def test_missing_required_variables_fail_fast(clean_env, tmp_path):
    with pytest.raises(ConfigError, match="SHOP_URL, ADMIN_API_ACCESS_TOKEN"):
        AppConfig.from_env(str(tmp_path / "missing.env"))


def test_missing_token_only(clean_env, tmp_path):
    clean_env.setenv("SHOP_URL", "mystore.myshopify.com")
    with pytest.raises(ConfigError, match="ADMIN_API_ACCESS_TOKEN"):
        AppConfig.from_env(str(tmp_path / "missing.env"))


def test_defaults_from_env(clean_env, tmp_path):
    clean_env.setenv("SHOP_URL", "https://mystore.myshopify.com")
    clean_env.setenv("ADMIN_API_ACCESS_TOKEN", "shpat_abc")

    config = AppConfig.from_env(str(tmp_path / "missing.env"))

    assert config.shopify.shop_domain == "mystore.myshopify.com"
    assert config.server.port == 3000
    assert config.fetch.page_size == 50
    assert config.fetch.max_products is None
    assert config.fetch.page_delay_seconds == 0.5
    assert config.fetch.max_attempts == 3
    assert config.response.report_pagination is False


def test_optional_overrides_from_env_file(clean_env, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "SHOP_URL=mystore.myshopify.com\n"
        "ADMIN_API_ACCESS_TOKEN=shpat_abc\n"
        "PORT=8080\n"
        "MAX_PRODUCTS=200\n"
        "REPORT_PAGINATION=true\n"
    )

    config = AppConfig.from_env(str(env_file))

    assert config.server.port == 8080
    assert config.fetch.max_products == 200
    assert config.response.report_pagination is True


def test_invalid_value_is_config_error(clean_env, tmp_path):
    clean_env.setenv("SHOP_URL", "mystore.myshopify.com")
    clean_env.setenv("ADMIN_API_ACCESS_TOKEN", "shpat_abc")
    clean_env.setenv("PORT", "not-a-port")

    with pytest.raises(ConfigError):
        AppConfig.from_env(str(tmp_path / "missing.env"))


def test_load_config_from_json_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "shopify": {"shop_url": "mystore.myshopify.com", "access_token": "shpat_abc"},
        "fetch": {"page_size": 100},
    }))

    config = load_config(str(path))

    assert config.fetch.page_size == 100
    assert config.shopify.api_version == "2024-10"


def test_load_config_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config(str(tmp_path / "nope.json"))


def test_config_is_immutable(tmp_path):
    config = AppConfig(shopify={"shop_url": "a.myshopify.com", "access_token": "t"})
    with pytest.raises(ValidationError):
        config.shopify.access_token = "other"
