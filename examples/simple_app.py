from shopify_catalog_api import AppConfig, create_app

config = AppConfig(
    shopify={
        "shop_url": "mystore.myshopify.com",
        "access_token": "shpat_xxxxx",
        "api_version": "2024-10",
    },
)

app = create_app(config)

# Run: uvicorn examples.simple_app:app --port 3000 --reload
