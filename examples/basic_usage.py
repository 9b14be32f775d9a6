"""Example usage of the catalog fetcher."""

import asyncio
import json
from shopify_catalog_api import AppConfig, CatalogFetcher, ShopifyGraphQLClient
from shopify_catalog_api.transformer import transform_products


async def main():
    """Example: Fetch the first 100 products and print them as flat JSON."""

    # Reads SHOP_URL and ADMIN_API_ACCESS_TOKEN from the environment or .env
    config = AppConfig.from_env()

    async with ShopifyGraphQLClient(config.shopify) as client:
        fetcher = CatalogFetcher(client, config.fetch)
        result = await fetcher.fetch_all_products(page_size=25, max_items=100)

    if result.is_partial:
        print(f"Stopped early: {result.error}")

    products = transform_products(result.products)
    print(f"Fetched {result.total_count} products in {result.pages_fetched} pages")

    for p in products[:3]:
        print(f"\n- {p.title} ({p.handle})")
        print(f"  Metafields: {', '.join(p.metafields) or 'none'}")
        for variant in p.variants[:3]:
            print(f"    • {variant.title}: {variant.price} (stock {variant.inventory_quantity})")

    if products:
        print("\nFirst product as JSON:")
        print(json.dumps(products[0].model_dump(mode="json", by_alias=True), indent=2))


if __name__ == "__main__":
    asyncio.run(main())
