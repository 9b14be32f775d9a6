"""Command-line interface for the Shopify catalog API."""

import asyncio
import json
from pathlib import Path
from typing import Optional
import typer
from rich.console import Console
from rich.table import Table
from rich.json import JSON

from .client import ShopifyGraphQLClient
from .config import AppConfig, configure_logging, load_config
from .errors import CatalogError, ConfigError
from .fetcher import CatalogFetcher
from .mock_client import MockShopifyClient
from .queries import PRODUCTS_TEST_QUERY
from .transformer import extract_id, transform_products

app = typer.Typer(
    name="shopify-catalog",
    help="Shopify product catalog export API"
)
console = Console()

ENV_TEMPLATE = """\
# Required
SHOP_URL=your-store.myshopify.com
ADMIN_API_ACCESS_TOKEN=shpat_your_access_token_here

# Optional
SHOPIFY_API_VERSION=2024-10
PORT=3000
PAGE_SIZE=50
# MAX_PRODUCTS=500
PAGE_DELAY_SECONDS=0.5
MAX_ATTEMPTS=3
REPORT_PAGINATION=false
LOG_LEVEL=INFO
"""


def _load_or_exit(config_path: Optional[str]) -> AppConfig:
    try:
        return load_config(config_path)
    except ConfigError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def init(
    output: str = typer.Option(".env", help="Output env file path"),
    force: bool = typer.Option(False, help="Overwrite an existing file"),
):
    """Write an example .env file."""
    output_path = Path(output)
    if output_path.exists() and not force:
        console.print(f"[red]Error: {output} already exists (use --force to overwrite)[/red]")
        raise typer.Exit(1)

    output_path.write_text(ENV_TEMPLATE)

    console.print(f"[green]✓[/green] Environment file created: {output}")
    console.print("\n[yellow]⚠ Please edit the file and add your Shopify credentials![/yellow]")


@app.command()
def fetch(
    config: Optional[str] = typer.Option(None, help="JSON configuration file (defaults to environment)"),
    limit: Optional[int] = typer.Option(None, help="Products per page"),
    max_products: Optional[int] = typer.Option(None, help="Stop after this many products"),
    output: Optional[str] = typer.Option(None, help="Output file for JSON (optional)"),
    sandbox: bool = typer.Option(False, help="Use the built-in mock catalog instead of Shopify"),
):
    """Fetch the product catalog and print or save the flattened JSON."""

    async def _fetch():
        if sandbox:
            transport = MockShopifyClient(product_count=5)
            fetch_config = None
        else:
            cfg = _load_or_exit(config)
            configure_logging(cfg.server.log_level, cfg.server.log_file)
            transport = ShopifyGraphQLClient(cfg.shopify)
            fetch_config = cfg.fetch

        try:
            fetcher = CatalogFetcher(transport, fetch_config)
            console.print("[blue]Fetching products...[/blue]")
            try:
                result = await fetcher.fetch_all_products(page_size=limit, max_items=max_products)
            except CatalogError as e:
                console.print(f"[red]✗ Fetch failed:[/red] {e}")
                raise typer.Exit(1)
        finally:
            await transport.close()

        products = transform_products(result.products)

        table = Table(title="Fetched Products")
        table.add_column("ID", style="cyan")
        table.add_column("Title", style="green")
        table.add_column("Variants", justify="right", style="yellow")
        table.add_column("Metafields", justify="right", style="magenta")

        for product in products:
            table.add_row(
                extract_id(product.id),
                product.title[:50] + "..." if len(product.title) > 50 else product.title,
                str(len(product.variants)),
                str(len(product.metafields))
            )

        console.print(table)
        console.print(f"[bold]Total:[/bold] {len(products)} products in {result.pages_fetched} pages")
        if result.is_partial:
            console.print(f"[yellow]⚠ Partial result:[/yellow] {result.error}")

        serialized = [p.model_dump(mode="json", by_alias=True) for p in products]
        if output:
            output_path = Path(output)
            with open(output_path, "w") as f:
                json.dump(serialized, f, indent=2, default=str)
            console.print(f"\n[green]✓[/green] Saved to {output}")
        elif serialized:
            console.print("\n[bold]Example Product:[/bold]")
            console.print(JSON(json.dumps(serialized[0], default=str, indent=2)))

    asyncio.run(_fetch())


@app.command()
def serve(
    config: Optional[str] = typer.Option(None, help="JSON configuration file (defaults to environment)"),
    host: Optional[str] = typer.Option(None, help="Host to bind to"),
    port: Optional[int] = typer.Option(None, help="Port to bind to (default 3000)"),
):
    """Start the catalog HTTP server."""
    from .app import create_app
    import uvicorn

    cfg = _load_or_exit(config)
    configure_logging(cfg.server.log_level, cfg.server.log_file)
    host = host or cfg.server.host
    port = port or cfg.server.port

    console.print(f"[green]Starting catalog server on {host}:{port}[/green]")
    console.print(f"[blue]Health check: http://{host}:{port}/health[/blue]")
    console.print(f"[blue]Products API: http://{host}:{port}/api/products[/blue]")

    uvicorn.run(create_app(cfg), host=host, port=port, log_level=cfg.server.log_level.lower())


@app.command()
def validate(
    config: Optional[str] = typer.Option(None, help="JSON configuration file (defaults to environment)"),
    check_connection: bool = typer.Option(False, help="Run a small test query against Shopify"),
):
    """Validate configuration."""
    cfg = _load_or_exit(config)
    console.print("[green]✓[/green] Configuration is valid!")
    console.print(f"\n[bold]Shop:[/bold] {cfg.shopify.shop_domain}")
    console.print(f"[bold]API version:[/bold] {cfg.shopify.api_version}")
    console.print(f"[bold]Page size:[/bold] {cfg.fetch.page_size}")
    console.print(f"[bold]Max products:[/bold] {cfg.fetch.max_products or 'unlimited'}")
    console.print(f"[bold]Report pagination:[/bold] {cfg.response.report_pagination}")

    if not check_connection:
        return

    async def _check():
        async with ShopifyGraphQLClient(cfg.shopify) as client:
            return await client.request(PRODUCTS_TEST_QUERY)

    try:
        data = asyncio.run(_check())
    except CatalogError as e:
        console.print(f"[red]✗ Connection check failed:[/red] {e}")
        raise typer.Exit(1)
    sample = data.get("products", {}).get("edges", [])
    console.print(f"[green]✓[/green] Connected, sample query returned {len(sample)} products")


if __name__ == "__main__":
    app()
