"""CLI commands for browsing the catalog."""

from __future__ import annotations

import asyncio

import click

from pos.application.context import ALL_CATEGORIES, CatalogHandle
from pos.domain.exceptions import DomainException
from pos.infrastructure.bootstrap import session_context
from pos.infrastructure.config import Settings
from pos.infrastructure.http.backend_client import BackendClient, HttpCatalogRepository


def _load_catalog(settings: Settings) -> CatalogHandle:
    session = session_context(settings)
    if not session.is_authenticated:
        raise click.ClickException("Not signed in: set POS_TOKEN or pass --token.")
    client = BackendClient(settings.api_url, session, timeout=settings.http_timeout)
    catalog = CatalogHandle(HttpCatalogRepository(client))
    try:
        asyncio.run(catalog.refresh())
    except DomainException as exc:
        raise click.ClickException(str(exc))
    return catalog


@click.command("list")
@click.option("--search", default="", help="Case-insensitive name filter.")
@click.option("--category", default=ALL_CATEGORIES, help="Only this category.")
@click.pass_obj
def product_list(settings: Settings, search: str, category: str) -> None:
    """List products in the catalog."""
    catalog = _load_catalog(settings)
    found = catalog.filter(search=search, category=category)

    if not found:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'SKU':<14} {'Name':<24} {'Category':<16} {'Price':>10} {'Stock':>6} SST")
    click.echo("-" * 84)
    for p in found:
        sst = "yes" if p.is_tax_applicable else "no"
        click.echo(
            f"{p.id:<6} {p.sku:<14} {p.name[:24]:<24} {p.category[:16]:<16} "
            f"{str(p.price):>10} {p.stock_quantity:>6} {sst}"
        )


@click.command("categories")
@click.pass_obj
def product_categories(settings: Settings) -> None:
    """List the categories present in the catalog."""
    catalog = _load_catalog(settings)
    for name in catalog.categories():
        click.echo(name)
