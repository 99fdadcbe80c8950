"""Manufacturers listing command implementation."""

import asyncio

import typer
from rich.console import Console

from partfit.catalog import BaseCatalogClient, ManufacturerCache
from partfit.cli.session import open_session
from partfit.cli.ui import create_options_table, error_panel
from partfit.models import Manufacturer

console = Console()


def run_manufacturers() -> None:
    """Run the manufacturers command."""
    console.print()

    config, catalog = open_session()
    cache = ManufacturerCache(
        catalog.fetch_manufacturers, ttl=config.manufacturers_ttl_seconds
    )
    makers = asyncio.run(_load(catalog, cache))

    if cache.last_error:
        console.print(error_panel(cache.last_error))
        raise typer.Exit(1)
    if not makers:
        console.print("[dim]  No manufacturers listed.[/dim]")
        return

    console.print(create_options_table("Manufacturers", makers))
    console.print()
    console.print(f"[dim]  {len(makers)} manufacturer(s).[/dim]")


async def _load(catalog: BaseCatalogClient, cache: ManufacturerCache) -> list[Manufacturer]:
    async with catalog:
        return await cache.get()
