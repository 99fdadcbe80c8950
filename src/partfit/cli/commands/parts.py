"""Parts listing command implementation."""

import asyncio
import logging
from typing import Any

from rich.console import Console

from partfit.catalog import BaseCatalogClient, ManufacturerCache
from partfit.cli.session import open_session
from partfit.cli.ui import create_parts_table, warning_panel
from partfit.core.store import FileSelectionStore
from partfit.fitment import filter_products
from partfit.models import AppConfig, QuickFilter, VehicleSelection

logger = logging.getLogger(__name__)
console = Console()


def run_parts(
    category: str | None = None,
    search: str | None = None,
    show_all: bool = False,
) -> None:
    """Run the parts command."""
    console.print()

    config, catalog = open_session()
    selection = VehicleSelection() if show_all else FileSelectionStore().read()
    quick = QuickFilter(category_id=category, search_term=search)

    products, makers = asyncio.run(_load(catalog, config))
    if not products:
        console.print(warning_panel("The catalog returned no parts."))
        return

    fitting = filter_products(products, selection, quick, aliases=config.brand_aliases)
    logger.info(
        "%d of %d parts fit %r", len(fitting), len(products), selection.display_name
    )

    if selection.is_empty:
        title = "All parts"
    else:
        title = f"Parts for {selection.display_name or 'your vehicle'}"

    if not fitting:
        console.print(f"[dim]  No parts match ({len(products)} checked).[/dim]")
        return

    console.print(create_parts_table(fitting, makers, title=title))
    console.print()
    console.print(f"[dim]  {len(fitting)} of {len(products)} part(s) shown.[/dim]")


async def _load(
    catalog: BaseCatalogClient, config: AppConfig
) -> tuple[list[dict[str, Any]], dict[str, str]]:
    """Fetch products and manufacturer names concurrently."""
    async with catalog:
        cache = ManufacturerCache(
            catalog.fetch_manufacturers, ttl=config.manufacturers_ttl_seconds
        )
        products, makers = await asyncio.gather(catalog.list_products(), cache.get())
    return products, {m.id: m.name for m in makers}
