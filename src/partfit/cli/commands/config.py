"""Config command implementation."""

import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.prompt import Confirm
from rich.table import Table

from partfit.catalog import list_catalog_kinds
from partfit.cli.ui import error_panel, info_panel, success_panel
from partfit.core.config import ConfigManager
from partfit.exceptions import PartfitError
from partfit.models import AppConfig

logger = logging.getLogger(__name__)
console = Console()


def run_config(
    catalog: Optional[str] = None,
    base_url: Optional[str] = None,
    file: Optional[Path] = None,
    timeout: Optional[float] = None,
    reset: bool = False,
) -> None:
    """Run the config command."""
    console.print()

    manager = ConfigManager()

    if reset:
        _handle_reset(manager)
        return

    try:
        config = manager.load()
    except PartfitError as e:
        console.print(error_panel(e.message, e.details))
        raise typer.Exit(1)

    changes = {
        "kind": catalog,
        "base_url": base_url,
        "file": file,
        "timeout_seconds": timeout,
    }
    changes = {key: value for key, value in changes.items() if value is not None}

    if changes:
        config = _update(manager, config, changes)

    console.print(info_panel(_settings_table(config), title=str(manager.config_path)))


def _update(manager: ConfigManager, config: AppConfig, changes: dict) -> AppConfig:
    """Validate and save catalog setting changes."""
    kind = changes.get("kind")
    if kind is not None and kind.strip().lower() not in list_catalog_kinds():
        console.print(
            error_panel(
                f"Unsupported catalog kind '{kind}'.",
                f"Supported kinds: {', '.join(list_catalog_kinds())}",
            )
        )
        raise typer.Exit(1)

    catalog = config.catalog.model_dump()
    catalog.update(changes)
    try:
        updated = AppConfig.model_validate(
            {**config.model_dump(), "catalog": catalog}
        )
    except ValidationError as e:
        errors = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        console.print(error_panel("Invalid setting.", errors))
        raise typer.Exit(1)

    manager.save(updated)
    logger.info("Saved catalog settings: %s", sorted(changes))
    console.print(success_panel("Configuration saved."))
    console.print()
    return updated


def _handle_reset(manager: ConfigManager) -> None:
    if not Confirm.ask("[yellow]Delete the configuration file?[/yellow]", default=False):
        console.print("[dim]Cancelled.[/dim]")
        return

    if manager.delete():
        console.print(success_panel("Configuration deleted. Defaults apply."))
    else:
        console.print("[dim]No configuration found to delete.[/dim]")


def _settings_table(config: AppConfig) -> Table:
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Setting", style="dim")
    table.add_column("Value")

    table.add_row("Catalog", config.catalog.kind)
    if config.catalog.kind == "file":
        table.add_row("Catalog file", str(config.catalog.file or "[yellow]not set[/yellow]"))
    else:
        table.add_row("Base URL", config.catalog.base_url)
    table.add_row("Timeout", f"{config.catalog.timeout_seconds:g}s")
    table.add_row("Quick filter delay", f"{config.quick_filter_delay_ms} ms")
    table.add_row("Manufacturers TTL", f"{config.manufacturers_ttl_seconds:g}s")
    table.add_row(
        "Brand aliases",
        ", ".join("/".join(group) for group in config.brand_aliases) or "-",
    )
    return table
