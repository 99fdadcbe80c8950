"""Configuration and catalog setup shared by the CLI commands."""

import logging

import typer
from rich.console import Console

from partfit.catalog import BaseCatalogClient, get_catalog_client
from partfit.cli.ui import error_panel
from partfit.core.config import ConfigManager
from partfit.exceptions import PartfitError
from partfit.models import AppConfig

logger = logging.getLogger(__name__)
console = Console()


def open_session() -> tuple[AppConfig, BaseCatalogClient]:
    """Load the configuration and build its catalog client.

    Prints an error panel and exits with status 1 when either step fails.
    """
    manager = ConfigManager()
    try:
        config = manager.load()
        catalog = get_catalog_client(config.catalog)
    except PartfitError as e:
        logger.error("Session setup failed: %s (%s)", e.message, e.details)
        console.print(error_panel(e.message, e.details))
        raise typer.Exit(1)
    except ValueError as e:
        console.print(
            error_panel("Unsupported catalog.", f"{e} Check {manager.config_path}.")
        )
        raise typer.Exit(1)

    logger.info("Using %s catalog", catalog.kind)
    return config, catalog
