"""Catalog client registry: pick an implementation from configuration."""

from typing import Callable

from partfit.catalog.base import BaseCatalogClient
from partfit.exceptions import CatalogFileError, ConfigValidationError
from partfit.models import CatalogSettings


def _http_client(settings: CatalogSettings) -> BaseCatalogClient:
    from partfit.catalog.http import HttpCatalogClient

    return HttpCatalogClient(
        base_url=settings.base_url, timeout=settings.timeout_seconds
    )


def _file_client(settings: CatalogSettings) -> BaseCatalogClient:
    from partfit.catalog.file import FileCatalogClient

    if settings.file is None:
        raise ConfigValidationError(
            "catalog.file", "A catalog file path is required when catalog.kind = 'file'."
        )
    if not settings.file.exists():
        raise CatalogFileError(str(settings.file), "File does not exist.")
    return FileCatalogClient(settings.file)


def _get_factories() -> dict[str, Callable[[CatalogSettings], BaseCatalogClient]]:
    """Get all available catalog client factories.

    Lazy imports keep httpx out of file-only runs.
    """
    return {
        "http": _http_client,
        "file": _file_client,
    }


def get_catalog_client(settings: CatalogSettings) -> BaseCatalogClient:
    """Build the catalog client configured in ``settings``.

    Raises:
        ValueError: If no client exists for ``settings.kind``
        ConfigValidationError: If the chosen client lacks required settings
        CatalogFileError: If the configured catalog file does not exist
    """
    factories = _get_factories()
    kind = settings.kind.lower()

    if kind not in factories:
        available = ", ".join(sorted(factories.keys()))
        raise ValueError(
            f"No catalog client for '{settings.kind}'. "
            f"Supported kinds: {available}"
        )

    return factories[kind](settings)


def list_catalog_kinds() -> list[str]:
    """List supported catalog kinds."""
    return sorted(_get_factories().keys())
