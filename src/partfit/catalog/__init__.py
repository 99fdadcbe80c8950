"""Vehicle catalog clients."""

from partfit.catalog.base import BaseCatalogClient
from partfit.catalog.cache import InflightGuard, ManufacturerCache
from partfit.catalog.registry import get_catalog_client, list_catalog_kinds

__all__ = [
    "BaseCatalogClient",
    "InflightGuard",
    "ManufacturerCache",
    "get_catalog_client",
    "list_catalog_kinds",
]
