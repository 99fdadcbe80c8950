"""Data models for partfit."""

from partfit.models.catalog import (
    Brand,
    CatalogRecord,
    Engine,
    Manufacturer,
    VehicleModel,
)
from partfit.models.config import AppConfig, CatalogSettings
from partfit.models.vehicle import QuickFilter, VehicleSelection

__all__ = [
    # Config
    "AppConfig",
    "CatalogSettings",
    # Selection
    "VehicleSelection",
    "QuickFilter",
    # Catalog records
    "CatalogRecord",
    "Brand",
    "VehicleModel",
    "Engine",
    "Manufacturer",
]
