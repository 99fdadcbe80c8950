"""Catalog client backed by a local JSON document.

Document layout::

    {
      "brands": [{"id": 5, "name": "Volkswagen"}],
      "models": {"5": [{"id": 9, "name": "Golf"}]},
      "engines": {"9": [{"id": 2, "name": "2.0 TDI", "year": 2009, "year_2": 2012}]},
      "manufacturers": [{"id": 1, "name": "Bosch"}],
      "products": [{"id": 100, "part_name": "Brake pad", "suitability_models": []}]
    }
"""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar

from partfit.catalog.base import BaseCatalogClient
from partfit.catalog.decode import (
    decode_brands,
    decode_engines,
    decode_manufacturers,
    decode_models,
    decode_products,
)
from partfit.exceptions import CatalogError, CatalogFileError
from partfit.models import Brand, Engine, Manufacturer, VehicleModel

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FileCatalogClient(BaseCatalogClient):
    """Serves catalog lookups from a JSON file, loaded once."""

    kind = "file"

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._document: Optional[dict[str, Any]] = None

    def _load(self) -> dict[str, Any]:
        """Read and cache the catalog document.

        Raises:
            CatalogFileError: If the file is missing or not a JSON object
        """
        if self._document is None:
            try:
                document = json.loads(self.path.read_text(encoding="utf-8"))
            except OSError as e:
                raise CatalogFileError(str(self.path), e.strerror) from e
            except ValueError as e:
                raise CatalogFileError(str(self.path), f"invalid JSON: {e}") from e
            if not isinstance(document, dict):
                raise CatalogFileError(str(self.path), "top level must be an object")
            self._document = document
        return self._document

    def _section(self, name: str, parent_id: Optional[str] = None) -> Any:
        section = self._load().get(name, [])
        if parent_id is None:
            return section
        if not isinstance(section, dict):
            return []
        return section.get(str(parent_id), [])

    def _read(
        self,
        what: str,
        decoder: Callable[[Any], list[T]],
        name: str,
        parent_id: Optional[str] = None,
    ) -> list[T]:
        try:
            return decoder(self._section(name, parent_id))
        except CatalogError as e:
            logger.warning("Catalog %s unavailable: %s (%s)", what, e.message, e.details)
            return []

    async def list_brands(self) -> list[Brand]:
        return self._read("brands", decode_brands, "brands")

    async def list_models(self, brand_id: str) -> list[VehicleModel]:
        return self._read(f"models for brand {brand_id}", decode_models, "models", brand_id)

    async def list_engines(self, model_id: str) -> list[Engine]:
        return self._read(
            f"engines for model {model_id}", decode_engines, "engines", model_id
        )

    async def list_manufacturers(self) -> list[Manufacturer]:
        return self._read("manufacturers", decode_manufacturers, "manufacturers")

    async def list_products(self) -> list[dict[str, Any]]:
        return self._read("products", decode_products, "products")

    async def fetch_manufacturers(self) -> list[Manufacturer]:
        return decode_manufacturers(self._section("manufacturers"))
