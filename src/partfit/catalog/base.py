"""Abstract vehicle catalog client."""

from abc import ABC, abstractmethod
from typing import Any

from partfit.models import Brand, Engine, Manufacturer, VehicleModel


class BaseCatalogClient(ABC):
    """Read-only access to the upstream parts catalog.

    Implementations must never raise from the ``list_*`` methods: any
    failure is logged and reported as an empty list.
    """

    # Override in subclasses
    kind: str

    @abstractmethod
    async def list_brands(self) -> list[Brand]:
        """All vehicle brands, sorted by label."""
        ...

    @abstractmethod
    async def list_models(self, brand_id: str) -> list[VehicleModel]:
        """Models of one brand, sorted by label."""
        ...

    @abstractmethod
    async def list_engines(self, model_id: str) -> list[Engine]:
        """Engines (sub-models) of one model, sorted by label."""
        ...

    @abstractmethod
    async def list_manufacturers(self) -> list[Manufacturer]:
        """Part manufacturers, sorted by label."""
        ...

    @abstractmethod
    async def list_products(self) -> list[dict[str, Any]]:
        """Raw product records including their fitment data."""
        ...

    async def fetch_manufacturers(self) -> list[Manufacturer]:
        """Like ``list_manufacturers``, but a failed lookup raises.

        Caches use this so a failure is never stored as an empty list.

        Raises:
            CatalogError: If the manufacturer list could not be loaded
        """
        return await self.list_manufacturers()

    async def aclose(self) -> None:
        """Release network resources."""

    async def __aenter__(self) -> "BaseCatalogClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
