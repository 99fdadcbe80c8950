"""Catalog client for the storefront's HTTP catalog service."""

import logging
from typing import Any, Callable, Optional, TypeVar

import httpx

from partfit.catalog.base import BaseCatalogClient
from partfit.catalog.decode import (
    decode_brands,
    decode_engines,
    decode_manufacturers,
    decode_models,
    decode_products,
)
from partfit.exceptions import CatalogDecodeError, CatalogError, CatalogUnavailableError
from partfit.models import Brand, Engine, Manufacturer, VehicleModel
from partfit.models.config import DEFAULT_BASE_URL

logger = logging.getLogger(__name__)

T = TypeVar("T")


class HttpCatalogClient(BaseCatalogClient):
    """Async client for the catalog REST API.

    Usage:
        async with HttpCatalogClient(base_url) as catalog:
            brands = await catalog.list_brands()
    """

    kind = "http"

    BRANDS_PATH = "/brand/all-brand"
    MODELS_PATH = "/getModelByBrandId"
    ENGINES_PATH = "/getSubModelByModelId"
    MANUFACTURERS_PATH = "/manufacturers"
    PRODUCTS_PATH = "/product/all-products"

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 15.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Catalog API root, e.g. https://host/api
            timeout: Request timeout in seconds
            client: Pre-built httpx client (tests inject a mock transport)
        """
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"Accept": "application/json"},
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _get_json(self, path: str, params: Optional[dict[str, str]] = None) -> Any:
        """GET ``path`` and parse the JSON body.

        Raises:
            CatalogUnavailableError: Transport failure or non-2xx status
            CatalogDecodeError: Body is not JSON
        """
        try:
            resp = await self._client.get(path, params=params)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise CatalogUnavailableError(
                str(e.request.url), f"HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise CatalogUnavailableError(path, str(e) or type(e).__name__) from e

        try:
            return resp.json()
        except ValueError as e:
            raise CatalogDecodeError(path, "response body is not JSON") from e

    async def _request(
        self,
        path: str,
        decoder: Callable[[Any], list[T]],
        params: Optional[dict[str, str]] = None,
    ) -> list[T]:
        """GET ``path`` and decode it; failures raise CatalogError."""
        payload = await self._get_json(path, params)
        return decoder(payload)

    async def _fetch(
        self,
        what: str,
        path: str,
        decoder: Callable[[Any], list[T]],
        params: Optional[dict[str, str]] = None,
    ) -> list[T]:
        try:
            records = await self._request(path, decoder, params)
        except CatalogError as e:
            logger.warning("Catalog %s unavailable: %s (%s)", what, e.message, e.details)
            return []
        logger.debug("Catalog %s: %d records", what, len(records))
        return records

    async def list_brands(self) -> list[Brand]:
        return await self._fetch("brands", self.BRANDS_PATH, decode_brands)

    async def list_models(self, brand_id: str) -> list[VehicleModel]:
        return await self._fetch(
            f"models for brand {brand_id}",
            self.MODELS_PATH,
            decode_models,
            params={"brand_id": brand_id},
        )

    async def list_engines(self, model_id: str) -> list[Engine]:
        return await self._fetch(
            f"engines for model {model_id}",
            self.ENGINES_PATH,
            decode_engines,
            params={"model_id": model_id},
        )

    async def list_manufacturers(self) -> list[Manufacturer]:
        return await self._fetch(
            "manufacturers", self.MANUFACTURERS_PATH, decode_manufacturers
        )

    async def list_products(self) -> list[dict[str, Any]]:
        return await self._fetch("products", self.PRODUCTS_PATH, decode_products)

    async def fetch_manufacturers(self) -> list[Manufacturer]:
        return await self._request(self.MANUFACTURERS_PATH, decode_manufacturers)
