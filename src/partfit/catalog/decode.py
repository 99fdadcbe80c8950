"""Decoding of catalog service responses into canonical records.

Each endpoint has exactly one decoder. The decoder unwraps the response
envelope the endpoint is known to use and validates every item into the
canonical record type; the rest of partfit only ever sees those records.
"""

import logging
from typing import Any, Sequence, TypeVar

from pydantic import ValidationError

from partfit.exceptions import CatalogDecodeError
from partfit.models.catalog import (
    Brand,
    CatalogRecord,
    Engine,
    Manufacturer,
    VehicleModel,
)

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=CatalogRecord)

BRAND_KEYS = ("data", "result", "brands")
MODEL_KEYS = ("data", "result", "models")
ENGINE_KEYS = ("data", "result", "sub_models", "submodels", "engines")
MANUFACTURER_KEYS = ("data", "result", "manufacturers")
PRODUCT_KEYS = ("data", "result", "products", "parts")


def unwrap_items(payload: Any, endpoint: str, keys: Sequence[str]) -> list[Any]:
    """Extract the item list from a response envelope.

    Accepts a bare list, a list under one of ``keys``, or a list under one of
    ``keys`` nested one level inside another (``{"data": {"models": [...]}}``).

    Raises:
        CatalogDecodeError: If no list is found where the endpoint puts it
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in keys:
            value = payload.get(key)
            if isinstance(value, list):
                return value
            if isinstance(value, dict):
                for nested in keys:
                    inner = value.get(nested)
                    if isinstance(inner, list):
                        return inner
    raise CatalogDecodeError(
        endpoint, f"expected a list under one of: {', '.join(keys)}"
    )


def decode_records(
    payload: Any, record_type: type[R], endpoint: str, keys: Sequence[str]
) -> list[R]:
    """Validate envelope items into ``record_type``, sorted by label.

    Items without a usable id or label are dropped, as are repeated ids.
    """
    records: list[R] = []
    seen: set[str] = set()
    for item in unwrap_items(payload, endpoint, keys):
        if not isinstance(item, dict):
            continue
        try:
            record = record_type.model_validate(item)
        except ValidationError:
            logger.debug("Skipping %s item without id/label: %r", endpoint, item)
            continue
        if record.id in seen:
            continue
        seen.add(record.id)
        records.append(record)
    return sorted(records, key=lambda r: r.label.casefold())


def decode_brands(payload: Any) -> list[Brand]:
    return decode_records(payload, Brand, "brands", BRAND_KEYS)


def decode_models(payload: Any) -> list[VehicleModel]:
    return decode_records(payload, VehicleModel, "models", MODEL_KEYS)


def decode_engines(payload: Any) -> list[Engine]:
    return decode_records(payload, Engine, "engines", ENGINE_KEYS)


def decode_manufacturers(payload: Any) -> list[Manufacturer]:
    return decode_records(payload, Manufacturer, "manufacturers", MANUFACTURER_KEYS)


def decode_products(payload: Any) -> list[dict[str, Any]]:
    """Products stay raw mappings; fitment is read from them as-is."""
    items = unwrap_items(payload, "products", PRODUCT_KEYS)
    return [item for item in items if isinstance(item, dict)]
