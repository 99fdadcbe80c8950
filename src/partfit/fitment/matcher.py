"""Fitment matching engine.

``matches(product, selection)`` decides whether a catalog product fits the
shopper's vehicle. It reads either the structured suitability records
attached to the product or, when those are absent, a free-text
compatibility string. Missing or malformed data never excludes a product.
"""

import json
import logging
from collections.abc import Mapping
from typing import Any, Iterable, Optional, Sequence, Union

from pydantic import ValidationError

from partfit.fitment.text import (
    DEFAULT_BRAND_ALIASES,
    brand_in_text,
    has_token,
    is_generic_engine,
    is_universal,
    normalize,
    strip_year_suffix,
)
from partfit.models.catalog import coerce_text
from partfit.models.vehicle import VehicleSelection

logger = logging.getLogger(__name__)

SUITABILITY_FIELD = "suitability_models"
SUB_SUITABILITY_FIELD = "sub_suitability_models"

# Field names under which upstream puts a free-text compatibility string
COMPATIBILITY_FIELDS = (
    "compatibility",
    "compatibilities",
    "vehicle_compatibility",
    "compatible_vehicles",
    "fitment",
    "fitments",
    "vehicle_fitment",
)

Aliases = Iterable[Sequence[str]]
SelectionLike = Union[VehicleSelection, Mapping[str, Any], None]


def unwrap_product(product: Any) -> Mapping[str, Any]:
    """Return the product record, unwrapping the ``part`` envelope if present."""
    if not isinstance(product, Mapping):
        return {}
    inner = product.get("part")
    if isinstance(inner, Mapping):
        return inner
    return product


def as_selection(selection: SelectionLike) -> VehicleSelection:
    """Accept a VehicleSelection or a plain (camel or snake case) mapping."""
    if isinstance(selection, VehicleSelection):
        return selection
    if not isinstance(selection, Mapping):
        return VehicleSelection()
    try:
        return VehicleSelection.model_validate(dict(selection))
    except ValidationError:
        logger.debug("Unusable selection %r, matching everything", selection)
        return VehicleSelection()


def matches(
    product: Any,
    selection: SelectionLike,
    aliases: Aliases = DEFAULT_BRAND_ALIASES,
) -> bool:
    """Decide whether ``product`` fits the selected vehicle.

    Args:
        product: Raw catalog product record (optionally wrapped under ``part``)
        selection: Active vehicle selection
        aliases: Groups of interchangeable brand spellings

    Returns:
        True when the product fits, or when there is not enough data to say
        it does not. Never raises.
    """
    sel = as_selection(selection)
    if sel.is_empty:
        return True

    try:
        src = unwrap_product(product)
        entries = _suitability_entries(src)
        if entries:
            return any(_entry_matches(entry, sel, aliases) for entry in entries)
        return _text_matches(compatibility_text(src), sel, aliases)
    except Exception:
        logger.warning("Fitment check failed; keeping product", exc_info=True)
        return True


# ─────────────────────────────────────────────────────────────────────────────
# Structured suitability
# ─────────────────────────────────────────────────────────────────────────────


def _records(value: Any) -> list[Mapping[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, Mapping)]


def _suitability_entries(src: Mapping[str, Any]) -> list[Mapping[str, Any]]:
    return _records(src.get(SUITABILITY_FIELD))


def _id_in(wanted: Optional[str], *candidates: Any) -> bool:
    if not wanted:
        return False
    return any(coerce_text(c) == wanted for c in candidates)


def _entry_matches(
    entry: Mapping[str, Any], sel: VehicleSelection, aliases: Aliases
) -> bool:
    """One brand-level suitability record against the selection."""
    entry_brand_id = coerce_text(entry.get("brand_id"))
    if sel.brand_id and entry_brand_id:
        if entry_brand_id != sel.brand_id:
            return False
    elif sel.brand_name:
        # entry.model usually holds the brand label, e.g. "LEXUS"
        descriptor = coerce_text(entry.get("model")) or coerce_text(
            entry.get("brand_name")
        )
        if not brand_in_text(sel.brand_name, descriptor or "", aliases):
            return False

    if not sel.has_model:
        return True

    subs = _records(entry.get(SUB_SUITABILITY_FIELD))
    return any(_sub_entry_matches(sub, sel) for sub in subs)


def _sub_entry_matches(sub: Mapping[str, Any], sel: VehicleSelection) -> bool:
    """One model/engine record: the model must match, then the engine."""
    descriptor = coerce_text(sub.get("sub_model")) or coerce_text(sub.get("model")) or ""
    normalized = normalize(descriptor)

    model_ok = _id_in(sel.model_id, sub.get("main_model_id"), sub.get("model_id"))
    if not model_ok and sel.model_name:
        wanted = normalize(strip_year_suffix(sel.model_name))
        model_ok = bool(wanted) and wanted in normalized
    if not model_ok:
        return False

    if not sel.has_engine:
        return True

    if _id_in(sel.engine_id, sub.get("suit_sub_models_id"), sub.get("id")):
        return True
    if sel.engine_name:
        wanted = normalize(strip_year_suffix(sel.engine_name))
        if wanted and wanted in normalized:
            return True
    return is_generic_engine(descriptor)


# ─────────────────────────────────────────────────────────────────────────────
# Free-text compatibility
# ─────────────────────────────────────────────────────────────────────────────


def _flatten(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, list):
        return " | ".join(text for text in (_flatten(v) for v in value) if text)
    if isinstance(value, Mapping):
        return json.dumps(value, default=str)
    return str(value)


def compatibility_text(src: Mapping[str, Any]) -> str:
    """First populated compatibility field, lower-cased."""
    for field in COMPATIBILITY_FIELDS:
        text = _flatten(src.get(field))
        if text:
            return text.lower()
    return ""


def _text_matches(text: str, sel: VehicleSelection, aliases: Aliases) -> bool:
    if not text or is_universal(text):
        return True

    if sel.brand_name and not brand_in_text(sel.brand_name, text, aliases):
        return False

    if sel.model_name:
        wanted = normalize(strip_year_suffix(sel.model_name))
        if wanted and wanted not in normalize(text):
            return False

    if sel.engine_name:
        if not has_token(text, strip_year_suffix(sel.engine_name)):
            return False

    return True
