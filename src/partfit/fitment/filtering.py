"""Narrow a product list by vehicle fitment and the quick filter."""

from collections.abc import Mapping
from typing import Any, Iterable, Optional

from partfit.fitment.matcher import Aliases, SelectionLike, matches, unwrap_product
from partfit.fitment.text import DEFAULT_BRAND_ALIASES
from partfit.models.catalog import coerce_text
from partfit.models.vehicle import QuickFilter

TITLE_FIELDS = ("part_name", "name", "title")


def category_id_of(product: Any) -> Optional[str]:
    src = unwrap_product(product)
    direct = coerce_text(src.get("category_id"))
    if direct:
        return direct
    category = src.get("category")
    if isinstance(category, Mapping):
        return coerce_text(category.get("id")) or coerce_text(category.get("category_id"))
    return coerce_text(category)


def title_of(product: Any) -> str:
    src = unwrap_product(product)
    for field in TITLE_FIELDS:
        text = coerce_text(src.get(field))
        if text:
            return text
    return ""


def product_id_of(product: Any) -> str:
    src = unwrap_product(product)
    return coerce_text(src.get("product_id")) or coerce_text(src.get("id")) or ""


def passes_quick_filter(product: Any, quick: Optional[QuickFilter]) -> bool:
    if quick is None or quick.is_empty:
        return True
    if quick.category_id and category_id_of(product) != quick.category_id:
        return False
    if quick.search_term and quick.search_term.lower() not in title_of(product).lower():
        return False
    return True


def filter_products(
    products: Iterable[Any],
    selection: SelectionLike,
    quick_filter: Optional[QuickFilter] = None,
    aliases: Aliases = DEFAULT_BRAND_ALIASES,
) -> list[Any]:
    """Products that fit ``selection`` and pass ``quick_filter``, in order."""
    return [
        p
        for p in products
        if matches(p, selection, aliases) and passes_quick_filter(p, quick_filter)
    ]


def maker_id_of(product: Any) -> str:
    """Id of the part manufacturer (seller), if the product names one."""
    src = unwrap_product(product)
    for field in ("saler_id", "maker_id", "manufacturer_id"):
        text = coerce_text(src.get(field))
        if text:
            return text
    maker = src.get("maker")
    if isinstance(maker, Mapping):
        return coerce_text(maker.get("id")) or coerce_text(maker.get("maker_id")) or ""
    return ""


def price_of(product: Any) -> float:
    src = unwrap_product(product)
    for field in ("price", "selling_price", "amount", "unit_price"):
        try:
            return max(0.0, float(src.get(field)))
        except (TypeError, ValueError):
            continue
    return 0.0
