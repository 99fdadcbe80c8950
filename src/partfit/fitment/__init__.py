"""Fitment matching."""

from partfit.fitment.filtering import filter_products
from partfit.fitment.matcher import matches

__all__ = [
    "filter_products",
    "matches",
]
