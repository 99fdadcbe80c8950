"""Text helpers for free-text fitment descriptors."""

import re
from typing import Iterable, Sequence

DEFAULT_BRAND_ALIASES: tuple[tuple[str, ...], ...] = (
    ("vw", "volkswagen"),
    ("mercedes", "mb", "mercedes-benz"),
)

# Markers meaning "fits every vehicle" in a compatibility string
UNIVERSAL_MARKERS = ("universal", "all vehicles", "all cars", "fits all")

# Umbrella engine descriptors: "95 - 340 PS", "66-103 kW", "all engines"
_GENERIC_RANGE = re.compile(
    r"\d+(?:[.,]\d+)?\s*(?:-|–|to)\s*\d+(?:[.,]\d+)?\s*(?:ps|kw|hp|cv)\b",
    re.IGNORECASE,
)
_GENERIC_MARKERS = ("all engines", "universal")

# Year range appended to engine labels, e.g. "2.0 TDI (2009 - 2012)"
_YEAR_SUFFIX = re.compile(r"\s*\(\s*\d{4}(?:\s*-\s*\d{4})?\s*\)\s*$")

_NON_ALNUM = re.compile(r"[\W_]+")


def normalize(value: object) -> str:
    """Lower-case, replace punctuation with spaces, collapse whitespace."""
    if value is None:
        return ""
    return _NON_ALNUM.sub(" ", str(value).casefold()).strip()


def strip_year_suffix(name: str) -> str:
    """Drop a trailing '(2009 - 2012)' label suffix."""
    return _YEAR_SUFFIX.sub("", name or "")


def has_token(text: str, token: str) -> bool:
    """True if ``token`` occurs in ``text`` bounded by non-alphanumerics.

    Both sides are compared case-insensitively. A short engine code such as
    "D4" must not match inside "CD40".
    """
    token = (token or "").strip().lower()
    if not token:
        return False
    pattern = r"(?<![0-9a-z])" + re.escape(token) + r"(?![0-9a-z])"
    return re.search(pattern, (text or "").lower()) is not None


def is_generic_engine(descriptor: str) -> bool:
    """Descriptor reads like an engine/power range covering every variant."""
    if not descriptor:
        return False
    lowered = descriptor.lower()
    if any(marker in lowered for marker in _GENERIC_MARKERS):
        return True
    return _GENERIC_RANGE.search(descriptor) is not None


def is_universal(text: str) -> bool:
    """Compatibility text declares the part fits any vehicle."""
    lowered = (text or "").lower()
    return any(marker in lowered for marker in UNIVERSAL_MARKERS)


def brand_aliases(
    brand_name: str, aliases: Iterable[Sequence[str]] = DEFAULT_BRAND_ALIASES
) -> list[str]:
    """Other spellings of ``brand_name`` (normalized), excluding itself."""
    target = normalize(brand_name)
    if not target:
        return []
    found: list[str] = []
    for group in aliases:
        spellings = [normalize(s) for s in group]
        if target in spellings:
            found.extend(s for s in spellings if s and s != target and s not in found)
    return found


def brand_in_text(
    brand_name: str,
    text: str,
    aliases: Iterable[Sequence[str]] = DEFAULT_BRAND_ALIASES,
) -> bool:
    """Brand name is a substring of ``text``, or one of its aliases is a token of it.

    Aliases are short ("vw", "mb") and would match inside unrelated words as
    substrings ("mb" in "lamborghini"), so only whole-token occurrences count.
    """
    target = normalize(brand_name)
    haystack = normalize(text)
    if not target:
        return True
    if target in haystack:
        return True
    return any(has_token(haystack, alias) for alias in brand_aliases(brand_name, aliases))
