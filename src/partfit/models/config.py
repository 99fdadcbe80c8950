"""Application configuration model."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from partfit.fitment.text import DEFAULT_BRAND_ALIASES

DEFAULT_BASE_URL = "https://stockmgt.gapaautoparts.com/api"


class CatalogSettings(BaseModel):
    """Where vehicle and product data comes from."""

    # "http" (remote catalog service) or "file" (local JSON document)
    kind: str = Field(default="http")
    base_url: str = Field(default=DEFAULT_BASE_URL)
    timeout_seconds: float = Field(default=15.0, gt=0)
    file: Optional[Path] = None

    @field_validator("kind")
    @classmethod
    def lower_kind(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


class AppConfig(BaseModel):
    """Complete partfit configuration (config.toml)."""

    catalog: CatalogSettings = Field(default_factory=CatalogSettings)

    # Debounce for the category/search quick filter channel
    quick_filter_delay_ms: int = Field(default=200, ge=0)

    # Manufacturer list cache lifetime
    manufacturers_ttl_seconds: float = Field(default=300.0, ge=0)

    # Groups of interchangeable brand spellings
    brand_aliases: list[list[str]] = Field(
        default_factory=lambda: [list(group) for group in DEFAULT_BRAND_ALIASES]
    )

    @field_validator("brand_aliases")
    @classmethod
    def drop_trivial_groups(cls, v: list[list[str]]) -> list[list[str]]:
        """A group needs at least two spellings to mean anything."""
        groups = []
        for group in v:
            cleaned = [s.strip().lower() for s in group if s and s.strip()]
            if len(cleaned) >= 2:
                groups.append(cleaned)
        return groups

    @property
    def quick_filter_delay(self) -> float:
        """Debounce delay in seconds."""
        return self.quick_filter_delay_ms / 1000.0
