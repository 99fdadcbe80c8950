"""Catalog level records (brands, models, engines, manufacturers).

The upstream catalog names the same attribute differently per endpoint
(``id`` vs ``brand_id`` vs ``sub_model_id``, ``name`` vs ``title`` vs
``model_name``...). Each record declares the names it accepts through
validation aliases so nothing downstream has to know about them.
"""

from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def coerce_text(value: Any) -> Optional[str]:
    """Turn an upstream scalar into a stripped string, or None when blank."""
    if value is None or isinstance(value, (dict, list, bool)):
        return None
    text = str(value).strip()
    return text or None


class CatalogRecord(BaseModel):
    """Common shape of a selectable catalog entry."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    id: str
    name: str
    year: Optional[str] = None
    year_2: Optional[str] = None

    @field_validator("id", "name", mode="before")
    @classmethod
    def require_text(cls, v: Any) -> str:
        """Ids are unformatted; accept ints and strings alike."""
        text = coerce_text(v)
        if text is None:
            raise ValueError("must be a non-empty scalar")
        return text

    @field_validator("year", "year_2", mode="before")
    @classmethod
    def optional_text(cls, v: Any) -> Optional[str]:
        return coerce_text(v)

    @property
    def year_label(self) -> str:
        """Model-year range, e.g. '2010' or '2009 - 2012'."""
        if self.year and self.year_2:
            if self.year == self.year_2:
                return self.year
            return f"{self.year} - {self.year_2}"
        return self.year or ""

    @property
    def label(self) -> str:
        """Display label shown in selection lists."""
        return self.name


class Brand(CatalogRecord):
    """Vehicle brand (maker)."""

    id: str = Field(validation_alias=AliasChoices("id", "brand_id"))
    name: str = Field(
        validation_alias=AliasChoices("name", "title", "brand_name", "brand")
    )


class VehicleModel(CatalogRecord):
    """Vehicle model belonging to a brand."""

    id: str = Field(validation_alias=AliasChoices("id", "model_id"))
    name: str = Field(
        validation_alias=AliasChoices("name", "model_name", "model", "title")
    )


class Engine(CatalogRecord):
    """Engine / sub-model belonging to a vehicle model."""

    id: str = Field(validation_alias=AliasChoices("id", "sub_model_id"))
    name: str = Field(
        validation_alias=AliasChoices(
            "name",
            "engine",
            "trim",
            "submodel_name",
            "sub_model_name",
            "title",
        )
    )

    @property
    def label(self) -> str:
        """Engine name with its model-year range, e.g. '2.0 TDI (2009 - 2012)'."""
        years = self.year_label
        return f"{self.name} ({years})" if years else self.name


class Manufacturer(CatalogRecord):
    """Part manufacturer (the company producing the part, not the car)."""

    id: str = Field(
        validation_alias=AliasChoices("id", "saler_id", "maker_id", "manufacturer_id")
    )
    name: str = Field(validation_alias=AliasChoices("name", "title", "maker_name"))
