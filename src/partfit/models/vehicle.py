"""Vehicle selection data model."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from partfit.models.catalog import coerce_text


class VehicleSelection(BaseModel):
    """The shopper's Brand → Model → Engine choice.

    Every field is optional and independently settable. Names may outlive
    their ids: an engine id invalidated by the catalog keeps its name as a
    readable placeholder.

    Persisted and published with camelCase keys (``brandId``, ``modelName``...).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
        protected_namespaces=(),
    )

    brand_id: Optional[str] = None
    brand_name: Optional[str] = None
    model_id: Optional[str] = None
    model_name: Optional[str] = None
    engine_id: Optional[str] = None
    engine_name: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def normalize_blank(cls, v: Any) -> Optional[str]:
        """Upstream ids may be ints; empty strings mean 'not set'."""
        return coerce_text(v)

    @property
    def is_empty(self) -> bool:
        """True when no level carries an id or a name."""
        return not any(
            (
                self.brand_id,
                self.brand_name,
                self.model_id,
                self.model_name,
                self.engine_id,
                self.engine_name,
            )
        )

    @property
    def has_model(self) -> bool:
        return bool(self.model_id or self.model_name)

    @property
    def has_engine(self) -> bool:
        return bool(self.engine_id or self.engine_name)

    @property
    def display_name(self) -> str:
        """Human readable vehicle, e.g. 'Toyota Corolla 1.8 VVT-i'."""
        parts = [self.brand_name, self.model_name, self.engine_name]
        return " ".join(p for p in parts if p)

    def to_record(self) -> dict[str, str]:
        """Store/wire representation: camelCase keys, unset fields omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def serialized(self) -> str:
        """Stable JSON form, used to de-duplicate publications."""
        return self.model_dump_json(by_alias=True, exclude_none=True)


class QuickFilter(BaseModel):
    """Ancillary narrowing layered on top of the vehicle selection."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    category_id: Optional[str] = None
    search_term: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def normalize_blank(cls, v: Any) -> Optional[str]:
        return coerce_text(v)

    @property
    def is_empty(self) -> bool:
        return not (self.category_id or self.search_term)
