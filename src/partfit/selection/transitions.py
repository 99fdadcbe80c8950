"""Pure state transitions of the Brand → Model → Engine selection.

Each user action maps the current selection to a complete new one. The
controller decides *when* to apply them; these functions decide *what*
changes, which keeps the reset and validation rules testable on their own.
"""

from enum import Enum
from typing import Any, Optional, Sequence

from partfit.models import CatalogRecord, VehicleSelection
from partfit.models.catalog import coerce_text


class Level(str, Enum):
    """Selection levels, parent first."""

    BRAND = "brand"
    MODEL = "model"
    ENGINE = "engine"


_DEPENDENT_FIELDS = {
    Level.BRAND: ("model_id", "model_name", "engine_id", "engine_name"),
    Level.MODEL: ("engine_id", "engine_name"),
    Level.ENGINE: (),
}


def cleared() -> VehicleSelection:
    return VehicleSelection()


def label_for(record_id: Optional[str], options: Sequence[CatalogRecord]) -> Optional[str]:
    """Label of ``record_id`` in a loaded option list, if present."""
    if not record_id:
        return None
    for record in options:
        if record.id == record_id:
            return record.label
    return None


def hydrate(stored: VehicleSelection) -> VehicleSelection:
    """Restore a stored selection without cascading any clear.

    Ids whose parent id is missing cannot be valid and are dropped; names are
    kept as labels.
    """
    model_id = stored.model_id if stored.brand_id else None
    engine_id = stored.engine_id if model_id else None
    if (model_id, engine_id) == (stored.model_id, stored.engine_id):
        return stored
    return stored.model_copy(update={"model_id": model_id, "engine_id": engine_id})


def _choose(
    current: VehicleSelection,
    level: Level,
    new_id: Any,
    previous_id: Optional[str],
    name: Optional[str],
    options: Sequence[CatalogRecord],
) -> VehicleSelection:
    new_id = coerce_text(new_id)
    name = coerce_text(name)
    current_id = getattr(current, f"{level.value}_id")

    if new_id == current_id and name is None:
        return current

    update: dict[str, Any] = {
        f"{level.value}_id": new_id,
        f"{level.value}_name": name or label_for(new_id, options),
    }
    # A user change away from a known value invalidates everything below it.
    # During hydration previous_id is empty and nothing is cleared.
    if previous_id and previous_id != new_id:
        update.update(dict.fromkeys(_DEPENDENT_FIELDS[level]))
    return current.model_copy(update=update)


def choose_brand(
    current: VehicleSelection,
    brand_id: Any,
    *,
    previous_id: Optional[str],
    name: Optional[str] = None,
    options: Sequence[CatalogRecord] = (),
) -> VehicleSelection:
    """Select (or, with an empty id, clear) the brand."""
    return _choose(current, Level.BRAND, brand_id, previous_id, name, options)


def choose_model(
    current: VehicleSelection,
    model_id: Any,
    *,
    previous_id: Optional[str],
    name: Optional[str] = None,
    options: Sequence[CatalogRecord] = (),
) -> VehicleSelection:
    """Select the model. Ignored while no brand is selected."""
    if coerce_text(model_id) and not current.brand_id:
        return current
    return _choose(current, Level.MODEL, model_id, previous_id, name, options)


def choose_engine(
    current: VehicleSelection,
    engine_id: Any,
    *,
    previous_id: Optional[str],
    name: Optional[str] = None,
    options: Sequence[CatalogRecord] = (),
) -> VehicleSelection:
    """Select the engine. Ignored while no model is selected."""
    if coerce_text(engine_id) and not current.model_id:
        return current
    return _choose(current, Level.ENGINE, engine_id, previous_id, name, options)


def prune_model(
    current: VehicleSelection, options: Sequence[CatalogRecord]
) -> VehicleSelection:
    """Drop a model the freshly loaded list does not contain.

    An empty list is not evidence against the model (it is also what a
    failed lookup yields), so nothing is pruned then.
    """
    if not current.model_id or not options:
        return current
    if any(record.id == current.model_id for record in options):
        return current
    return current.model_copy(
        update={"model_id": None, "model_name": None, "engine_id": None, "engine_name": None}
    )


def prune_engine(
    current: VehicleSelection, options: Sequence[CatalogRecord]
) -> VehicleSelection:
    """Drop an engine id missing from the loaded list; its name stays as a placeholder."""
    if not current.engine_id:
        return current
    if any(record.id == current.engine_id for record in options):
        return current
    return current.model_copy(update={"engine_id": None})


def resolve_label(
    current: VehicleSelection, level: Level, options: Sequence[CatalogRecord]
) -> VehicleSelection:
    """Fill a missing name for the selected id from the loaded options."""
    record_id = getattr(current, f"{level.value}_id")
    if not record_id or getattr(current, f"{level.value}_name"):
        return current
    label = label_for(record_id, options)
    if label is None:
        return current
    return current.model_copy(update={f"{level.value}_name": label})
