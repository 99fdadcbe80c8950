"""Selection cascade controller.

Drives the dependent Brand → Model → Engine selection: loads each level's
options from the catalog when its parent changes, validates the current
choice against freshly loaded options, persists every change and notifies
observers.

Lookups run as asyncio tasks and may finish in any order. Each load of a
level bumps that level's generation; a result is applied only if its
generation is still current, so a slow answer for a brand the user has
already moved away from is dropped.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional

from partfit.catalog.base import BaseCatalogClient
from partfit.core.store import SelectionStore
from partfit.models import CatalogRecord, QuickFilter, VehicleSelection
from partfit.selection import transitions
from partfit.selection.quick_filter import QuickFilterChannel
from partfit.selection.transitions import Level

logger = logging.getLogger(__name__)

Observer = Callable[[VehicleSelection], None]

# Parent id of the brand level, which has no real parent
_ROOT = "*"


class LoadState(str, Enum):
    """Load state of one level's option list."""

    IDLE = "idle"  # no parent selected
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"  # behaves as an empty loaded list


@dataclass
class _LevelSlot:
    state: LoadState = LoadState.IDLE
    options: list[CatalogRecord] = field(default_factory=list)
    generation: int = 0
    parent_id: Optional[str] = None


class SelectionController:
    """Owns the vehicle selection and keeps option lists consistent with it.

    Usage:
        controller = SelectionController(catalog, FileSelectionStore())
        await controller.hydrate()
        await controller.select_brand("5")
        await controller.settle()
        controller.options(Level.MODEL)

    No public operation raises: lookup, persistence and observer failures
    are logged and degrade to empty lists / no-ops.
    """

    def __init__(
        self,
        catalog: BaseCatalogClient,
        store: SelectionStore,
        quick_filter_delay: float = 0.2,
    ) -> None:
        """Initialize the controller.

        Args:
            catalog: Source of brand, model and engine lists
            store: Persistence for the selection
            quick_filter_delay: Debounce of the quick filter channel, seconds
        """
        self._catalog = catalog
        self._store = store
        self._selection = VehicleSelection()
        # Id each level held after the last committed change. Empty before
        # hydration, which is what keeps hydration from cascading clears.
        self._previous_ids: dict[Level, Optional[str]] = dict.fromkeys(Level)
        self._levels: dict[Level, _LevelSlot] = {level: _LevelSlot() for level in Level}
        self._observers: list[Observer] = []
        self._last_published: Optional[str] = None
        self._tasks: set[asyncio.Task] = set()
        self.quick_filter = QuickFilterChannel(delay=quick_filter_delay)

    # ─────────────────────────────────────────────────────────────────────
    # Public operations
    # ─────────────────────────────────────────────────────────────────────

    def get_state(self) -> VehicleSelection:
        """Current selection."""
        return self._selection

    def options(self, level: Level) -> list[CatalogRecord]:
        """Loaded options of ``level`` (empty unless LOADED)."""
        return list(self._levels[level].options)

    def level_state(self, level: Level) -> LoadState:
        return self._levels[level].state

    def on_change(self, observer: Observer) -> Callable[[], None]:
        """Register ``observer``; returns a callable that unregisters it."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    async def hydrate(self) -> VehicleSelection:
        """Restore the stored selection and start loading option lists."""
        try:
            stored = self._store.read()
        except Exception:
            logger.debug("Selection store read failed", exc_info=True)
            stored = VehicleSelection()

        logger.info("Hydrating selection: %s", stored.serialized())
        self._commit(transitions.hydrate(stored))
        self._load(Level.BRAND, _ROOT)
        return self._selection

    async def select_brand(self, brand_id: Any, name: Optional[str] = None) -> VehicleSelection:
        """Select a brand; an empty id clears it and everything below."""
        return self._choose(Level.BRAND, transitions.choose_brand, brand_id, name)

    async def select_model(self, model_id: Any, name: Optional[str] = None) -> VehicleSelection:
        """Select a model of the current brand."""
        return self._choose(Level.MODEL, transitions.choose_model, model_id, name)

    async def select_engine(self, engine_id: Any, name: Optional[str] = None) -> VehicleSelection:
        """Select an engine of the current model."""
        return self._choose(Level.ENGINE, transitions.choose_engine, engine_id, name)

    async def apply(self, selection: VehicleSelection) -> VehicleSelection:
        """Adopt a selection handed back by a consumer, level by level."""
        if selection.serialized() == self._selection.serialized():
            return self._selection
        await self.select_brand(selection.brand_id, selection.brand_name)
        await self.select_model(selection.model_id, selection.model_name)
        await self.select_engine(selection.engine_id, selection.engine_name)
        return self._selection

    async def reset(self) -> VehicleSelection:
        """Clear every level and forget the stored selection."""
        self._commit(transitions.cleared(), persist=False)
        self._previous_ids = dict.fromkeys(Level)
        try:
            self._store.clear()
        except Exception:
            logger.debug("Selection store clear failed", exc_info=True)
        return self._selection

    def set_quick_filter(
        self, category_id: Optional[str] = None, search_term: Optional[str] = None
    ) -> None:
        """Queue a category/search narrowing for debounced publication."""
        self.quick_filter.update(
            QuickFilter(category_id=category_id, search_term=search_term)
        )

    async def settle(self) -> None:
        """Wait until no lookup is outstanding, including follow-up lookups."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    # ─────────────────────────────────────────────────────────────────────
    # State changes
    # ─────────────────────────────────────────────────────────────────────

    def _choose(
        self,
        level: Level,
        transition: Callable[..., VehicleSelection],
        record_id: Any,
        name: Optional[str],
    ) -> VehicleSelection:
        updated = transition(
            self._selection,
            record_id,
            previous_id=self._previous_ids[level],
            name=name,
            options=self._levels[level].options,
        )
        if updated is self._selection and record_id:
            logger.debug("Ignoring %s %r: nothing to change or no parent", level.value, record_id)
        self._commit(updated)
        return self._selection

    def _commit(self, selection: VehicleSelection, persist: bool = True) -> None:
        """Make ``selection`` current and react to what changed."""
        old = self._selection
        if selection == old:
            return
        self._selection = selection

        if selection.brand_id != old.brand_id:
            self._load(Level.MODEL, selection.brand_id)
        if selection.model_id != old.model_id:
            self._load(Level.ENGINE, selection.model_id)

        self._previous_ids = {
            Level.BRAND: selection.brand_id,
            Level.MODEL: selection.model_id,
            Level.ENGINE: selection.engine_id,
        }

        if persist:
            self._persist(selection)
        self._publish(selection)

    def _persist(self, selection: VehicleSelection) -> None:
        try:
            self._store.write(selection)
        except Exception:
            logger.debug("Selection store write failed", exc_info=True)

    def _publish(self, selection: VehicleSelection) -> None:
        serialized = selection.serialized()
        if serialized == self._last_published:
            return
        self._last_published = serialized
        for observer in list(self._observers):
            try:
                observer(selection)
            except Exception:
                logger.warning("Selection observer failed", exc_info=True)

    # ─────────────────────────────────────────────────────────────────────
    # Option loading
    # ─────────────────────────────────────────────────────────────────────

    def _load(self, level: Level, parent_id: Optional[str]) -> None:
        """Start a new generation for ``level``; an empty parent idles it."""
        slot = self._levels[level]
        slot.generation += 1
        slot.parent_id = parent_id
        slot.options = []

        if not parent_id:
            slot.state = LoadState.IDLE
            return

        slot.state = LoadState.LOADING
        task = asyncio.get_running_loop().create_task(
            self._fetch(level, parent_id, slot.generation)
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _lookup(self, level: Level, parent_id: str) -> list[CatalogRecord]:
        if level is Level.BRAND:
            return list(await self._catalog.list_brands())
        if level is Level.MODEL:
            return list(await self._catalog.list_models(parent_id))
        return list(await self._catalog.list_engines(parent_id))

    async def _fetch(self, level: Level, parent_id: str, generation: int) -> None:
        try:
            options = await self._lookup(level, parent_id)
            state = LoadState.LOADED
        except Exception:
            logger.warning(
                "Loading %s options for %s failed", level.value, parent_id, exc_info=True
            )
            options, state = [], LoadState.ERROR

        slot = self._levels[level]
        if generation != slot.generation:
            logger.debug(
                "Discarding stale %s options for %s (generation %d, now %d)",
                level.value,
                parent_id,
                generation,
                slot.generation,
            )
            return

        slot.options = options
        slot.state = state
        logger.debug("Loaded %d %s options for %s", len(options), level.value, parent_id)
        self._options_loaded(level, options)

    def _options_loaded(self, level: Level, options: list[CatalogRecord]) -> None:
        selection = self._selection
        if level is Level.MODEL:
            selection = transitions.prune_model(selection, options)
        elif level is Level.ENGINE:
            selection = transitions.prune_engine(selection, options)
        selection = transitions.resolve_label(selection, level, options)
        self._commit(selection)
