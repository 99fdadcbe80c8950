"""Debounced publication of the category/search quick filter."""

import asyncio
import logging
from typing import Callable, Optional

from partfit.models import QuickFilter

logger = logging.getLogger(__name__)

QuickFilterObserver = Callable[[QuickFilter], None]


class QuickFilterChannel:
    """Publishes the latest QuickFilter once updates pause for ``delay`` seconds.

    A filter with neither a category nor a search term is never published, so
    a vacuous filter cannot reset a listing that is already narrowed.
    """

    def __init__(self, delay: float = 0.2) -> None:
        self.delay = delay
        self._observers: list[QuickFilterObserver] = []
        self._pending: Optional[QuickFilter] = None
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def pending(self) -> Optional[QuickFilter]:
        return self._pending

    def subscribe(self, observer: QuickFilterObserver) -> Callable[[], None]:
        """Register ``observer``; returns a callable that unregisters it."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def update(self, quick: QuickFilter) -> None:
        """Replace the pending filter and restart the delay.

        Must be called from a running event loop.
        """
        self._pending = quick
        if self._handle is not None:
            self._handle.cancel()
        self._handle = asyncio.get_running_loop().call_later(self.delay, self._emit)

    def flush(self) -> None:
        """Publish the pending filter now."""
        if self._handle is not None:
            self._handle.cancel()
        self._emit()

    def cancel(self) -> None:
        """Drop the pending filter without publishing."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._pending = None

    def _emit(self) -> None:
        self._handle = None
        quick, self._pending = self._pending, None
        if quick is None or quick.is_empty:
            logger.debug("Quick filter empty, not published")
            return
        for observer in list(self._observers):
            try:
                observer(quick)
            except Exception:
                logger.warning("Quick filter observer failed", exc_info=True)
