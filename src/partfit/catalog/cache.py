"""Manufacturer list cache with a fixed TTL and shared in-flight requests."""

import asyncio
import logging
import time
from typing import Awaitable, Callable, Generic, Optional, TypeVar

from cachetools import TTLCache

from partfit.models import Manufacturer

logger = logging.getLogger(__name__)

T = TypeVar("T")


class InflightGuard(Generic[T]):
    """Shares one outstanding request between all concurrent callers."""

    def __init__(self) -> None:
        self._task: Optional[asyncio.Future[T]] = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run(self, factory: Callable[[], Awaitable[T]]) -> T:
        """Await the outstanding request, starting one if none is running."""
        task = self._task
        if task is None or task.done():
            task = asyncio.ensure_future(factory())
            task.add_done_callback(self._release)
            self._task = task
        # One caller being cancelled must not cancel the shared request
        return await asyncio.shield(task)

    def reset(self) -> None:
        """Forget the outstanding request; the next run() starts a new one."""
        self._task = None

    def _release(self, task: "asyncio.Future[T]") -> None:
        if not task.cancelled():
            task.exception()  # mark retrieved
        if self._task is task:
            self._task = None


class ManufacturerCache:
    """Cached manufacturer list.

    Usage:
        cache = ManufacturerCache(catalog.fetch_manufacturers, ttl=300)
        manufacturers = await cache.get()

    ``fetch`` must raise on failure; a failed load is never cached.
    """

    ERROR_MESSAGE = "Unable to load manufacturers right now."

    _KEY = "manufacturers"

    def __init__(
        self,
        fetch: Callable[[], Awaitable[list[Manufacturer]]],
        ttl: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
        guard: Optional[InflightGuard[list[Manufacturer]]] = None,
    ) -> None:
        """Initialize the cache.

        Args:
            fetch: Coroutine function loading the full list
            ttl: Seconds a loaded list stays fresh
            clock: Monotonic time source (injectable for tests)
            guard: In-flight request guard shared by concurrent callers
        """
        self.ttl = ttl
        self._fetch = fetch
        self._cache: TTLCache[str, list[Manufacturer]] = TTLCache(
            maxsize=1, ttl=ttl, timer=clock
        )
        self._guard = guard if guard is not None else InflightGuard()
        self._generation = 0
        self.last_error: Optional[str] = None

    @property
    def cached(self) -> bool:
        """A loaded list is held and has not expired."""
        return self._KEY in self._cache

    async def get(self) -> list[Manufacturer]:
        """Cached list if fresh, otherwise the result of a (shared) fetch."""
        value = self._cache.get(self._KEY)
        if value is not None:
            return list(value)

        generation = self._generation
        try:
            value = await self._guard.run(self._fetch)
        except Exception:
            logger.warning("Failed to load manufacturers", exc_info=True)
            self.last_error = self.ERROR_MESSAGE
            return []

        # An invalidate() while we were waiting wins over this result
        if generation == self._generation:
            self._cache[self._KEY] = list(value)
            self.last_error = None
        return list(value)

    def invalidate(self) -> None:
        """Drop the cached list and detach from any in-flight request."""
        self._cache.clear()
        self._generation += 1
        self._guard.reset()

    async def refresh(self) -> list[Manufacturer]:
        """Invalidate, then fetch again."""
        self.invalidate()
        return await self.get()
