from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Hashable, Optional, TypeVar

from ..core.constants import DEFAULT_QUERY_STALE_SECONDS

logger = logging.getLogger(__name__)

T = TypeVar("T")
QueryKey = tuple[Hashable, ...]


@dataclass
class _Entry:
    value: Any
    fetched_at: float


@dataclass
class _InFlight:
    generation: int
    done: threading.Event = field(default_factory=threading.Event)
    value: Any = None
    error: Optional[BaseException] = None


class QueryCache:
    """In-memory read cache keyed by ``(entity, *params)`` tuples.

    - Entries younger than ``stale_seconds`` are served without refetching.
    - At most one fetch per key is in flight; concurrent readers wait for it.
    - ``invalidate(prefix...)`` drops every key starting with the prefix and
      bumps its generation, so a fetch that started before the invalidation
      still answers its callers but is not stored.

    Build one per container; nothing here is process-global.
    """

    def __init__(self, *, stale_seconds: float = DEFAULT_QUERY_STALE_SECONDS, clock: Callable[[], float] = time.monotonic):
        self._stale_seconds = float(stale_seconds)
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: dict[QueryKey, _Entry] = {}
        self._in_flight: dict[QueryKey, _InFlight] = {}
        self._generations: dict[QueryKey, int] = {}

    def _is_fresh(self, entry: _Entry) -> bool:
        return (self._clock() - entry.fetched_at) < self._stale_seconds

    def get_or_fetch(self, key: QueryKey, fetch: Callable[[], T]) -> T:
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and self._is_fresh(entry):
                return entry.value

            flight = self._in_flight.get(key)
            owner = flight is None
            if owner:
                flight = _InFlight(generation=self._generations.get(key, 0))
                self._in_flight[key] = flight

        if not owner:
            logger.debug("Joining in-flight fetch for %s", key)
            flight.done.wait()
            if flight.error is not None:
                raise flight.error
            return flight.value

        try:
            value = fetch()
        except BaseException as exc:
            flight.error = exc
            raise
        else:
            flight.value = value
            with self._lock:
                if self._generations.get(key, 0) == flight.generation:
                    self._entries[key] = _Entry(value=value, fetched_at=self._clock())
                else:
                    logger.debug("Discarding superseded result for %s", key)
            return value
        finally:
            with self._lock:
                if self._in_flight.get(key) is flight:
                    del self._in_flight[key]
            flight.done.set()

    def peek(self, key: QueryKey) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(key)
            return entry.value if entry is not None else None

    def invalidate(self, *prefix: Hashable) -> int:
        """Drop cached keys starting with ``prefix``; returns how many keys were hit."""

        n = len(prefix)
        with self._lock:
            hit = {k for k in (*self._entries, *self._in_flight) if k[:n] == prefix}
            for key in hit:
                self._entries.pop(key, None)
                self._in_flight.pop(key, None)
                self._generations[key] = self._generations.get(key, 0) + 1

        if hit:
            logger.debug("Invalidated %d cache key(s) under %s", len(hit), prefix)
        return len(hit)

    def clear(self) -> None:
        with self._lock:
            for key in (*self._entries, *self._in_flight):
                self._generations[key] = self._generations.get(key, 0) + 1
            self._entries.clear()
            self._in_flight.clear()
