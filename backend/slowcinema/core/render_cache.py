import threading
import time
from collections import OrderedDict
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, TypeVar

T = TypeVar("T")

DEFAULT_MAX_ENTRIES = 1024

__all__ = [
    "DEFAULT_MAX_ENTRIES",
    "RenderCache",
]


@dataclass
class _Entry:
    value: Any
    tags: frozenset[str]
    path: str | None
    expires_at: float | None


class RenderCache:
    """
    Process-lifetime cache of rendered page and API payloads.

    Every entry carries the tags it depends on, the request path it was
    rendered for and a time-to-live taken from the route's revalidation
    hint. Invalidating a tag or a path drops matching entries so the next
    request recomputes them. Expired entries are dropped when they are next
    looked at, and the least recently used entry is evicted once the cache
    holds ``max_entries``.

    A render that overlaps an invalidation is returned to its caller but not
    stored, since it may have read the data the invalidation was about.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        *,
        max_entries: int = DEFAULT_MAX_ENTRIES,
    ):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._entries: OrderedDict[str, _Entry] = OrderedDict()
        self._lock = threading.Lock()
        self._clock = clock
        self._max_entries = max_entries
        self._epoch = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get_or_compute(
        self,
        key: str,
        compute: Callable[[], T],
        *,
        tags: Iterable[str] = (),
        path: str | None = None,
        ttl: float | None = None,
    ) -> T:
        with self._lock:
            entry = self._lookup(key)
            if entry is not None:
                return entry.value  # type: ignore[no-any-return]
            epoch = self._epoch

        value = compute()
        expires_at = self._clock() + ttl if ttl is not None else None
        with self._lock:
            if self._epoch != epoch:
                return value
            self._entries[key] = _Entry(
                value=value,
                tags=frozenset(tags),
                path=path,
                expires_at=expires_at,
            )
            self._entries.move_to_end(key)
            while len(self._entries) > self._max_entries:
                self._entries.popitem(last=False)
        return value

    def invalidate_tag(self, tag: str) -> int:
        with self._lock:
            return self._drop(lambda entry: tag in entry.tags)

    def invalidate_path(self, path: str) -> int:
        with self._lock:
            return self._drop(lambda entry: entry.path == path)

    def is_cached(self, key: str) -> bool:
        with self._lock:
            return self._lookup(key, touch=False) is not None

    def clear(self) -> None:
        with self._lock:
            self._epoch += 1
            self._entries.clear()

    def _lookup(self, key: str, *, touch: bool = True) -> _Entry | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.expires_at is not None and self._clock() >= entry.expires_at:
            del self._entries[key]
            return None
        if touch:
            self._entries.move_to_end(key)
        return entry

    def _drop(self, predicate: Callable[[_Entry], bool]) -> int:
        self._epoch += 1
        keys = [key for key, entry in self._entries.items() if predicate(entry)]
        for key in keys:
            del self._entries[key]
        return len(keys)
