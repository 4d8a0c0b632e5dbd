"""Response cache for backend reads, keyed by resource path.

Invalidation-on-write: after a successful create/update/delete against a
path, the cached read for that path and for every path nested below it
(``/api/config/forms`` covers ``/api/config/forms/case_form``) is marked
stale and fetched again on next access. Entries can also go stale with age
when ``stale_after`` is set.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    data: Any
    fetched_at: float
    stale: bool = False


class QueryCache:
    """Path-keyed cache of decoded JSON responses"""

    def __init__(
        self,
        stale_after: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize cache.

        Args:
            stale_after: Seconds after which an entry is re-fetched
                (default: None, entries stay fresh until invalidated)
            clock: Monotonic time source
        """
        self.stale_after = stale_after
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    def __contains__(self, path: str) -> bool:
        return path in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, path: str) -> Optional[CacheEntry]:
        """Return the fresh entry for ``path``, or None if absent or stale."""
        entry = self._entries.get(path)
        if entry is None or self.is_stale(path):
            return None
        return entry

    def set(self, path: str, data: Any) -> None:
        self._entries[path] = CacheEntry(data=data, fetched_at=self._clock())

    def is_stale(self, path: str) -> bool:
        entry = self._entries.get(path)
        if entry is None:
            return True
        if entry.stale:
            return True
        if self.stale_after is not None:
            return self._clock() - entry.fetched_at >= self.stale_after
        return False

    def invalidate(self, path: str) -> int:
        """Mark ``path`` and the paths nested below it stale.

        Returns:
            Number of entries marked stale
        """
        prefix = path.rstrip("/") + "/"
        count = 0
        for key, entry in self._entries.items():
            if key == path or key.startswith(prefix):
                entry.stale = True
                count += 1
        if count:
            logger.debug(f"Invalidated {count} cached read(s) under {path}")
        return count

    def clear(self) -> None:
        self._entries.clear()
