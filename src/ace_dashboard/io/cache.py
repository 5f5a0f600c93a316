from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from ace_dashboard.io.schema import Table

if TYPE_CHECKING:
    from ace_dashboard.io.read import TableProvider

LOGGER = logging.getLogger(__name__)


class CachedTableProvider:
    """Keeps fetched tables for ``ttl_seconds``; failed fetches are not cached."""

    def __init__(
        self,
        provider: TableProvider,
        ttl_seconds: float = 3600,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.provider = provider
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: dict[str, tuple[float, Table]] = {}

    def fetch_table(self, name: str) -> Table:
        with self._lock:
            entry = self._entries.get(name)
        if entry is not None and self._clock() < entry[0]:
            LOGGER.debug("cache hit for table %s", name)
            return entry[1]

        table = self.provider.fetch_table(name)
        with self._lock:
            self._entries[name] = (self._clock() + self.ttl_seconds, table)
        return table

    def clear(self) -> int:
        with self._lock:
            cleared = len(self._entries)
            self._entries.clear()
        LOGGER.info("cleared %d cached tables", cleared)
        return cleared
