"""
In-process read-through cache for slow-changing reference data
(working-hours calendars, the service catalogue)
"""
import logging
import threading
import time

from cachetools import TTLCache

logger = logging.getLogger(__name__)

_MISSING = object()


class ReadThroughCache:
    """TTLCache wrapper that loads missing or stale keys through a loader callable"""

    def __init__(self, ttl_seconds=300, maxsize=1024, clock=time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._entries = TTLCache(maxsize=maxsize, ttl=ttl_seconds, timer=clock)
        # TTLCache is not thread-safe
        self._lock = threading.Lock()

    def get_or_load(self, key, loader):
        """Return the cached value for key, calling loader() on a miss or expiry"""
        with self._lock:
            value = self._entries.get(key, _MISSING)
        if value is not _MISSING:
            logger.debug("Cache HIT: %s", key)
            return value

        logger.debug("Cache MISS: %s", key)
        value = loader()
        with self._lock:
            self._entries[key] = value
        logger.debug("Cache SET: %s (TTL: %ss)", key, self.ttl_seconds)
        return value

    def invalidate(self, key):
        with self._lock:
            self._entries.pop(key, None)
        logger.debug("Cache DELETE: %s", key)

    def clear(self):
        with self._lock:
            self._entries.clear()

    def __len__(self):
        with self._lock:
            self._entries.expire()
            return len(self._entries)
