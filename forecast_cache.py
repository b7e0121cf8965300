import logging
import threading

logger = logging.getLogger(__name__)


class ForecastCache:
    """
    Thread-safe memo of assembled forecasts keyed by (city, offline_mode).
    Entries live until invalidate() or process exit. Concurrent misses for the
    same key each run the loader; the last one to finish wins.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._entries = {}
        self._generation = 0

    def get(self, key):
        """Peek at an entry without loading it. Request handling goes through get_or_load()."""
        with self._lock:
            return self._entries.get(key)

    def get_or_load(self, key, loader):
        with self._lock:
            if key in self._entries:
                logger.debug("Forecast cache hit: %s", key)
                return self._entries[key]
            generation = self._generation

        logger.debug("Forecast cache miss: %s", key)
        value = loader()

        with self._lock:
            # an invalidation while loading means the result may belong to the old mode
            if generation == self._generation:
                self._entries[key] = value
        return value

    def invalidate(self):
        with self._lock:
            dropped = len(self._entries)
            self._entries.clear()
            self._generation += 1
        logger.info("Forecast cache cleared (%d entries dropped)", dropped)

    def __len__(self):
        with self._lock:
            return len(self._entries)

    def __contains__(self, key):
        with self._lock:
            return key in self._entries
