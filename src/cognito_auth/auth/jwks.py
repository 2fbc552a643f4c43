# Assumptions:
# - A pool's JWKS is fetched once and kept for the process lifetime
# - Key rotation is picked up only through set_key_set() or invalidate()
# - Concurrent first calls for a pool share a single fetch

import threading

import structlog
from jwt import PyJWKSet

from cognito_auth.application.ports.key_directory import KeyDirectory
from cognito_auth.domain.errors import KeyFetchError

logger = structlog.get_logger(__name__)

PoolKey = tuple[str, str]


class _Flight:
    """A fetch in progress that racing callers wait on"""

    def __init__(self):
        self.done = threading.Event()
        self.key_set: PyJWKSet | None = None
        self.error: KeyFetchError | None = None


class KeyDirectoryCache:
    def __init__(self, directory: KeyDirectory):
        self.directory = directory
        self._key_sets: dict[PoolKey, PyJWKSet] = {}
        self._flights: dict[PoolKey, _Flight] = {}
        self._lock = threading.Lock()

    def get_key_set(self, region: str, user_pool_id: str) -> PyJWKSet:
        """
        Return the pool's key set, fetching it on first use

        Raises:
            KeyFetchError: If the fetch fails. Callers racing on the same
                fetch all receive the same error; nothing is cached.
        """
        pool = (region, user_pool_id)

        with self._lock:
            cached = self._key_sets.get(pool)
            if cached is not None:
                return cached

            flight = self._flights.get(pool)
            leader = flight is None
            if leader:
                flight = _Flight()
                self._flights[pool] = flight

        if not leader:
            flight.done.wait()
            if flight.error is not None:
                raise flight.error
            if flight.key_set is None:
                raise KeyFetchError("JWKS fetch was interrupted", details={"region": region})
            return flight.key_set

        try:
            key_set = self.directory.fetch_key_set(region, user_pool_id)
        except KeyFetchError as e:
            flight.error = e
            raise
        except Exception as e:
            flight.error = KeyFetchError(f"Failed to fetch JWKS: {e}", details={"region": region})
            raise flight.error from e
        else:
            flight.key_set = key_set
            with self._lock:
                self._key_sets[pool] = key_set
            logger.info("JWKS cached", region=region, key_count=len(key_set.keys))
            return key_set
        finally:
            with self._lock:
                self._flights.pop(pool, None)
            flight.done.set()

    def set_key_set(self, key_set: PyJWKSet, region: str, user_pool_id: str) -> None:
        """Replace the cached key set for a pool without fetching"""
        with self._lock:
            self._key_sets[(region, user_pool_id)] = key_set

    def invalidate(self, region: str | None = None, user_pool_id: str | None = None) -> None:
        """Drop one pool's cached key set, or every pool's when called without arguments"""
        with self._lock:
            if region is None and user_pool_id is None:
                self._key_sets.clear()
            else:
                self._key_sets.pop((region, user_pool_id), None)

    def is_cached(self, region: str, user_pool_id: str) -> bool:
        with self._lock:
            return (region, user_pool_id) in self._key_sets
