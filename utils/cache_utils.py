"""
Local key-value store used for the badge cache, request generations and the
CLI session token.

Values are strings; callers serialize JSON themselves. Store failures are
logged and reported as a miss (``None`` / ``False``), never raised.
"""
import logging
import threading
from typing import Dict, Optional
import redis
from config.settings import settings

logger = logging.getLogger(__name__)

# Redis client (lazy initialization)
_redis_client: Optional[redis.Redis] = None


def get_redis_client() -> redis.Redis:
    """Get Redis client with lazy initialization"""
    global _redis_client
    if _redis_client is None:
        _redis_client = redis.from_url(settings.REDIS_URL, decode_responses=True)
    return _redis_client


class KeyValueStore:
    """get/set/remove/incr capability shared by every store backend"""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> bool:
        raise NotImplementedError

    def remove(self, key: str) -> bool:
        raise NotImplementedError

    def incr(self, key: str, amount: int = 1) -> Optional[int]:
        raise NotImplementedError


class RedisStore(KeyValueStore):
    """Redis-backed store"""

    def __init__(self, client: Optional[redis.Redis] = None):
        self.redis_client = client or get_redis_client()

    def get(self, key: str) -> Optional[str]:
        """Get value from store"""
        try:
            return self.redis_client.get(key)
        except redis.RedisError as e:
            logger.warning("Store read failed for %s: %s", key, e)
            return None

    def set(self, key: str, value: str) -> bool:
        """Set value in store (no expiry)"""
        try:
            return bool(self.redis_client.set(key, value))
        except redis.RedisError as e:
            logger.warning("Store write failed for %s: %s", key, e)
            return False

    def remove(self, key: str) -> bool:
        """Delete key from store"""
        try:
            return bool(self.redis_client.delete(key))
        except redis.RedisError as e:
            logger.warning("Store delete failed for %s: %s", key, e)
            return False

    def incr(self, key: str, amount: int = 1) -> Optional[int]:
        """Atomically increment a counter"""
        try:
            return self.redis_client.incr(key, amount)
        except redis.RedisError as e:
            logger.warning("Store increment failed for %s: %s", key, e)
            return None


class MemoryStore(KeyValueStore):
    """In-process store for local development and tests"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> bool:
        with self._lock:
            self._data[key] = value
        return True

    def remove(self, key: str) -> bool:
        with self._lock:
            return self._data.pop(key, None) is not None

    def incr(self, key: str, amount: int = 1) -> Optional[int]:
        with self._lock:
            try:
                current = int(self._data.get(key, "0"))
            except ValueError:
                logger.warning("Store increment failed for %s: not an integer", key)
                return None
            current += amount
            self._data[key] = str(current)
            return current


_store: Optional[KeyValueStore] = None


def get_store() -> KeyValueStore:
    """Return the configured store (lazy singleton), usable as a FastAPI dependency"""
    global _store
    if _store is None:
        if settings.CACHE_BACKEND == "memory" or not settings.REDIS_URL:
            _store = MemoryStore()
        else:
            _store = RedisStore()
    return _store


def user_key(prefix: str, user_id: str) -> str:
    """Namespace a store key per user"""
    return f"{prefix}:{user_id}"
