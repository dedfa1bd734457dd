"""
JSON cache in Redis for public listings (membership plans, store categories).

Every Redis error is logged and treated as a miss, so a request never fails
because the cache is down. Keys live under the `fitzone:` namespace.
"""

import json
import logging
from typing import Any, Callable, Optional

from .config import REDIS_ENABLED
from .rate_limiter import get_redis_client

logger = logging.getLogger(__name__)

NAMESPACE = "fitzone"
PLANS_KEY = "plans:active"
CATEGORIES_KEY = "products:categories"


class Cache:
    def __init__(self, namespace: str = NAMESPACE):
        self.namespace = namespace
        self._client = None

    def _key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    def _redis(self):
        if not REDIS_ENABLED:
            return None
        if self._client is None:
            try:
                self._client = get_redis_client()
            except Exception as e:
                logger.warning(f"⚠️ Cache disabled for this call, Redis unavailable: {e}")
                return None
        return self._client

    def get(self, key: str) -> Optional[Any]:
        client = self._redis()
        if client is None:
            return None
        try:
            raw = client.get(self._key(key))
        except Exception as e:
            logger.error(f"❌ Cache read failed for {key}: {e}")
            return None
        if raw is None:
            return None
        logger.debug(f"Cache hit: {key}")
        return json.loads(raw)

    def set(self, key: str, value: Any, ttl: int = 3600) -> bool:
        client = self._redis()
        if client is None:
            return False
        try:
            client.setex(self._key(key), ttl, json.dumps(value, default=str))
        except Exception as e:
            logger.error(f"❌ Cache write failed for {key}: {e}")
            return False
        return True

    def get_or_load(self, key: str, loader: Callable[[], Any], ttl: int = 3600) -> Any:
        """Cached value for `key`, or the loader's result (stored for `ttl` seconds)"""
        value = self.get(key)
        if value is None:
            value = loader()
            self.set(key, value, ttl=ttl)
        return value

    def invalidate(self, *keys: str) -> None:
        client = self._redis()
        if client is None:
            return
        try:
            client.delete(*(self._key(k) for k in keys))
        except Exception as e:
            logger.error(f"❌ Cache invalidation failed for {keys}: {e}")


cache = Cache()
