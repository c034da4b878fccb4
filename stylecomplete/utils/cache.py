import json
import logging
from typing import Any, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

logger = logging.getLogger("stylecomplete.cache")


class CacheError(Exception):
    """Raised when a write or delete against the store fails."""
    pass


class CacheManager:
    """
    Best-effort Redis wrapper.

    Without a REDIS_URL (or injected client) every operation is a no-op.
    Reads never raise: a store error reads as a miss. Writes and deletes
    raise CacheError so each caller decides whether the failure matters.
    One instance is created at startup and shared by all requests.
    """
    def __init__(self, redis_url: Optional[str] = None, client: Any = None):
        self.redis_url = redis_url
        self.redis_client = client
        self._initialized = client is not None

    @property
    def is_configured(self) -> bool:
        return bool(self.redis_url) or self.redis_client is not None

    async def initialize(self):
        """Create the Redis client if a URL is configured."""
        if self._initialized:
            return
        self._initialized = True

        if not self.redis_url:
            logger.warning("⚠️ No REDIS_URL found, running without cache.")
            return

        try:
            self.redis_client = redis.from_url(self.redis_url, decode_responses=True)
            await self.redis_client.ping()
            logger.info("✅ Connected to Redis!")
        except ValueError as e:
            # Malformed URL: no client, so reads miss and writes raise CacheError
            self.redis_client = None
            logger.warning(f"Invalid REDIS_URL, running without cache: {e}")
        except RedisError as e:
            # Keep the client: later calls retry the connection per operation
            logger.warning(f"Redis Error: {e}")

    async def _ready(self) -> bool:
        if not self._initialized:
            await self.initialize()
        return self.redis_client is not None

    async def get(self, key: str) -> Optional[Any]:
        """Get a JSON value from cache; None on miss, no store, or any error."""
        if not self.is_configured:
            return None
        if not await self._ready():
            return None

        try:
            val = await self.redis_client.get(key)
            return json.loads(val) if val else None
        except (RedisError, ValueError) as e:
            logger.warning(f"Cache GET error: {e}")
            return None

    async def set(self, key: str, value: Any, ttl: Optional[int] = None):
        """Store a JSON value; with `ttl` it expires after that many seconds."""
        if not self.is_configured:
            return
        if not await self._ready():
            raise CacheError(f"Cache SET failed for {key}: no usable Redis client")

        json_val = json.dumps(value, ensure_ascii=False)
        try:
            if ttl:
                await self.redis_client.setex(key, ttl, json_val)
            else:
                await self.redis_client.set(key, json_val)
        except RedisError as e:
            raise CacheError(f"Cache SET failed for {key}: {e}")

    async def delete(self, key: str):
        if not self.is_configured:
            return
        if not await self._ready():
            raise CacheError(f"Cache DELETE failed for {key}: no usable Redis client")

        try:
            await self.redis_client.delete(key)
        except RedisError as e:
            raise CacheError(f"Cache DELETE failed for {key}: {e}")

    async def close(self):
        if self.redis_client is not None:
            await self.redis_client.aclose()
