import json
import logging
from typing import Any, Optional, Type, TypeVar, Union

import redis.asyncio as redis

from app.core.config import settings

logger = logging.getLogger(__name__)

T = TypeVar('T')

class RedisConnection:
    def __init__(self, host=None, port=None, db=None, password=None):
        self.host = host or settings.REDIS_HOST
        self.port = port or settings.REDIS_PORT
        self.db = db or settings.REDIS_DB
        self.password = password or settings.REDIS_PASSWORD
        self._pool: Optional[redis.ConnectionPool] = None

    async def connect(self):
        """Initializes the Redis connection pool."""
        if self._pool:
            return
        logger.info(f"Connecting to Redis at {self.host}:{self.port}...")
        conn_kwargs = {
            "host": self.host,
            "port": self.port,
            "db": self.db,
            "decode_responses": True,
            "max_connections": 10,
        }
        if self.password:
            conn_kwargs["password"] = self.password
        self._pool = redis.ConnectionPool(**conn_kwargs)
        try:
            await self.get_client().ping()
        except Exception:
            await self._pool.disconnect()
            self._pool = None
            raise
        logger.info("Successfully connected to Redis.")

    async def close(self):
        """Closes the Redis connection pool."""
        if self._pool:
            await self._pool.disconnect()
            self._pool = None
            logger.info("Redis connection pool closed.")

    @property
    def connected(self) -> bool:
        return self._pool is not None

    def get_client(self) -> redis.Redis:
        if not self._pool:
            raise RuntimeError("Redis connection pool not initialized. Call connect() first or use lifespan.")
        return redis.Redis(connection_pool=self._pool)

    async def get(self, key: str) -> Optional[str]:
        """Gets a value from Redis by key, None on a miss or when Redis is unavailable."""
        if not self.connected:
            return None
        try:
            return await self.get_client().get(key)
        except redis.RedisError as e:
            logger.error(f"Error getting Redis key '{key}': {e}")
            return None

    async def set(
        self,
        key: str,
        value: Union[str, int, float, dict, list],
        ttl: Optional[int] = None # TTL in seconds
    ) -> bool:
        if not self.connected:
            return False
        if not isinstance(value, (str, bytes)):
            value = json.dumps(value, default=str)
        try:
            return bool(await self.get_client().set(key, value, ex=ttl))
        except redis.RedisError as e:
            logger.error(f"Error setting Redis key '{key}': {e}")
            return False

    async def remove(self, key: str) -> int:
        """Removes a key from Redis. Returns the number of keys removed (0 or 1)."""
        if not self.connected:
            return 0
        try:
            return await self.get_client().delete(key)
        except redis.RedisError as e:
            logger.error(f"Error removing Redis key '{key}': {e}")
            return 0

    # --- Caching methods ---

    async def cache_list(self, key: str, items: list, ttl_seconds: int) -> bool:
        """Cache a list of models or plain values with expiration time"""
        serializable_items = [
            item.model_dump(mode="json") if hasattr(item, "model_dump") else item
            for item in items
        ]
        return await self.set(key, serializable_items, ttl=ttl_seconds)

    async def get_cached_object(self, key: str, model_class: Optional[Type[T]] = None) -> Optional[Union[Any, T]]:
        """Get cached object, optionally converting it to a specific model class"""
        data = await self.get(key)
        if not data:
            return None
        try:
            parsed_data = json.loads(data)
        except ValueError as e:
            logger.error(f"Error deserializing cached object with key '{key}': {e}")
            return None
        if model_class:
            if isinstance(parsed_data, list):
                return [model_class.model_validate(item) for item in parsed_data]
            return model_class.model_validate(parsed_data)
        return parsed_data

# --- Singleton Instance ---
redis_conn = RedisConnection()
