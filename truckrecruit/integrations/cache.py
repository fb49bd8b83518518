"""Cache service with Protocol pattern for dependency injection.

Provides RedisCacheService (real cache) and NullCacheService (no-op fallback).
Cache failures degrade to a miss; the database stays the source of truth.
"""

import json
import logging
from typing import Protocol

import redis

from ..config import settings

logger = logging.getLogger(__name__)

KEY_PREFIX = "truckrecruit:"


class CacheService(Protocol):
    """Cache service interface."""

    def get_json(self, key: str) -> dict | None: ...
    def set_json(self, key: str, data: dict, ttl: int) -> None: ...
    def delete(self, key: str) -> None: ...


class RedisCacheService:
    """Redis-backed cache implementation."""

    def __init__(self, redis_url: str) -> None:
        self._client = redis.from_url(redis_url, decode_responses=True)
        self._client.ping()

    def get_json(self, key: str) -> dict | None:
        try:
            raw = self._client.get(KEY_PREFIX + key)
        except redis.RedisError as exc:
            logger.warning("Cache read failed for %s: %s", key, exc)
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, TypeError):
            return None

    def set_json(self, key: str, data: dict, ttl: int) -> None:
        try:
            self._client.setex(KEY_PREFIX + key, ttl, json.dumps(data, default=str))
        except redis.RedisError as exc:
            logger.warning("Cache write failed for %s: %s", key, exc)

    def delete(self, key: str) -> None:
        try:
            self._client.delete(KEY_PREFIX + key)
        except redis.RedisError as exc:
            logger.warning("Cache delete failed for %s: %s", key, exc)


class NullCacheService:
    """No-op cache for when Redis is unavailable."""

    def get_json(self, key: str) -> dict | None:
        return None

    def set_json(self, key: str, data: dict, ttl: int) -> None:
        pass

    def delete(self, key: str) -> None:
        pass


def create_cache_service() -> CacheService:
    """Factory: create the appropriate cache service based on configuration."""
    if not settings.redis_url:
        return NullCacheService()
    try:
        return RedisCacheService(settings.redis_url)
    except redis.RedisError as exc:
        logger.warning("Redis unavailable at startup, caching disabled: %s", exc)
        return NullCacheService()
