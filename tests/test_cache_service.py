"""Tests for cache service."""

import json
from unittest.mock import MagicMock, patch

import redis

from truckrecruit.integrations.cache import (
    KEY_PREFIX,
    NullCacheService,
    RedisCacheService,
    create_cache_service,
)


def _redis_cache(client):
    with patch("truckrecruit.integrations.cache.redis.from_url", return_value=client):
        return RedisCacheService("redis://localhost:6379/0")


class TestNullCacheService:
    def test_get_json_returns_none(self):
        assert NullCacheService().get_json("any_key") is None

    def test_set_and_delete_do_nothing(self):
        cache = NullCacheService()
        cache.set_json("key", {"data": "test"}, 60)
        cache.delete("key")
        assert cache.get_json("key") is None


class TestRedisCacheService:
    def test_round_trip_uses_prefix(self):
        client = MagicMock()
        cache = _redis_cache(client)

        cache.set_json("dashboard:admin", {"total_drivers": 3}, 60)
        client.setex.assert_called_once_with(KEY_PREFIX + "dashboard:admin", 60, json.dumps({"total_drivers": 3}))

        client.get.return_value = '{"total_drivers": 3}'
        assert cache.get_json("dashboard:admin") == {"total_drivers": 3}
        client.get.assert_called_with(KEY_PREFIX + "dashboard:admin")

    def test_corrupt_entry_is_a_miss(self):
        client = MagicMock()
        client.get.return_value = "{not json"
        assert _redis_cache(client).get_json("k") is None

    def test_redis_errors_degrade_to_miss(self):
        client = MagicMock()
        client.get.side_effect = redis.ConnectionError("down")
        client.setex.side_effect = redis.ConnectionError("down")
        client.delete.side_effect = redis.ConnectionError("down")
        cache = _redis_cache(client)

        assert cache.get_json("k") is None
        cache.set_json("k", {"a": 1}, 10)
        cache.delete("k")


class TestCreateCacheService:
    def test_no_url_gives_null_cache(self):
        with patch("truckrecruit.integrations.cache.settings") as mock_settings:
            mock_settings.redis_url = ""
            assert isinstance(create_cache_service(), NullCacheService)

    def test_unreachable_redis_gives_null_cache(self):
        client = MagicMock()
        client.ping.side_effect = redis.ConnectionError("refused")
        with (
            patch("truckrecruit.integrations.cache.settings") as mock_settings,
            patch("truckrecruit.integrations.cache.redis.from_url", return_value=client),
        ):
            mock_settings.redis_url = "redis://nowhere:6379/0"
            assert isinstance(create_cache_service(), NullCacheService)
