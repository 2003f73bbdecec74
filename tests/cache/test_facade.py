# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for Cache facade behavior beyond the shared contract."""

from __future__ import annotations

import asyncio
import time
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest

from cachekit.cache.adapters import FileCache, InMemoryCache, NullCache, RedisCacheAdapter
from cachekit.cache.exceptions import InvalidKeyTypeException, InvalidTtlTypeException
from cachekit.cache.facade import GENERATION_KEY, INITIAL_GENERATION, Cache


class TestValidationBeforeIO:
    async def test_invalid_key_touches_no_backend(self, recording_adapter):
        cache = Cache(recording_adapter)
        with pytest.raises(InvalidKeyTypeException):
            await cache.get(123)  # type: ignore[arg-type]
        assert recording_adapter.calls == []

    async def test_one_bad_key_fails_whole_batch(self, recording_adapter):
        cache = Cache(recording_adapter)
        with pytest.raises(InvalidKeyTypeException):
            await cache.set_multiple({"good": 1, 2: "bad"})  # type: ignore[dict-item]
        assert recording_adapter.calls == []

    async def test_invalid_ttl_touches_no_backend(self, recording_adapter):
        cache = Cache(recording_adapter)
        with pytest.raises(InvalidTtlTypeException):
            await cache.set("key", "value", {})  # type: ignore[arg-type]
        assert recording_adapter.calls == []

    async def test_empty_batches_touch_no_backend(self, recording_adapter):
        cache = Cache(recording_adapter, namespace="ns")
        assert await cache.get_multiple([]) == {}
        assert await cache.set_multiple({}) is True
        assert await cache.delete_multiple([]) is True
        assert recording_adapter.calls == []

    async def test_string_is_not_a_key_batch(self):
        cache = Cache(InMemoryCache())
        with pytest.raises(InvalidKeyTypeException):
            await cache.get_multiple("abc")

    async def test_set_multiple_requires_mapping(self):
        cache = Cache(InMemoryCache())
        with pytest.raises(InvalidKeyTypeException):
            await cache.set_multiple([("a", 1)])  # type: ignore[arg-type]

    async def test_get_multiple_accepts_generators(self):
        cache = Cache(InMemoryCache())
        await cache.set("a", 1)
        assert await cache.get_multiple(k for k in ["a", "b"]) == {"a": 1, "b": None}

    def test_invalid_namespace_rejected(self):
        with pytest.raises(InvalidKeyTypeException):
            Cache(InMemoryCache(), namespace="")

    def test_invalid_default_ttl_rejected(self):
        with pytest.raises(InvalidTtlTypeException):
            Cache(InMemoryCache(), default_ttl="forever")  # type: ignore[arg-type]


class TestBackendFaults:
    async def test_faults_become_return_values(self, failing_adapter):
        cache = Cache(failing_adapter)
        assert await cache.get("key", "dflt") == "dflt"
        assert await cache.set("key", "value") is False
        assert await cache.delete("key") is False
        assert await cache.has("key") is False
        assert await cache.get_multiple(["a", "b"], 0) == {"a": 0, "b": 0}
        assert await cache.set_multiple({"a": 1}) is False
        assert await cache.delete_multiple(["a"]) is False
        assert await cache.clear() is False
        assert await cache.flush() is False
        assert await cache.clean() is False

    async def test_faults_in_namespaced_cache(self, failing_adapter):
        cache = Cache(failing_adapter, namespace="ns")
        assert await cache.get("key") is None
        assert await cache.set("key", "value") is False
        assert await cache.get_multiple(["a"]) == {"a": None}
        assert await cache.clear() is False

    async def test_unserializable_value_fails_softly(self, fake_redis):
        cache = Cache(RedisCacheAdapter(fake_redis))
        assert await cache.set("key", object()) is False
        assert await cache.get("key") is None

    async def test_partial_batch_failure_reported(self):
        class FlakyCache(InMemoryCache):
            async def put(self, key, value, expires_at=None):
                if key == "bad":
                    raise OSError("disk full")
                await super().put(key, value, expires_at)

        cache = Cache(FlakyCache())
        assert await cache.set_multiple({"good": 1, "bad": 2, "also-good": 3}) is False
        assert await cache.get_multiple(["good", "bad", "also-good"]) == {"good": 1, "bad": None, "also-good": 3}


class TestNamespaces:
    async def test_keys_are_prefixed_with_namespace_and_generation(self, recording_adapter):
        cache = Cache(recording_adapter, namespace="users")
        await cache.set("alice", 1)
        assert await recording_adapter.get(f"users:{INITIAL_GENERATION}:alice") == 1
        assert await recording_adapter.get(f"users:{GENERATION_KEY}") is None

        await cache.clear()
        await cache.set("bob", 2)

        token = await recording_adapter.get(f"users:{GENERATION_KEY}")
        assert isinstance(token, str)
        assert token != INITIAL_GENERATION
        assert await recording_adapter.get(f"users:{token}:bob") == 2

    def test_namespace_with_separator_rejected(self):
        with pytest.raises(InvalidKeyTypeException):
            Cache(InMemoryCache(), namespace="a:b")

    async def test_concurrent_first_writes_are_all_kept(self):
        class YieldingCache(InMemoryCache):
            async def get(self, key):
                await asyncio.sleep(0)
                return await super().get(key)

            async def put(self, key, value, expires_at=None):
                await asyncio.sleep(0)
                await super().put(key, value, expires_at)

        cache = Cache(YieldingCache(), namespace="ns")
        results = await asyncio.gather(*(cache.set(f"k{i}", i) for i in range(10)))

        assert results == [True] * 10
        assert await cache.get_multiple([f"k{i}" for i in range(10)]) == {f"k{i}": i for i in range(10)}

    async def test_clear_is_scoped_to_namespace(self):
        adapter = InMemoryCache()
        users = Cache(adapter, namespace="users")
        orders = Cache(adapter, namespace="orders")
        await users.set("k", "user-value")
        await orders.set("k", "order-value")

        assert await users.clear() is True

        assert await users.get("k") is None
        assert await users.has("k") is False
        assert await orders.get("k") == "order-value"

    async def test_clear_reclaims_retired_generation(self):
        adapter = InMemoryCache()
        cache = Cache(adapter, namespace="ns")
        for i in range(100):
            await cache.set("k", i)
            await cache.set(f"other{i}", i)
            assert await cache.clear() is True

        # only the generation token is left
        assert len(adapter) == 1

    async def test_clear_reclaims_on_file_adapter(self, tmp_path):
        adapter = FileCache(tmp_path)
        cache = Cache(adapter, namespace="ns")
        for i in range(5):
            await cache.set("k", i)
            await cache.clear()
        assert len(list(tmp_path.glob("*.cache.json"))) == 1

    async def test_clear_succeeds_when_reclamation_fails(self):
        class NoPurgeCache(InMemoryCache):
            async def evict_prefix(self, prefix):
                raise ConnectionError("scan failed")

        cache = Cache(NoPurgeCache(), namespace="ns")
        await cache.set("k", "v")
        assert await cache.clear() is True
        assert await cache.get("k") is None

    async def test_clear_leaves_unnamespaced_entries(self):
        adapter = InMemoryCache()
        scoped = Cache(adapter, namespace="scoped")
        shared = Cache(adapter)
        await shared.set("global", 1)
        await scoped.set("local", 2)

        await scoped.clear()

        assert await shared.get("global") == 1
        assert await scoped.get("local") is None

    async def test_flush_wipes_every_namespace(self):
        adapter = InMemoryCache()
        users = Cache(adapter, namespace="users")
        orders = Cache(adapter, namespace="orders")
        await users.set("k", 1)
        await orders.set("k", 2)

        assert await users.flush() is True

        assert await users.get("k") is None
        assert await orders.get("k") is None

    async def test_same_namespace_facades_see_each_others_clear(self):
        adapter = InMemoryCache()
        first = Cache(adapter, namespace="shared")
        second = Cache(adapter, namespace="shared")
        await first.set("k", "v")
        assert await second.get("k") == "v"

        await second.clear()

        assert await first.get("k") is None

    async def test_writes_after_clear_are_visible(self):
        cache = Cache(InMemoryCache(), namespace="ns")
        await cache.set("k", "old")
        await cache.clear()
        await cache.set("k", "new")
        assert await cache.get("k") == "new"

    async def test_reads_on_fresh_namespace_do_not_write(self, recording_adapter):
        cache = Cache(recording_adapter, namespace="fresh")
        assert await cache.get("k") is None
        assert await cache.has("k") is False
        assert await cache.delete("k") is True
        assert not any(op == "put" for op, _ in recording_adapter.calls)

    async def test_unnamespaced_clear_flushes_backend(self, recording_adapter):
        cache = Cache(recording_adapter)
        await cache.clear()
        assert recording_adapter.calls == [("clear", None)]


class TestTtl:
    async def test_default_ttl_applies_when_ttl_omitted(self):
        cache = Cache(InMemoryCache(), default_ttl=60)
        await cache.set("k", "v")
        assert await cache.get("k") == "v"

        with patch("cachekit.cache.adapters.memory.time") as mock_time:
            mock_time.time.return_value = time.time() + 61
            assert await cache.get("k") is None

    async def test_explicit_ttl_overrides_default(self):
        cache = Cache(InMemoryCache(), default_ttl=0)
        await cache.set("k", "v", ttl=3600)
        assert await cache.get("k") == "v"

    async def test_entry_expires_after_ttl(self):
        cache = Cache(InMemoryCache())
        await cache.set("k", "v", ttl=10)
        with patch("cachekit.cache.adapters.memory.time") as mock_time:
            mock_time.time.return_value = time.time() + 11
            assert await cache.get("k") is None

    async def test_absolute_datetime_ttl(self):
        cache = Cache(InMemoryCache())
        future = datetime.now(timezone.utc) + timedelta(hours=1)
        past = datetime.now(timezone.utc) - timedelta(hours=1)
        await cache.set("future", 1, ttl=future)
        await cache.set("past", 2, ttl=past)
        assert await cache.get("future") == 1
        assert await cache.get("past") is None

    async def test_ttl_is_fixed_at_write_time(self):
        cache = Cache(InMemoryCache())
        await cache.set("k", "v", ttl=10)
        # reads do not extend the expiration
        for _ in range(3):
            assert await cache.get("k") == "v"
        with patch("cachekit.cache.adapters.memory.time") as mock_time:
            mock_time.time.return_value = time.time() + 11
            assert await cache.get("k") is None


class TestClean:
    async def test_clean_sweeps_expired_entries(self):
        adapter = InMemoryCache()
        cache = Cache(adapter)
        await cache.set("stale", 1, ttl=0)
        await cache.set("fresh", 2)
        assert len(adapter) == 2

        assert await cache.clean() is True
        assert len(adapter) == 1

    async def test_clean_unsupported_returns_false(self, fake_redis):
        assert await Cache(RedisCacheAdapter(fake_redis)).clean() is False
        assert await Cache(NullCache()).clean() is False


class TestLifecycle:
    async def test_context_manager_starts_and_stops_adapter(self, fake_redis):
        async with Cache(RedisCacheAdapter(fake_redis)) as cache:
            assert fake_redis.pinged is True
            await cache.set("k", "v")
        assert fake_redis.closed is True

    async def test_context_manager_without_lifecycle(self):
        async with Cache(InMemoryCache()) as cache:
            await cache.set("k", "v")
            assert await cache.get("k") == "v"

    def test_repr(self):
        assert repr(Cache(InMemoryCache(), namespace="ns")) == "Cache(adapter=InMemoryCache, namespace='ns')"
