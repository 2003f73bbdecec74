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
"""Shared fixtures for cache tests."""

from __future__ import annotations

import re
import time
from collections.abc import AsyncIterator
from typing import Any

import pytest

from cachekit.cache.adapters.memory import InMemoryCache
from cachekit.cache.types import ExpiresAt


class FakeRedis:
    """Minimal in-memory stub matching the redis.asyncio.Redis interface."""

    def __init__(self) -> None:
        self._store: dict[str, tuple[bytes, float | None]] = {}
        self.set_calls: list[dict[str, Any]] = []
        self.pinged = False
        self.closed = False

    def _alive(self, key: str) -> bool:
        entry = self._store.get(key)
        if entry is None:
            return False
        _, expires_at = entry
        if expires_at is not None and expires_at <= time.time():
            del self._store[key]
            return False
        return True

    async def get(self, key: str) -> bytes | None:
        return self._store[key][0] if self._alive(key) else None

    async def set(self, key: str, value: bytes, px: int | None = None) -> None:
        self.set_calls.append({"key": key, "value": value, "px": px})
        expires_at = time.time() + px / 1000 if px is not None else None
        self._store[key] = (value, expires_at)

    async def delete(self, *keys: str) -> int:
        count = 0
        for k in keys:
            if self._alive(k):
                count += 1
            self._store.pop(k, None)
        return count

    async def exists(self, *keys: str) -> int:
        return sum(1 for k in keys if self._alive(k))

    async def scan_iter(self, match: str = "*", count: int | None = None) -> AsyncIterator[str]:
        prefix = re.sub(r"\\(.)", r"\1", match.removesuffix("*"))
        for key in list(self._store):
            if key.startswith(prefix) and self._alive(key):
                yield key

    async def flushdb(self) -> None:
        self._store.clear()

    async def ping(self) -> bool:
        self.pinged = True
        return True

    async def aclose(self) -> None:
        self.closed = True


class RecordingAdapter(InMemoryCache):
    """InMemoryCache that records every primitive call."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[tuple[str, str | None]] = []

    async def get(self, key: str) -> Any | None:
        self.calls.append(("get", key))
        return await super().get(key)

    async def put(self, key: str, value: Any, expires_at: ExpiresAt = None) -> None:
        self.calls.append(("put", key))
        await super().put(key, value, expires_at)

    async def evict(self, key: str) -> bool:
        self.calls.append(("evict", key))
        return await super().evict(key)

    async def exists(self, key: str) -> bool:
        self.calls.append(("exists", key))
        return await super().exists(key)

    async def clear(self) -> None:
        self.calls.append(("clear", None))
        await super().clear()


class FailingAdapter:
    """Adapter whose every primitive raises, like an unreachable server."""

    async def get(self, key: str) -> Any | None:
        raise ConnectionError("backend down")

    async def put(self, key: str, value: Any, expires_at: ExpiresAt = None) -> None:
        raise ConnectionError("backend down")

    async def evict(self, key: str) -> bool:
        raise ConnectionError("backend down")

    async def exists(self, key: str) -> bool:
        raise ConnectionError("backend down")

    async def clear(self) -> None:
        raise ConnectionError("backend down")

    async def clean(self) -> int:
        raise ConnectionError("backend down")


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def recording_adapter() -> RecordingAdapter:
    return RecordingAdapter()


@pytest.fixture
def failing_adapter() -> FailingAdapter:
    return FailingAdapter()
