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
"""Redis-backed cache adapter."""

from __future__ import annotations

import json
import logging
import math
import re
import time
from typing import Any, cast

from cachekit.cache.exceptions import CacheBackendException
from cachekit.cache.types import ExpiresAt

_logger = logging.getLogger(__name__)

_GLOB_SPECIAL = re.compile(r"[*?\[\]\\]")


class RedisCacheAdapter:
    """Cache adapter that delegates to a ``redis.asyncio.Redis``-like client.

    Values are JSON-serialized before storage, so only JSON-compatible
    values can be cached, and they come back in their JSON shape: tuples
    are read as lists and non-string dict keys as strings. Expiration is
    enforced by Redis itself (``PX``), so there is no sweep operation.

    :meth:`clear` issues ``FLUSHDB`` and therefore drops every key in the
    selected database, not only the ones written through this adapter.
    """

    def __init__(self, client: Any) -> None:
        self._client = client

    @classmethod
    def from_url(cls, url: str, socket_timeout: float | None = None) -> RedisCacheAdapter:
        """Build an adapter around a new ``redis.asyncio`` client for *url*."""
        import redis.asyncio as aioredis

        return cls(aioredis.from_url(url, socket_timeout=socket_timeout))

    async def get(self, key: str) -> Any | None:
        """Retrieve and deserialize a cached value."""
        raw = await self._client.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (ValueError, TypeError):
            _logger.warning("Failed to deserialize cached value for key '%s'", key)
            return None

    async def put(self, key: str, value: Any, expires_at: ExpiresAt = None) -> None:
        """Serialize and store a value until *expires_at*.

        An instant that has already passed deletes the key instead, since
        Redis rejects non-positive expirations.
        """
        raw = json.dumps(value).encode()
        if expires_at is None:
            await self._client.set(key, raw)
            return

        remaining_ms = math.ceil((expires_at - time.time()) * 1000)
        if remaining_ms <= 0:
            await self._client.delete(key)
            return
        await self._client.set(key, raw, px=remaining_ms)

    async def evict(self, key: str) -> bool:
        """Remove a key. Returns True if the key existed."""
        count = await self._client.delete(key)
        return cast(bool, count > 0)

    async def exists(self, key: str) -> bool:
        count = await self._client.exists(key)
        return cast(bool, count > 0)

    async def evict_prefix(self, prefix: str) -> int:
        """Delete every key starting with *prefix*, walking the keyspace with SCAN."""
        pattern = _GLOB_SPECIAL.sub(r"\\\g<0>", prefix) + "*"
        removed = 0
        async for key in self._client.scan_iter(match=pattern, count=500):
            removed += await self._client.delete(key)
        return removed

    async def clear(self) -> None:
        """Flush the entire database."""
        await self._client.flushdb()

    async def start(self) -> None:
        """Validate connectivity by pinging Redis."""
        try:
            await self._client.ping()
        except Exception as exc:
            raise CacheBackendException("Redis server is unreachable") from exc

    async def stop(self) -> None:
        """Close the underlying Redis connection."""
        await self._client.aclose()
