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
"""Adapter decorator that logs every cache primitive."""

from __future__ import annotations

from typing import Any

import structlog

from cachekit.cache.ports.outbound import CacheAdapter, PrefixEvictableCacheAdapter, SweepableCacheAdapter
from cachekit.cache.types import ExpiresAt
from cachekit.kernel.lifecycle import Lifecycle


class LoggingCacheAdapter:
    """Wrap another adapter and log each call with its outcome.

    Results and exceptions of the wrapped adapter pass through unchanged.
    Values are never logged, only whether a read hit.
    """

    def __init__(self, adapter: CacheAdapter, logger: Any = None, level: str = "debug") -> None:
        self._adapter = adapter
        self._logger = logger if logger is not None else structlog.get_logger("cachekit.cache.operations")
        self._level = level.lower()

    @property
    def adapter(self) -> CacheAdapter:
        return self._adapter

    def _log(self, event: str, **kw: Any) -> None:
        getattr(self._logger, self._level)(event, adapter=type(self._adapter).__name__, **kw)

    async def get(self, key: str) -> Any | None:
        value = await self._adapter.get(key)
        self._log("cache_get", key=key, hit=value is not None)
        return value

    async def put(self, key: str, value: Any, expires_at: ExpiresAt = None) -> None:
        await self._adapter.put(key, value, expires_at)
        self._log("cache_put", key=key, expires_at=expires_at)

    async def evict(self, key: str) -> bool:
        existed = await self._adapter.evict(key)
        self._log("cache_evict", key=key, existed=existed)
        return existed

    async def exists(self, key: str) -> bool:
        found = await self._adapter.exists(key)
        self._log("cache_exists", key=key, found=found)
        return found

    async def clear(self) -> None:
        await self._adapter.clear()
        self._log("cache_clear")

    async def evict_prefix(self, prefix: str) -> int:
        """Evict by prefix in the wrapped adapter; 0 when it cannot."""
        if not isinstance(self._adapter, PrefixEvictableCacheAdapter):
            self._log("cache_evict_prefix", prefix=prefix, supported=False)
            return 0
        removed = await self._adapter.evict_prefix(prefix)
        self._log("cache_evict_prefix", prefix=prefix, removed=removed)
        return removed

    async def clean(self) -> int:
        """Sweep the wrapped adapter; 0 when it cannot sweep."""
        if not isinstance(self._adapter, SweepableCacheAdapter):
            self._log("cache_clean", supported=False)
            return 0
        removed = await self._adapter.clean()
        self._log("cache_clean", removed=removed)
        return removed

    async def start(self) -> None:
        if isinstance(self._adapter, Lifecycle):
            await self._adapter.start()

    async def stop(self) -> None:
        if isinstance(self._adapter, Lifecycle):
            await self._adapter.stop()
