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
"""Tiered cache adapter with automatic failover."""

from __future__ import annotations

import logging
from typing import Any

from cachekit.cache.ports.outbound import CacheAdapter, PrefixEvictableCacheAdapter, SweepableCacheAdapter
from cachekit.cache.types import ExpiresAt
from cachekit.kernel.lifecycle import Lifecycle

logger = logging.getLogger("cachekit.cache")


class CacheManager:
    """Manages primary and fallback cache adapters with automatic failover.

    CacheManager is itself a CacheAdapter, so a :class:`~cachekit.cache.facade.Cache`
    can sit on top of it. Reads try the primary first and fall through to
    the fallback on a miss or a primary failure. Writes go to both tiers;
    when the primary write fails the fallback is still updated and the
    primary error is then re-raised, because the primary may keep serving
    the stale value. Fallback failures propagate. The tiers are independent:
    there is no transaction across them.
    """

    def __init__(self, primary: CacheAdapter, fallback: CacheAdapter) -> None:
        self._primary = primary
        self._fallback = fallback

    @property
    def primary(self) -> CacheAdapter:
        return self._primary

    @property
    def fallback(self) -> CacheAdapter:
        return self._fallback

    async def get(self, key: str) -> Any | None:
        """Get from primary; fall back on a miss or failure."""
        try:
            result = await self._primary.get(key)
            if result is not None:
                return result
        except Exception:
            logger.warning("Primary cache failed for GET '%s', falling back", key)

        return await self._fallback.get(key)

    async def put(self, key: str, value: Any, expires_at: ExpiresAt = None) -> None:
        """Write to both primary and fallback."""
        failure: Exception | None = None
        try:
            await self._primary.put(key, value, expires_at)
        except Exception as exc:
            logger.warning("Primary cache failed for PUT '%s'", key)
            failure = exc

        await self._fallback.put(key, value, expires_at)
        if failure is not None:
            raise failure

    async def evict(self, key: str) -> bool:
        """Evict from both caches."""
        failure: Exception | None = None
        primary_result = False
        try:
            primary_result = await self._primary.evict(key)
        except Exception as exc:
            logger.warning("Primary cache failed for EVICT '%s'", key)
            failure = exc

        fallback_result = await self._fallback.evict(key)
        if failure is not None:
            raise failure
        return primary_result or fallback_result

    async def evict_prefix(self, prefix: str) -> int:
        """Evict every key starting with *prefix* from the tiers that can."""
        failure: Exception | None = None
        removed = 0
        if isinstance(self._primary, PrefixEvictableCacheAdapter):
            try:
                removed += await self._primary.evict_prefix(prefix)
            except Exception as exc:
                logger.warning("Primary cache failed for EVICT_PREFIX '%s'", prefix)
                failure = exc

        if isinstance(self._fallback, PrefixEvictableCacheAdapter):
            removed += await self._fallback.evict_prefix(prefix)
        if failure is not None:
            raise failure
        return removed

    async def exists(self, key: str) -> bool:
        try:
            if await self._primary.exists(key):
                return True
        except Exception:
            logger.warning("Primary cache failed for EXISTS '%s', falling back", key)

        return await self._fallback.exists(key)

    async def clear(self) -> None:
        """Clear both caches."""
        failure: Exception | None = None
        try:
            await self._primary.clear()
        except Exception as exc:
            logger.warning("Primary cache failed for CLEAR")
            failure = exc

        await self._fallback.clear()
        if failure is not None:
            raise failure

    async def clean(self) -> int:
        """Sweep every tier that supports it; return the total removed."""
        removed = 0
        for tier in (self._primary, self._fallback):
            if not isinstance(tier, SweepableCacheAdapter):
                continue
            try:
                removed += await tier.clean()
            except Exception:
                if tier is self._fallback:
                    raise
                logger.warning("Primary cache failed for CLEAN")
        return removed

    async def start(self) -> None:
        """Start tiers that own connections."""
        for tier in (self._primary, self._fallback):
            if isinstance(tier, Lifecycle):
                await tier.start()

    async def stop(self) -> None:
        """Stop tiers that own connections."""
        for tier in (self._primary, self._fallback):
            if isinstance(tier, Lifecycle):
                await tier.stop()
