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
"""Cache adapter protocols: what a storage medium must provide."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from cachekit.cache.types import ExpiresAt


@runtime_checkable
class CacheAdapter(Protocol):
    """Single-key storage primitives.

    All cache backends (Redis, filesystem, in-memory, etc.) implement this
    protocol. Batch operations are built on top by :class:`~cachekit.cache.facade.Cache`,
    so an adapter never needs atomicity across keys. Failures are raised; the
    facade turns them into ``False``/default results.
    """

    async def get(self, key: str) -> Any | None: ...

    async def put(self, key: str, value: Any, expires_at: ExpiresAt = None) -> None: ...

    async def evict(self, key: str) -> bool: ...

    async def exists(self, key: str) -> bool: ...

    async def clear(self) -> None: ...


@runtime_checkable
class SweepableCacheAdapter(CacheAdapter, Protocol):
    """An adapter that can proactively drop expired entries."""

    async def clean(self) -> int: ...


@runtime_checkable
class PrefixEvictableCacheAdapter(CacheAdapter, Protocol):
    """An adapter that can drop every key sharing a prefix.

    :meth:`Cache.clear` uses it to reclaim the entries of a namespace
    generation it has just retired.
    """

    async def evict_prefix(self, prefix: str) -> int: ...
