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
"""In-memory cache adapter."""

from __future__ import annotations

import time
from typing import Any

from cachekit.cache.ttl import is_expired
from cachekit.cache.types import ExpiresAt


class InMemoryCache:
    """Process-local dict-backed cache with lazy expiration.

    Suitable for development, testing, and single-process applications.
    Also serves as the default fallback tier in CacheManager.
    """

    def __init__(self) -> None:
        self._store: dict[str, tuple[Any, ExpiresAt]] = {}

    def _live_entry(self, key: str) -> tuple[Any, ExpiresAt] | None:
        entry = self._store.get(key)
        if entry is None:
            return None
        _, expires_at = entry
        if is_expired(expires_at, now=time.time()):
            del self._store[key]
            return None
        return entry

    async def get(self, key: str) -> Any | None:
        """Get a value by key. Returns None if missing or expired."""
        entry = self._live_entry(key)
        return None if entry is None else entry[0]

    async def put(self, key: str, value: Any, expires_at: ExpiresAt = None) -> None:
        self._store[key] = (value, expires_at)

    async def evict(self, key: str) -> bool:
        """Remove a key. Returns True if the key existed."""
        return self._store.pop(key, None) is not None

    async def exists(self, key: str) -> bool:
        return self._live_entry(key) is not None

    async def clear(self) -> None:
        self._store.clear()

    async def evict_prefix(self, prefix: str) -> int:
        """Remove every key starting with *prefix*; return how many."""
        doomed = [k for k in self._store if k.startswith(prefix)]
        for key in doomed:
            del self._store[key]
        return len(doomed)

    async def clean(self) -> int:
        """Drop every expired entry and return how many were dropped."""
        now = time.time()
        expired = [k for k, (_, exp) in self._store.items() if is_expired(exp, now=now)]
        for key in expired:
            del self._store[key]
        return len(expired)

    def __len__(self) -> int:
        """Number of stored entries, expired ones included."""
        return len(self._store)
