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
"""No-op cache adapter."""

from __future__ import annotations

from typing import Any

from cachekit.cache.types import ExpiresAt


class NullCache:
    """Adapter that stores nothing: every write succeeds, every read misses.

    Used when caching is disabled so callers keep the same code path.
    """

    async def get(self, key: str) -> Any | None:
        return None

    async def put(self, key: str, value: Any, expires_at: ExpiresAt = None) -> None:
        return None

    async def evict(self, key: str) -> bool:
        return False

    async def exists(self, key: str) -> bool:
        return False

    async def clear(self) -> None:
        return None
