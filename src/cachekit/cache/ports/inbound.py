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
"""The simple-cache interface that callers program against."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Protocol, runtime_checkable

from cachekit.cache.types import TtlLike


@runtime_checkable
class SimpleCache(Protocol):
    """Standard get/set/delete/has cache shape with batch variants.

    Invalid keys and TTLs raise
    :class:`~cachekit.cache.exceptions.InvalidArgumentException`; a missing
    key is never an error.
    """

    async def get(self, key: str, default: Any = None) -> Any: ...

    async def set(self, key: str, value: Any, ttl: TtlLike = None) -> bool: ...

    async def delete(self, key: str) -> bool: ...

    async def has(self, key: str) -> bool: ...

    async def get_multiple(self, keys: Iterable[str], default: Any = None) -> dict[str, Any]: ...

    async def set_multiple(self, values: Mapping[str, Any], ttl: TtlLike = None) -> bool: ...

    async def delete_multiple(self, keys: Iterable[str]) -> bool: ...

    async def clear(self) -> bool: ...
