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
"""Lifecycle protocol for adapters that own connections or other resources."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Lifecycle(Protocol):
    """Start/stop hooks for infrastructure adapters.

    Adapters that own connections or pools implement this protocol. A
    :class:`~cachekit.cache.facade.Cache` used as an async context manager
    calls start() on entry and stop() on exit.
    """

    async def start(self) -> None:
        """Open connections and validate connectivity; raise if unreachable."""
        ...

    async def stop(self) -> None:
        """Release connections. Best-effort."""
        ...
