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
"""Cache subsystem configuration properties."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from cachekit.core.config import config_properties


class RedisProperties(BaseModel):
    """Redis connection settings (cachekit.cache.redis.*)."""

    url: str = "redis://localhost:6379/0"
    socket_timeout: float = Field(default=5.0, gt=0)


@config_properties(prefix="cachekit.cache")
class CacheProperties(BaseModel):
    """Configuration for the cache subsystem (cachekit.cache.*)."""

    enabled: bool = True
    provider: Literal["auto", "memory", "file", "redis", "null"] = "auto"
    namespace: str | None = None
    default_ttl: int | None = Field(default=None, ge=0)
    directory: str = ".cachekit"
    log_operations: bool = False
    redis: RedisProperties = Field(default_factory=RedisProperties)
