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
"""Cache subsystem auto-configuration."""

from __future__ import annotations

import importlib

import structlog

from cachekit.cache.adapters.file import FileCache
from cachekit.cache.adapters.logged import LoggingCacheAdapter
from cachekit.cache.adapters.memory import InMemoryCache
from cachekit.cache.adapters.null import NullCache
from cachekit.cache.facade import Cache
from cachekit.cache.manager import CacheManager
from cachekit.cache.ports.outbound import CacheAdapter
from cachekit.config.properties.cache import CacheProperties
from cachekit.config.properties.logging import LoggingProperties
from cachekit.core.config import Config
from cachekit.logging.structlog_adapter import configure_logging

logger = structlog.get_logger("cachekit.cache.auto")


class CacheAutoConfiguration:
    """Builds a :class:`Cache` from ``cachekit.cache.*`` configuration."""

    @staticmethod
    def is_available(module_name: str) -> bool:
        """Check if a Python package is importable."""
        try:
            importlib.import_module(module_name)
            return True
        except ImportError:
            return False

    @classmethod
    def detect_provider(cls) -> str:
        """Detect the best available cache provider."""
        if cls.is_available("redis.asyncio"):
            return "redis"
        return "memory"

    @classmethod
    def create_adapter(cls, properties: CacheProperties) -> CacheAdapter:
        """Build the adapter chain described by *properties*.

        Redis is always paired with an in-memory fallback through
        :class:`CacheManager`, so reads keep being served during a Redis
        outage while failed writes are still reported.
        """
        if not properties.enabled or properties.provider == "null":
            provider = "null"
        elif properties.provider == "auto":
            provider = cls.detect_provider()
        else:
            provider = properties.provider

        adapter: CacheAdapter
        if provider == "redis":
            from cachekit.cache.adapters.redis import RedisCacheAdapter

            redis_adapter = RedisCacheAdapter.from_url(
                properties.redis.url,
                socket_timeout=properties.redis.socket_timeout,
            )
            adapter = CacheManager(primary=redis_adapter, fallback=InMemoryCache())
        elif provider == "file":
            adapter = FileCache(properties.directory)
        elif provider == "null":
            adapter = NullCache()
        else:
            adapter = InMemoryCache()

        logger.info("cache_adapter_configured", provider=provider, namespace=properties.namespace)

        if properties.log_operations:
            adapter = LoggingCacheAdapter(adapter)
        return adapter

    @classmethod
    def create_cache(cls, config: Config) -> Cache:
        """Bind :class:`CacheProperties` from *config* and build a :class:`Cache`.

        When ``cachekit.logging.configure`` is set, structlog is configured
        from the same *config* first so the adapter chain logs through it.
        """
        if config.bind(LoggingProperties).configure:
            configure_logging(config)
        properties = config.bind(CacheProperties)
        return Cache(
            cls.create_adapter(properties),
            namespace=properties.namespace,
            default_ttl=properties.default_ttl,
        )
