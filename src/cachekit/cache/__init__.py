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
"""cachekit cache — backend-agnostic cache contract, adapters and helpers."""

from cachekit.cache.adapters import FileCache, InMemoryCache, LoggingCacheAdapter, NullCache, RedisCacheAdapter
from cachekit.cache.auto_configuration import CacheAutoConfiguration
from cachekit.cache.decorators import cache, cache_evict, cache_put, cacheable
from cachekit.cache.exceptions import (
    CacheBackendException,
    InvalidArgumentException,
    InvalidKeyTypeException,
    InvalidTtlTypeException,
)
from cachekit.cache.facade import Cache
from cachekit.cache.keys import validate_key, validate_keys
from cachekit.cache.manager import CacheManager
from cachekit.cache.ports import CacheAdapter, PrefixEvictableCacheAdapter, SimpleCache, SweepableCacheAdapter
from cachekit.cache.ttl import normalize_ttl

__all__ = [
    "Cache",
    "CacheAdapter",
    "CacheAutoConfiguration",
    "CacheBackendException",
    "CacheManager",
    "FileCache",
    "InMemoryCache",
    "InvalidArgumentException",
    "InvalidKeyTypeException",
    "InvalidTtlTypeException",
    "LoggingCacheAdapter",
    "NullCache",
    "PrefixEvictableCacheAdapter",
    "RedisCacheAdapter",
    "SimpleCache",
    "SweepableCacheAdapter",
    "cache",
    "cache_evict",
    "cache_put",
    "cacheable",
    "normalize_ttl",
    "validate_key",
    "validate_keys",
]
