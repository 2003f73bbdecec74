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
"""cachekit — a backend-agnostic async cache contract with pluggable storage adapters."""

from cachekit.cache import (
    Cache,
    CacheAdapter,
    CacheAutoConfiguration,
    CacheManager,
    FileCache,
    InMemoryCache,
    InvalidArgumentException,
    InvalidKeyTypeException,
    InvalidTtlTypeException,
    NullCache,
    RedisCacheAdapter,
    SimpleCache,
)
from cachekit.core.config import Config

__version__ = "0.1.0"

__all__ = [
    "Cache",
    "CacheAdapter",
    "CacheAutoConfiguration",
    "CacheManager",
    "Config",
    "FileCache",
    "InMemoryCache",
    "InvalidArgumentException",
    "InvalidKeyTypeException",
    "InvalidTtlTypeException",
    "NullCache",
    "RedisCacheAdapter",
    "SimpleCache",
    "__version__",
]
