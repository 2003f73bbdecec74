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
"""Declarative caching decorators for coroutine functions."""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable
from typing import Any, TypeVar

from cachekit.cache.facade import Cache
from cachekit.cache.ttl import normalize_ttl
from cachekit.cache.types import TtlLike

F = TypeVar("F", bound=Callable[..., Any])

_MISS = object()


def _resolve_key(func: Callable[..., Any], key: str, args: tuple[Any, ...], kwargs: dict[str, Any]) -> str:
    bound = inspect.signature(func).bind(*args, **kwargs)
    bound.apply_defaults()
    return key.format(**bound.arguments)


def cache(
    backend: Cache,
    key: str,
    ttl: TtlLike = None,
) -> Callable[[F], F]:
    """Cache the return value of an async function.

    The `key` parameter supports format-string interpolation with function
    argument names. For example, `key="user:{user_id}"` will expand
    `{user_id}` from the function's arguments. A ``None`` result is not
    distinguishable from a miss and is recomputed on every call.

    Args:
        backend: Cache to read from and write to.
        key: Key template with {param} placeholders.
        ttl: Optional time-to-live for cached entries, validated when the
            decorator is applied.
    """
    normalize_ttl(ttl)

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            resolved_key = _resolve_key(func, key, args, kwargs)

            cached = await backend.get(resolved_key, _MISS)
            if cached is not _MISS:
                return cached

            result = await func(*args, **kwargs)
            await backend.set(resolved_key, result, ttl=ttl)
            return result

        return wrapper  # type: ignore[return-value]

    return decorator


def cacheable(
    backend: Cache,
    key: str,
    ttl: TtlLike = None,
) -> Callable[[F], F]:
    """Cache the return value, skip execution on cache hit.

    Equivalent to :func:`cache`.
    """
    return cache(backend=backend, key=key, ttl=ttl)


def cache_evict(
    backend: Cache,
    key: str = "",
    all_entries: bool = False,
) -> Callable[[F], F]:
    """Evict a cache entry (or the cache's whole namespace) after method execution.

    Args:
        backend: Cache to evict from.
        key: Key template with {param} placeholders. Ignored when *all_entries* is ``True``.
        all_entries: When ``True``, :meth:`Cache.clear` the cache after execution.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            result = await func(*args, **kwargs)
            if all_entries:
                await backend.clear()
            else:
                await backend.delete(_resolve_key(func, key, args, kwargs))
            return result

        return wrapper  # type: ignore[return-value]

    return decorator


def cache_put(
    backend: Cache,
    key: str,
    ttl: TtlLike = None,
) -> Callable[[F], F]:
    """Always execute the method and cache the result.

    Unlike :func:`cacheable`, the decorated function is always invoked.
    This is useful for update operations where you want to refresh the
    cached value.
    """
    normalize_ttl(ttl)

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            result = await func(*args, **kwargs)
            await backend.set(_resolve_key(func, key, args, kwargs), result, ttl=ttl)
            return result

        return wrapper  # type: ignore[return-value]

    return decorator
