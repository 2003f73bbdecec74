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
"""The public, backend-agnostic cache facade."""

from __future__ import annotations

import uuid
from collections.abc import Iterable, Mapping
from types import TracebackType
from typing import Any

import structlog

from cachekit.cache.exceptions import InvalidKeyTypeException
from cachekit.cache.keys import validate_key, validate_keys
from cachekit.cache.ports.outbound import CacheAdapter, PrefixEvictableCacheAdapter, SweepableCacheAdapter
from cachekit.cache.ttl import normalize_ttl
from cachekit.cache.types import ExpiresAt, TtlLike
from cachekit.kernel.lifecycle import Lifecycle

logger = structlog.get_logger("cachekit.cache")

GENERATION_KEY = "__generation__"
INITIAL_GENERATION = "0"


class Cache:
    """Simple-cache facade over a single :class:`CacheAdapter`.

    Keys and TTLs are validated before any I/O and are the only source of
    exceptions (:class:`InvalidKeyTypeException`, :class:`InvalidTtlTypeException`).
    Everything the adapter raises is logged and reported as ``False`` or the
    caller's default. Batch operations are repeated single-key calls and are
    not atomic.

    With a *namespace*, keys are stored as ``{namespace}:{generation}:{key}``.
    The generation token lives in the backend under
    ``{namespace}:__generation__`` and is ``"0"`` until the first
    :meth:`clear`, which replaces it with a random token. That hides every
    entry of the namespace at once while leaving other namespaces alone.
    Namespaces may not contain ``":"`` so one namespace can never be a
    prefix of another.
    :meth:`flush` always wipes the whole backend.

    Args:
        adapter: Storage primitives to delegate to.
        namespace: Logical namespace of this cache instance (no ``":"``).
        default_ttl: TTL applied when a write passes ``ttl=None``; ``None``
            means entries never expire.
    """

    def __init__(
        self,
        adapter: CacheAdapter,
        *,
        namespace: str | None = None,
        default_ttl: TtlLike = None,
    ) -> None:
        if namespace is not None:
            validate_key(namespace)
            if ":" in namespace:
                raise InvalidKeyTypeException(
                    f"Cache namespace must not contain ':', got {namespace!r}",
                    context={"namespace": namespace},
                )
        normalize_ttl(default_ttl)
        self._adapter = adapter
        self._namespace = namespace
        self._default_ttl = default_ttl

    @property
    def adapter(self) -> CacheAdapter:
        return self._adapter

    @property
    def namespace(self) -> str | None:
        return self._namespace

    def __repr__(self) -> str:
        return f"Cache(adapter={type(self._adapter).__name__}, namespace={self._namespace!r})"

    # ------------------------------------------------------------------
    # Namespacing
    # ------------------------------------------------------------------

    @property
    def _generation_key(self) -> str:
        return f"{self._namespace}:{GENERATION_KEY}"

    async def _generation(self) -> str:
        token = await self._adapter.get(self._generation_key)
        return token if isinstance(token, str) else INITIAL_GENERATION

    async def _prefix(self) -> str:
        """Storage key prefix for the live generation of the namespace.

        A namespace that was never cleared has no stored token and lives in
        :data:`INITIAL_GENERATION`, so writes never have to create one.
        """
        if self._namespace is None:
            return ""
        return f"{self._namespace}:{await self._generation()}:"

    def _expires_at(self, ttl: TtlLike) -> ExpiresAt:
        return normalize_ttl(self._default_ttl if ttl is None else ttl)

    def _backend_error(self, operation: str, key: str | None = None) -> None:
        logger.warning(
            "cache_backend_error",
            operation=operation,
            key=key,
            namespace=self._namespace,
            adapter=type(self._adapter).__name__,
            exc_info=True,
        )

    # ------------------------------------------------------------------
    # Single-key operations
    # ------------------------------------------------------------------

    async def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under *key*, or *default* if absent or expired."""
        validate_key(key)
        try:
            value = await self._adapter.get(await self._prefix() + key)
        except Exception:
            self._backend_error("get", key)
            return default
        return default if value is None else value

    async def set(self, key: str, value: Any, ttl: TtlLike = None) -> bool:
        """Store *value* under *key*, replacing any previous value."""
        validate_key(key)
        expires_at = self._expires_at(ttl)
        try:
            await self._adapter.put(await self._prefix() + key, value, expires_at)
        except Exception:
            self._backend_error("set", key)
            return False
        return True

    async def delete(self, key: str) -> bool:
        """Remove *key*. Succeeds whether or not the key was present."""
        validate_key(key)
        try:
            await self._adapter.evict(await self._prefix() + key)
        except Exception:
            self._backend_error("delete", key)
            return False
        return True

    async def has(self, key: str) -> bool:
        """Whether *key* is present and not expired."""
        validate_key(key)
        try:
            return await self._adapter.exists(await self._prefix() + key)
        except Exception:
            self._backend_error("has", key)
            return False

    # ------------------------------------------------------------------
    # Batch operations
    # ------------------------------------------------------------------

    async def get_multiple(self, keys: Iterable[str], default: Any = None) -> dict[str, Any]:
        """Fetch several keys; every requested key appears in the result."""
        key_list = validate_keys(keys)
        result: dict[str, Any] = dict.fromkeys(key_list, default)
        if not key_list:
            return result

        try:
            prefix = await self._prefix()
        except Exception:
            self._backend_error("get_multiple")
            return result

        for key in key_list:
            try:
                value = await self._adapter.get(prefix + key)
            except Exception:
                self._backend_error("get_multiple", key)
                continue
            if value is not None:
                result[key] = value
        return result

    async def set_multiple(self, values: Mapping[str, Any], ttl: TtlLike = None) -> bool:
        """Store every item of *values* with one shared TTL.

        Returns True only if every write succeeded; a failed write does not
        stop the remaining ones.
        """
        if not isinstance(values, Mapping):
            raise InvalidKeyTypeException(
                f"Cache values must be a mapping of keys to values, got {type(values).__name__}",
                context={"values_type": type(values).__name__},
            )
        validate_keys(values.keys())
        expires_at = self._expires_at(ttl)
        if not values:
            return True

        try:
            prefix = await self._prefix()
        except Exception:
            self._backend_error("set_multiple")
            return False

        ok = True
        for key, value in values.items():
            try:
                await self._adapter.put(prefix + key, value, expires_at)
            except Exception:
                self._backend_error("set_multiple", key)
                ok = False
        return ok

    async def delete_multiple(self, keys: Iterable[str]) -> bool:
        """Remove several keys. Returns True only if every delete succeeded."""
        key_list = validate_keys(keys)
        if not key_list:
            return True

        try:
            prefix = await self._prefix()
        except Exception:
            self._backend_error("delete_multiple")
            return False

        ok = True
        for key in key_list:
            try:
                await self._adapter.evict(prefix + key)
            except Exception:
                self._backend_error("delete_multiple", key)
                ok = False
        return ok

    # ------------------------------------------------------------------
    # Backend management
    # ------------------------------------------------------------------

    async def clear(self) -> bool:
        """Remove every entry of this cache's namespace.

        Without a namespace the whole backend is this cache's namespace, so
        this is the same as :meth:`flush`. With one, the namespace moves to a
        fresh generation; when the adapter can evict by prefix the retired
        generation's entries are deleted as well, otherwise they are left to
        expire or to :meth:`flush`.
        """
        if self._namespace is None:
            return await self.flush()
        try:
            retired = await self._generation()
            await self._adapter.put(self._generation_key, uuid.uuid4().hex)
        except Exception:
            self._backend_error("clear")
            return False

        removed = None
        if isinstance(self._adapter, PrefixEvictableCacheAdapter):
            try:
                removed = await self._adapter.evict_prefix(f"{self._namespace}:{retired}:")
            except Exception:
                # the namespace is already empty to readers; only reclamation failed
                self._backend_error("clear")
        logger.info("cache_cleared", namespace=self._namespace, removed=removed)
        return True

    async def flush(self) -> bool:
        """Remove every entry in the backend, including other namespaces'."""
        try:
            await self._adapter.clear()
        except Exception:
            self._backend_error("flush")
            return False
        logger.info("cache_flushed", adapter=type(self._adapter).__name__)
        return True

    async def clean(self) -> bool:
        """Sweep expired entries where the adapter supports it.

        Returns True when a sweep ran (even if it removed nothing), False when
        the adapter has no sweep or the sweep failed.
        """
        if not isinstance(self._adapter, SweepableCacheAdapter):
            return False
        try:
            removed = await self._adapter.clean()
        except Exception:
            self._backend_error("clean")
            return False
        logger.debug("cache_cleaned", removed=removed)
        return True

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> Cache:
        if isinstance(self._adapter, Lifecycle):
            await self._adapter.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if isinstance(self._adapter, Lifecycle):
            await self._adapter.stop()
