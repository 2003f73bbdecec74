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
"""Filesystem-backed cache adapter."""

from __future__ import annotations

import hashlib
import json
import logging
import os
import tempfile
import time
from pathlib import Path
from typing import Any

from cachekit.cache.exceptions import CacheBackendException
from cachekit.cache.ttl import is_expired
from cachekit.cache.types import ExpiresAt

_logger = logging.getLogger(__name__)

_SUFFIX = ".cache.json"


class FileCache:
    """Cache that keeps one JSON document per key in a directory.

    File names are the SHA-256 of the key, so any string is a safe key. Each
    document records the original key, the value and the expiration instant.
    The value must be JSON-serializable and is read back in its JSON shape:
    tuples become lists and non-string dict keys become strings. Writes go
    through a temporary file and ``os.replace`` so readers never see a
    half-written entry.

    Entries survive process restarts. Expired files are removed lazily on
    read, or all at once by :meth:`clean`.
    """

    def __init__(self, directory: str | Path, create_dirs: bool = True) -> None:
        self._directory = Path(directory)
        if create_dirs:
            try:
                self._directory.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise CacheBackendException(
                    f"Cannot create cache directory '{self._directory}'",
                    context={"directory": str(self._directory)},
                ) from exc
        if not self._directory.is_dir():
            raise CacheBackendException(
                f"Cache directory '{self._directory}' does not exist or is not a directory",
                context={"directory": str(self._directory)},
            )

    @property
    def directory(self) -> Path:
        return self._directory

    def _path(self, key: str) -> Path:
        digest = hashlib.sha256(key.encode("utf-8")).hexdigest()
        return self._directory / f"{digest}{_SUFFIX}"

    def _read(self, path: Path) -> dict[str, Any] | None:
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            return None
        try:
            document = json.loads(raw)
        except ValueError:
            # undecodable bytes or malformed JSON
            document = None
        if not isinstance(document, dict):
            _logger.warning("Discarding unreadable cache file '%s'", path)
            path.unlink(missing_ok=True)
            return None
        return document

    def _live_document(self, key: str) -> dict[str, Any] | None:
        path = self._path(key)
        document = self._read(path)
        if document is None or document.get("key") != key:
            return None
        expires_at = document.get("expires_at")
        if is_expired(expires_at, now=time.time()):
            path.unlink(missing_ok=True)
            return None
        return document

    async def get(self, key: str) -> Any | None:
        document = self._live_document(key)
        return None if document is None else document.get("value")

    async def put(self, key: str, value: Any, expires_at: ExpiresAt = None) -> None:
        payload = json.dumps({"key": key, "value": value, "expires_at": expires_at})
        fd, tmp_name = tempfile.mkstemp(dir=self._directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self._path(key))
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    async def evict(self, key: str) -> bool:
        path = self._path(key)
        document = self._read(path)
        if document is None or document.get("key") != key:
            return False
        path.unlink(missing_ok=True)
        return True

    async def exists(self, key: str) -> bool:
        return self._live_document(key) is not None

    async def clear(self) -> None:
        for path in self._directory.glob(f"*{_SUFFIX}"):
            path.unlink(missing_ok=True)

    async def evict_prefix(self, prefix: str) -> int:
        removed = 0
        for path in self._directory.glob(f"*{_SUFFIX}"):
            document = self._read(path)
            key = None if document is None else document.get("key")
            if isinstance(key, str) and key.startswith(prefix):
                path.unlink(missing_ok=True)
                removed += 1
        return removed

    async def clean(self) -> int:
        """Remove expired (and unreadable) entry files; return how many."""
        removed = 0
        now = time.time()
        for path in self._directory.glob(f"*{_SUFFIX}"):
            document = self._read(path)
            if document is None:
                removed += 1
                continue
            expires_at = document.get("expires_at")
            if is_expired(expires_at, now=now):
                path.unlink(missing_ok=True)
                removed += 1
        return removed
