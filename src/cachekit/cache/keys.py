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
"""Cache key validation."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from cachekit.cache.exceptions import InvalidKeyTypeException


def validate_key(key: Any) -> str:
    """Return *key* unchanged if it is a non-empty string.

    Raises:
        InvalidKeyTypeException: for any other value, including ``""``.
    """
    if not isinstance(key, str):
        raise InvalidKeyTypeException(
            f"Cache key must be a string, got {type(key).__name__}",
            context={"key_type": type(key).__name__},
        )
    if not key:
        raise InvalidKeyTypeException("Cache key must not be empty")
    return key


def validate_keys(keys: Iterable[Any]) -> list[str]:
    """Materialize and validate a batch of keys.

    Every key is checked before the caller does any I/O, so one bad key fails
    the whole batch.
    """
    if isinstance(keys, (str, bytes)) or not isinstance(keys, Iterable):
        raise InvalidKeyTypeException(
            f"Cache keys must be an iterable of strings, got {type(keys).__name__}",
            context={"keys_type": type(keys).__name__},
        )
    return [validate_key(key) for key in keys]
