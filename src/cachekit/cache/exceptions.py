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
"""Cache exceptions.

``InvalidArgumentException`` is the generic "invalid argument" kind of the
simple-cache interface. Code written against that interface catches it; code
that cares about the exact problem catches one of its two subclasses.
"""

from __future__ import annotations

from cachekit.kernel.exceptions import InfrastructureException, ValidationException


class InvalidArgumentException(ValidationException, ValueError):
    """An argument passed to a cache operation is not acceptable."""


class InvalidKeyTypeException(InvalidArgumentException):
    """A cache key is not a non-empty string."""

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="CACHE_INVALID_KEY", context=context)


class InvalidTtlTypeException(InvalidArgumentException):
    """A TTL is neither absent, a number of seconds, a timedelta nor a datetime."""

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="CACHE_INVALID_TTL", context=context)


class CacheBackendException(InfrastructureException):
    """A cache adapter cannot reach or use its storage medium."""
