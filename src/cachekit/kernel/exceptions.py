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
"""Unified exception hierarchy for cachekit.

All library exceptions inherit from CacheKitException so callers can catch
every cachekit error in one place, or a specific subclass for targeted handling.

Categories:
- ValidationException: programmer errors in the arguments of a call
- InfrastructureException: storage medium, network and filesystem failures
"""

from __future__ import annotations


class CacheKitException(Exception):
    """Base exception for all cachekit errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CACHE_INVALID_KEY").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


class ValidationException(CacheKitException):
    """Input validation failures."""


class InfrastructureException(CacheKitException):
    """Infrastructure failures: filesystem, network, remote cache servers."""
