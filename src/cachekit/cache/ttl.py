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
"""TTL normalization.

A TTL is turned into an absolute expiration instant exactly once, when the
entry is written. Adapters only ever see that instant.
"""

from __future__ import annotations

import math
import time
from datetime import datetime, timedelta
from typing import Any

from cachekit.cache.exceptions import InvalidTtlTypeException
from cachekit.cache.types import ExpiresAt


def normalize_ttl(ttl: Any, *, now: float | None = None) -> ExpiresAt:
    """Convert *ttl* to an epoch-seconds expiration instant.

    Accepted forms:
    - ``None``: never expires, returns ``None``
    - ``int`` / ``float``: seconds from *now*
    - ``timedelta``: duration from *now*
    - ``datetime``: absolute instant (naive values are local time)

    Zero, negative and past values are valid and make the entry expire
    immediately.

    Raises:
        InvalidTtlTypeException: for any other value, including ``bool`` and
            non-finite floats. Numbers and datetimes too far out to be
            represented as an instant are rejected the same way.
    """
    if ttl is None:
        return None

    if now is None:
        now = time.time()

    if isinstance(ttl, bool):
        raise _invalid(ttl)
    if isinstance(ttl, (int, float)):
        try:
            seconds = float(ttl)
        except OverflowError:
            raise _invalid(ttl) from None
        expires_at = now + seconds
        if not math.isfinite(expires_at):
            raise _invalid(ttl)
        return expires_at
    if isinstance(ttl, timedelta):
        return now + ttl.total_seconds()
    if isinstance(ttl, datetime):
        try:
            return ttl.timestamp()
        except (OverflowError, OSError, ValueError):
            raise _invalid(ttl) from None

    raise _invalid(ttl)


def is_expired(expires_at: ExpiresAt, *, now: float | None = None) -> bool:
    """Whether an entry with *expires_at* should read as absent."""
    if expires_at is None:
        return False
    return expires_at <= (time.time() if now is None else now)


def _invalid(ttl: Any) -> InvalidTtlTypeException:
    return InvalidTtlTypeException(
        f"TTL must be None, seconds, a timedelta or a datetime, got {type(ttl).__name__}: {ttl!r}",
        context={"ttl_type": type(ttl).__name__},
    )
