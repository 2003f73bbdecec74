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
"""Logging configuration properties."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from cachekit.core.config import config_properties


@config_properties(prefix="cachekit.logging")
class LoggingProperties(BaseModel):
    """Configuration for cachekit's structlog output (cachekit.logging.*).

    ``level`` maps logger names to levels; the ``root`` entry sets the level
    of the root logger. A plain string is taken as the root level, so
    ``CACHEKIT_LOGGING_LEVEL=DEBUG`` works as expected.
    """

    configure: bool = False
    format: Literal["console", "json", "logfmt"] = "console"
    level: dict[str, str] = Field(default_factory=lambda: {"root": "INFO"})

    @field_validator("format", mode="before")
    @classmethod
    def _lower_format(cls, value: Any) -> Any:
        return value.lower() if isinstance(value, str) else value

    @field_validator("level", mode="before")
    @classmethod
    def _root_shorthand(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"root": value}
        return value
