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
"""structlog setup driven by ``cachekit.logging.*`` configuration."""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from cachekit.config.properties.logging import LoggingProperties
from cachekit.core.config import Config

_RENDERERS: dict[str, type[Any]] = {
    "console": structlog.dev.ConsoleRenderer,
    "json": structlog.processors.JSONRenderer,
    "logfmt": structlog.processors.LogfmtRenderer,
}


class StructlogAdapter:
    """Routes cachekit's structlog events and stdlib log records to one handler.

    The cache facade and the logging adapter emit structlog events
    (``cache_backend_error``, ``cache_get``, ...) while the file and Redis
    adapters and the tiered manager use :mod:`logging`; both end up on
    stdout, rendered as ``console``, ``json`` or ``logfmt``.
    """

    def __init__(self) -> None:
        self._root_level = "INFO"
        self._format = "console"
        self._module_levels: dict[str, str] = {}

    def configure(self, config: Config) -> None:
        """Bind :class:`LoggingProperties` from *config* and apply them."""
        self.apply(config.bind(LoggingProperties))

    def apply(self, properties: LoggingProperties) -> None:
        levels = {name: level.upper() for name, level in properties.level.items()}
        self._root_level = levels.pop("root", "INFO")
        self._module_levels = levels
        self._format = properties.format

        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.format_exc_info,
                _RENDERERS[self._format](),
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(
            format="%(message)s",
            stream=sys.stdout,
            level=_level(self._root_level),
            force=True,
        )
        for name, level in self._module_levels.items():
            self.set_level(name, level)

    def get_logger(self, name: str) -> Any:
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        logging.getLogger(name).setLevel(_level(level))


def _level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(config: Config) -> StructlogAdapter:
    """Configure structlog from *config* and return the adapter used."""
    adapter = StructlogAdapter()
    adapter.configure(config)
    return adapter
