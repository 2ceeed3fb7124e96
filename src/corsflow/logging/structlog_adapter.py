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
"""Rejection tracing for CorsService, rendered by structlog.

Rejected CORS requests are a normal outcome, so they are traced at info
level and never as errors. The trace goes to stderr so that machine-readable
output on stdout (``corsflow evaluate --json``) stays clean.

Configuration (``corsflow.logging``)::

    corsflow:
      logging:
        level: INFO      # DEBUG..CRITICAL; above INFO silences rejection traces
        format: console  # or json
"""

from __future__ import annotations

import logging
import sys

import structlog

from corsflow.core.config import Config

REJECTION_LOGGER = "corsflow.cors.engine"

_FORMATS = ("console", "json")


class StructlogAdapter:
    """Configures structlog from ``corsflow.logging`` and hands out the rejection logger."""

    def __init__(self) -> None:
        self._level: int = logging.INFO
        self._format: str = "console"

    @property
    def level(self) -> int:
        return self._level

    @property
    def format(self) -> str:
        return self._format

    def configure(self, config: Config) -> None:
        level_name = str(config.get("corsflow.logging.level", "INFO")).upper()
        level = logging.getLevelName(level_name)
        self._level = level if isinstance(level, int) else logging.INFO

        fmt = str(config.get("corsflow.logging.format", "console")).lower()
        self._format = fmt if fmt in _FORMATS else "console"

        renderer: structlog.types.Processor = (
            structlog.processors.JSONRenderer()
            if self._format == "json"
            else structlog.dev.ConsoleRenderer(colors=False)
        )
        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
                renderer,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=False,
        )

        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(message)s"))
        rejection_logger = logging.getLogger(REJECTION_LOGGER)
        rejection_logger.handlers[:] = [handler]
        rejection_logger.setLevel(self._level)
        rejection_logger.propagate = False

    def rejection_logger(self, **context: object) -> structlog.stdlib.BoundLogger:
        """Logger for ``CorsService`` rejections, bound to ``component="cors"`` and *context*."""
        return structlog.get_logger(REJECTION_LOGGER).bind(component="cors", **context)
