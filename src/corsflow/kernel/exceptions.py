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
"""CorsFlow exception hierarchy.

Only construction-time input problems are exceptional. A request rejected by
the CORS policy is a normal outcome (an empty response mapping), never an
exception.
"""

from __future__ import annotations


class CorsFlowException(Exception):
    """Base exception for all CorsFlow errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "INVALID_ORIGIN").
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


class ValidationError(CorsFlowException):
    """Malformed request descriptor or policy input."""


class ConfigurationException(CorsFlowException):
    """Configuration could not be loaded or bound."""
