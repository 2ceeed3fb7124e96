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
"""The structural logger the decision engine reports rejections to."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class InfoLogger(Protocol):
    """Anything accepting informational events, e.g. a structlog BoundLogger."""

    def info(self, event: str, **kwargs: Any) -> None: ...


class NullLogger:
    """InfoLogger that discards every event."""

    __slots__ = ()

    def info(self, event: str, **kwargs: Any) -> None:
        return None
