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
"""Response parameters produced by the decision engine."""

from __future__ import annotations

from collections.abc import Mapping

ResponseParameters = dict[str, str | list[str]]

ALLOW_ORIGIN = "access-control-allow-origin"
ALLOW_CREDENTIALS = "access-control-allow-credentials"
MAX_AGE = "max-age"
ALLOW_METHODS = "access-control-allow-methods"
ALLOW_HEADERS = "access-control-allow-headers"
EXPOSE_HEADERS = "access-control-expose-headers"


def to_header_list(params: Mapping[str, str | list[str]]) -> list[tuple[str, str]]:
    """Flatten response parameters into ``(name, value)`` header pairs.

    List values are joined with ``", "``. An empty mapping (a rejected
    request) yields no headers at all.
    """
    headers: list[tuple[str, str]] = []
    for name, value in params.items():
        if isinstance(value, str):
            headers.append((name, value))
        else:
            headers.append((name, ", ".join(value)))
    return headers
