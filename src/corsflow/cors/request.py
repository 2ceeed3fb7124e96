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
"""Request descriptor: the CORS-relevant view of one inbound HTTP request."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from dataclasses import dataclass, field
from urllib.parse import urlsplit

from corsflow.kernel.exceptions import ValidationError


def _require_text(name: str, value: object) -> str:
    if not isinstance(value, str) or value == "":
        raise ValidationError(
            f'Parameter "{name}" cannot be blank',
            code="BLANK_PARAMETER",
            context={"parameter": name, "value": value},
        )
    return value


def _require_origin(origin: object) -> str:
    if not isinstance(origin, str):
        raise ValidationError(
            'Parameter "origin" must be a string',
            code="INVALID_ORIGIN",
            context={"origin": origin},
        )
    try:
        parts = urlsplit(origin)
    except ValueError as exc:
        raise ValidationError(
            'Parameter "origin" is not in the format {scheme}://{host}',
            code="INVALID_ORIGIN",
            context={"origin": origin},
        ) from exc
    if not parts.scheme or not parts.hostname:
        raise ValidationError(
            'Parameter "origin" is not in the format {scheme}://{host}',
            code="INVALID_ORIGIN",
            context={"origin": origin},
        )
    return origin


def _require_header_names(headers: object) -> tuple[str, ...]:
    if isinstance(headers, str) or not isinstance(headers, Iterable):
        raise ValidationError(
            'Parameter "request_headers" must be a sequence of strings',
            code="INVALID_REQUEST_HEADERS",
            context={"request_headers": headers},
        )
    names = tuple(headers)
    for name in names:
        if not isinstance(name, str):
            raise ValidationError(
                'An element in "request_headers" is not a string',
                code="INVALID_REQUEST_HEADERS",
                context={"element": name},
            )
    return names


@dataclass(frozen=True)
class CorsRequest:
    """Method, Origin and the Access-Control-Request-* values of a request.

    Empty ``origin``/``request_method`` and an empty ``request_headers``
    tuple mean the corresponding header was not sent. Instances are
    immutable; the ``with_*`` methods validate and return a copy.

    Raises:
        ValidationError: On a blank method, an origin that does not parse
            into ``{scheme}://{host}``, or a non-string header name.
    """

    method: str
    origin: str = ""
    request_method: str = ""
    request_headers: tuple[str, ...] = field(default=())

    def __post_init__(self) -> None:
        _require_text("method", self.method)
        if self.origin != "":
            _require_origin(self.origin)
        if self.request_method != "":
            _require_text("request_method", self.request_method)
        object.__setattr__(self, "request_headers", _require_header_names(self.request_headers))

    def with_method(self, method: str) -> CorsRequest:
        return dataclasses.replace(self, method=_require_text("method", method))

    def with_origin(self, origin: str) -> CorsRequest:
        return dataclasses.replace(self, origin=_require_origin(origin))

    def with_request_method(self, request_method: str) -> CorsRequest:
        return dataclasses.replace(self, request_method=_require_text("request_method", request_method))

    def with_request_headers(self, request_headers: Iterable[str]) -> CorsRequest:
        return dataclasses.replace(self, request_headers=_require_header_names(request_headers))

    @property
    def has_origin(self) -> bool:
        return self.origin != ""

    @property
    def has_request_method(self) -> bool:
        return self.request_method != ""

    @property
    def has_request_headers(self) -> bool:
        return self.request_headers != ()

    @property
    def is_preflight(self) -> bool:
        """An OPTIONS request carrying Access-Control-Request-Method."""
        return self.method == "OPTIONS" and self.has_request_method
