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
"""Token syntax and the two comparison rules CORS relies on.

Origins and methods compare exactly (``contains_exact``);
header names compare case-insensitively (``header_difference``).
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

# https://www.w3.org/TR/cors/#simple-method
SIMPLE_METHODS: tuple[str, ...] = ("GET", "HEAD", "POST")

# https://www.w3.org/TR/cors/#simple-header
# "Origin" is not a simple header there, but Safari always sends it with
# non-simple requests.
SIMPLE_HEADERS: tuple[str, ...] = ("Accept", "Accept-Language", "Content-Language", "Origin")

# RFC 2616 section 2.2
TOKEN_SEPARATORS = frozenset('()<>@,;:\\"/[]?={} \t')


def is_valid_token(text: str) -> bool:
    """Return True if *text* holds no separator and no control character."""
    for char in text:
        if char in TOKEN_SEPARATORS:
            return False
        if ord(char) < 32 or ord(char) == 127:
            return False
    return True


def contains_exact(values: Iterable[str], item: str) -> bool:
    """Case-sensitive, full-string membership of *item* in *values*."""
    return any(item == value for value in values)


def is_simple_method(method: str) -> bool:
    return contains_exact(SIMPLE_METHODS, method)


def header_difference(headers: Iterable[str], remove: Iterable[str]) -> list[str]:
    """Headers from *headers* with no case-insensitive match in *remove*, order kept."""
    lowered = {name.lower() for name in remove}
    return [name for name in headers if name.lower() not in lowered]


def are_simple_headers(headers: Sequence[str]) -> bool:
    """True when every header is a simple header (vacuously true for none)."""
    return not header_difference(headers, SIMPLE_HEADERS)
