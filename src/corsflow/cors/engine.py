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
"""CORS decision engine.

Implements the resource processing model of https://www.w3.org/TR/cors/
(section 6.1 for actual requests, 6.2 for preflight requests). Every failed
check ends processing with an empty mapping; nothing here raises.
"""

from __future__ import annotations

from corsflow.cors.matching import (
    SIMPLE_HEADERS,
    are_simple_headers,
    contains_exact,
    header_difference,
    is_simple_method,
    is_valid_token,
)
from corsflow.cors.policy import CorsPolicy
from corsflow.cors.request import CorsRequest
from corsflow.cors.response import (
    ALLOW_CREDENTIALS,
    ALLOW_HEADERS,
    ALLOW_METHODS,
    ALLOW_ORIGIN,
    EXPOSE_HEADERS,
    MAX_AGE,
    ResponseParameters,
)
from corsflow.logging.port import InfoLogger, NullLogger


class CorsService:
    """Computes the CORS response parameters for requests under one policy.

    Stateless per request; one instance may serve any number of threads.

    Args:
        policy: The rules to enforce.
        logger: Receives an ``info`` event with a ``reason`` for every
            rejection. Must be safe for concurrent use. Defaults to a no-op.
    """

    def __init__(self, policy: CorsPolicy, logger: InfoLogger | None = None) -> None:
        self._policy = policy
        self._logger: InfoLogger = logger if logger is not None else NullLogger()

    @property
    def policy(self) -> CorsPolicy:
        return self._policy

    def process(self, request: CorsRequest) -> ResponseParameters:
        """Return the response parameters for *request*; empty when rejected."""
        if request.is_preflight:
            return self._process_preflight(request)
        return self._process_actual(request)

    def _process_preflight(self, request: CorsRequest) -> ResponseParameters:
        policy = self._policy

        if not request.has_origin:
            return {}

        if not self._is_origin_allowed(request.origin):
            return self._reject("origin not allowed", origin=request.origin)

        if not is_valid_token(request.request_method):
            return self._reject(
                'header "access-control-request-method" is not valid',
                request_method=request.request_method,
            )

        if request.has_request_headers and not self._are_header_names_valid(request.request_headers):
            return self._reject(
                'header "access-control-request-headers" is not valid',
                request_headers=list(request.request_headers),
            )

        if not self._is_method_allowed(request.request_method):
            return self._reject("method not allowed", request_method=request.request_method)

        if request.has_request_headers and not self._are_headers_allowed(request.request_headers):
            return self._reject(
                "headers not allowed",
                request_headers=list(request.request_headers),
            )

        response: ResponseParameters = {ALLOW_ORIGIN: request.origin}

        if policy.can_allow_credentials:
            response[ALLOW_CREDENTIALS] = "true"

        if policy.can_cache:
            response[MAX_AGE] = str(policy.max_age)

        if not is_simple_method(request.request_method):
            response[ALLOW_METHODS] = list(policy.allow_methods)

        if not are_simple_headers(request.request_headers):
            response[ALLOW_HEADERS] = list(policy.allow_headers)

        return response

    def _process_actual(self, request: CorsRequest) -> ResponseParameters:
        policy = self._policy

        if not request.has_origin:
            return {}

        if not self._is_origin_allowed(request.origin):
            return self._reject("origin not allowed", origin=request.origin)

        response: ResponseParameters = {ALLOW_ORIGIN: request.origin}

        if policy.can_allow_credentials:
            response[ALLOW_CREDENTIALS] = "true"

        if policy.can_expose_headers:
            response[EXPOSE_HEADERS] = list(policy.expose_headers)

        return response

    def _reject(self, reason: str, **details: object) -> ResponseParameters:
        self._logger.info("cors_request_rejected", reason=reason, **details)
        return {}

    def _is_origin_allowed(self, origin: str) -> bool:
        if self._policy.is_wildcard:
            return True
        return contains_exact(self._policy.allow_origins, origin)

    def _is_method_allowed(self, method: str) -> bool:
        if is_simple_method(method):
            return True
        return contains_exact(self._policy.allow_methods, method)

    @staticmethod
    def _are_header_names_valid(headers: tuple[str, ...]) -> bool:
        return all(name != "" and is_valid_token(name) for name in headers)

    def _are_headers_allowed(self, headers: tuple[str, ...]) -> bool:
        # WebKit lists simple headers in access-control-request-headers too
        requested = header_difference(headers, SIMPLE_HEADERS)
        return not header_difference(requested, self._policy.allow_headers)


def process(
    policy: CorsPolicy,
    request: CorsRequest,
    logger: InfoLogger | None = None,
) -> ResponseParameters:
    """Evaluate *request* against *policy*; see ``CorsService.process``."""
    return CorsService(policy, logger).process(request)
