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
"""CorsFlow CORS: policy, request descriptor and decision engine."""

from corsflow.cors.engine import CorsService, process
from corsflow.cors.matching import SIMPLE_HEADERS, SIMPLE_METHODS, is_valid_token
from corsflow.cors.policy import WILDCARD, CorsPolicy, CorsProperties
from corsflow.cors.request import CorsRequest
from corsflow.cors.response import ResponseParameters, to_header_list

__all__ = [
    "SIMPLE_HEADERS",
    "SIMPLE_METHODS",
    "WILDCARD",
    "CorsPolicy",
    "CorsProperties",
    "CorsRequest",
    "CorsService",
    "ResponseParameters",
    "is_valid_token",
    "process",
    "to_header_list",
]
