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
"""CORS policy: the static rules protecting a resource.

``CorsPolicy`` is the validated, immutable form the decision engine reads.
``CorsProperties`` is the configuration-facing model: it accepts the loose
shapes found in config files (a bare string for a list, ``"true"`` for a
boolean, ``"3600"`` for an integer) and produces a ``CorsPolicy``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from corsflow.core.config import config_properties
from corsflow.kernel.exceptions import ValidationError

logger = logging.getLogger(__name__)

WILDCARD = "*"

_SEQUENCE_FIELDS = ("allow_methods", "allow_headers", "allow_origins", "expose_headers")


@dataclass(frozen=True)
class CorsPolicy:
    """Immutable CORS rules.

    ``allow_methods`` compare case-sensitively, ``allow_headers``
    case-insensitively. ``allow_origins`` entries are ``scheme://host``
    strings; the list ``["*"]`` on its own allows any origin. A ``max_age``
    of 0 means preflight results are not advertised as cacheable.
    """

    allow_methods: Sequence[str] = field(default=())
    allow_headers: Sequence[str] = field(default=())
    allow_origins: Sequence[str] = field(default=())
    allow_credentials: bool = False
    expose_headers: Sequence[str] = field(default=())
    max_age: int = 0

    def __post_init__(self) -> None:
        for name in _SEQUENCE_FIELDS:
            value = getattr(self, name)
            if isinstance(value, str) or not isinstance(value, Sequence):
                raise ValidationError(
                    f'Policy option "{name}" must be a sequence of strings',
                    code="INVALID_POLICY",
                    context={"option": name, "value": value},
                )
            if not all(isinstance(item, str) for item in value):
                raise ValidationError(
                    f'An element in policy option "{name}" is not a string',
                    code="INVALID_POLICY",
                    context={"option": name, "value": value},
                )
            object.__setattr__(self, name, tuple(value))

        if not isinstance(self.allow_credentials, bool):
            raise ValidationError(
                'Policy option "allow_credentials" must be a boolean',
                code="INVALID_POLICY",
                context={"option": "allow_credentials", "value": self.allow_credentials},
            )
        if isinstance(self.max_age, bool) or not isinstance(self.max_age, int) or self.max_age < 0:
            raise ValidationError(
                'Policy option "max_age" must be a non-negative integer',
                code="INVALID_POLICY",
                context={"option": "max_age", "value": self.max_age},
            )

        if self.allow_credentials and self.is_wildcard:
            logger.warning(
                "CORS policy allows credentials with a wildcard origin; "
                "credentials will never be granted"
            )

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> CorsPolicy:
        """Build a policy from raw options (camelCase or snake_case keys; unknown keys ignored).

        Raises:
            ValidationError: With code ``INVALID_POLICY`` and the offending
                options under ``context["errors"]``.
        """
        try:
            properties = CorsProperties.model_validate(dict(options))
        except PydanticValidationError as exc:
            errors = exc.errors()
            options_at_fault = sorted({str(e["loc"][0]) for e in errors if e["loc"]})
            raise ValidationError(
                f"Invalid CORS policy option(s): {', '.join(options_at_fault)}",
                code="INVALID_POLICY",
                context={"options": options_at_fault, "errors": errors},
            ) from exc
        return properties.to_policy()

    @property
    def is_wildcard(self) -> bool:
        # exact singleton only: ["*", "http://a"] is an explicit list
        return self.allow_origins == (WILDCARD,)

    @property
    def can_allow_credentials(self) -> bool:
        return self.allow_credentials and not self.is_wildcard

    @property
    def can_expose_headers(self) -> bool:
        return len(self.expose_headers) > 0

    @property
    def can_cache(self) -> bool:
        return self.max_age > 0


@config_properties(prefix="corsflow.cors")
class CorsProperties(BaseModel):
    """CORS options as read from configuration."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    allow_methods: list[str] = Field(default_factory=list, alias="allowMethods")
    allow_headers: list[str] = Field(default_factory=list, alias="allowHeaders")
    allow_origins: list[str] = Field(default_factory=list, alias="allowOrigins")
    allow_credentials: bool = Field(default=False, alias="allowCredentials")
    expose_headers: list[str] = Field(default_factory=list, alias="exposeHeaders")
    max_age: int = Field(default=0, ge=0, alias="maxAge")

    @field_validator("allow_methods", "allow_headers", "allow_origins", "expose_headers", mode="before")
    @classmethod
    def _promote_scalar(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            # comma lists, as in the headers themselves and in env vars
            return [part.strip() for part in value.split(",") if part.strip()]
        return value

    def to_policy(self) -> CorsPolicy:
        return CorsPolicy(
            allow_methods=tuple(self.allow_methods),
            allow_headers=tuple(self.allow_headers),
            allow_origins=tuple(self.allow_origins),
            allow_credentials=self.allow_credentials,
            expose_headers=tuple(self.expose_headers),
            max_age=self.max_age,
        )
