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
"""Configuration loading from YAML/TOML files and env vars, with Pydantic binding."""

from __future__ import annotations

import os
import tomllib
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from corsflow.kernel.exceptions import ConfigurationException

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

_CONFIG_PROPERTIES_ATTR = "__corsflow_config_prefix__"

ENV_PREFIX = "CORSFLOW_"


def config_properties(prefix: str) -> Callable[[type[T]], type[T]]:
    """Mark a class as bindable to a configuration prefix.

    Usage:
        @config_properties(prefix="corsflow.cors")
        class CorsProperties(BaseModel):
            allow_origins: list[str] = []
    """

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, _CONFIG_PROPERTIES_ATTR, prefix)
        return cls

    return decorator


class Config:
    """Hierarchical configuration with dot-notation access and env var overrides.

    Priority (highest wins):
    1. Environment variables (CORSFLOW_SECTION_KEY format)
    2. Configuration dict / file values, profile overlays last
    3. Model defaults
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}
        self._loaded_sources: list[str] = []

    @property
    def loaded_sources(self) -> list[str]:
        """List of config file paths that were loaded, in merge order."""
        return list(self._loaded_sources)

    def to_dict(self) -> dict[str, Any]:
        """Return a shallow copy of the raw configuration data."""
        return dict(self._data)

    @classmethod
    def from_file(cls, path: str | Path, active_profiles: list[str] | None = None) -> Config:
        """Load configuration from a YAML or TOML file.

        Profile overlays named ``<stem>-<profile><suffix>`` next to *path* are
        merged on top, in the order given.
        """
        path = Path(path)
        if not path.is_file():
            raise ConfigurationException(
                f"Configuration file '{path}' does not exist",
                code="CONFIG_NOT_FOUND",
                context={"path": str(path)},
            )

        data = cls._load_config_data(path)
        sources = [str(path)]

        for profile in active_profiles or []:
            profile_path = path.parent / f"{path.stem}-{profile}{path.suffix}"
            if profile_path.is_file():
                data = cls._deep_merge(data, cls._load_config_data(profile_path))
                sources.append(f"{profile_path} (profile: {profile})")

        instance = cls(data)
        instance._loaded_sources = sources
        return instance

    @staticmethod
    def _load_config_data(path: Path) -> dict[str, Any]:
        """Load config data from a YAML or TOML file."""
        if path.suffix == ".toml":
            with open(path, "rb") as f:
                return tomllib.load(f) or {}
        with open(path) as f:
            return yaml.safe_load(f) or {}

    @staticmethod
    def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Recursively merge override into base, with override values winning."""
        merged = dict(base)
        for key, value in override.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = Config._deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged

    @staticmethod
    def _env_key(key: str) -> str:
        base = key.removeprefix("corsflow.")
        return ENV_PREFIX + base.upper().replace(".", "_").replace("-", "_")

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dot-notation key, checking env vars first.

        ``corsflow.cors.max_age`` is overridden by ``CORSFLOW_CORS_MAX_AGE``.
        """
        env_val = os.environ.get(self._env_key(key))
        if env_val is not None:
            return env_val

        current: Any = self._data
        for part in key.split("."):
            if isinstance(current, dict):
                current = current.get(part)
                if current is None:
                    return default
            else:
                return default
        return current

    def get_section(self, prefix: str) -> dict[str, Any]:
        """Get all file values under a prefix as a dict."""
        current: Any = self._data
        for part in prefix.split("."):
            if isinstance(current, dict):
                current = current.get(part, {})
            else:
                return {}
        return dict(current) if isinstance(current, dict) else {}

    def _apply_env_overrides(self, prefix: str, model: type[BaseModel], section: dict[str, Any]) -> None:
        """Overlay ``CORSFLOW_*`` variables for every field of *model*, present in the file or not.

        A field answers to its name and to its alias, so ``max_age`` (alias
        ``maxAge``) is set by ``CORSFLOW_CORS_MAX_AGE`` or ``CORSFLOW_CORS_MAXAGE``.
        """
        for name, info in model.model_fields.items():
            spellings = [name] if info.alias is None else [name, info.alias]
            for spelling in spellings:
                env_val = os.environ.get(self._env_key(f"{prefix}.{spelling}"))
                if env_val is None:
                    continue
                for other in spellings:
                    section.pop(other, None)
                section[name] = env_val
                break

    def bind(self, model: type[M]) -> M:
        """Bind the section named by a @config_properties Pydantic model, env vars overlaid."""
        prefix = getattr(model, _CONFIG_PROPERTIES_ATTR, None)
        if prefix is None:
            raise ValueError(f"{model.__name__} is not decorated with @config_properties")

        section = self.get_section(prefix)
        self._apply_env_overrides(prefix, model, section)

        try:
            return model.model_validate(section)
        except PydanticValidationError as exc:
            raise ConfigurationException(
                f"Configuration validation failed for '{model.__name__}' (prefix='{prefix}'):\n{exc}",
                code="CONFIG_INVALID",
                context={"prefix": prefix, "errors": exc.errors()},
            ) from exc
