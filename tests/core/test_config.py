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
"""Tests for Config loading and binding."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import BaseModel

from corsflow.core.config import Config
from corsflow.cors.policy import CorsProperties
from corsflow.kernel.exceptions import ConfigurationException


class TestConfig:
    def test_get_nested_value(self):
        config = Config({"corsflow": {"cors": {"max_age": 10}}})
        assert config.get("corsflow.cors.max_age") == 10

    def test_get_with_default(self):
        assert Config({}).get("missing.key", "default") == "default"

    def test_get_through_scalar_returns_default(self):
        assert Config({"a": 1}).get("a.b", "x") == "x"

    def test_get_section(self):
        config = Config({"corsflow": {"cors": {"maxAge": 5}}})
        assert config.get_section("corsflow.cors") == {"maxAge": 5}

    def test_get_section_missing(self):
        assert Config({}).get_section("corsflow.cors") == {}

    def test_env_var_override(self, monkeypatch):
        monkeypatch.setenv("CORSFLOW_LOGGING_FORMAT", "json")
        config = Config({"corsflow": {"logging": {"format": "console"}}})
        assert config.get("corsflow.logging.format") == "json"

    def test_get_section_returns_file_values_only(self, monkeypatch):
        monkeypatch.setenv("CORSFLOW_CORS_MAXAGE", "120")
        config = Config({"corsflow": {"cors": {"maxAge": 5}}})
        assert config.get_section("corsflow.cors") == {"maxAge": 5}

    def test_to_dict_is_copy(self):
        config = Config({"a": 1})
        config.to_dict()["a"] = 2
        assert config.get("a") == 1


class TestConfigFiles:
    def test_load_yaml(self, tmp_path: Path):
        path = tmp_path / "cors.yaml"
        path.write_text("corsflow:\n  cors:\n    allowOrigins: ['http://example.com']\n")
        config = Config.from_file(path)
        assert config.get("corsflow.cors.allowOrigins") == ["http://example.com"]
        assert config.loaded_sources == [str(path)]

    def test_load_toml(self, tmp_path: Path):
        path = tmp_path / "cors.toml"
        path.write_text('[corsflow.cors]\nallowOrigins = ["*"]\nmaxAge = 60\n')
        config = Config.from_file(path)
        assert config.get("corsflow.cors.maxAge") == 60

    def test_empty_yaml(self, tmp_path: Path):
        path = tmp_path / "cors.yaml"
        path.write_text("")
        assert Config.from_file(path).to_dict() == {}

    def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(ConfigurationException) as exc_info:
            Config.from_file(tmp_path / "absent.yaml")
        assert exc_info.value.code == "CONFIG_NOT_FOUND"

    def test_profile_overlay(self, tmp_path: Path):
        base = tmp_path / "cors.yaml"
        base.write_text("corsflow:\n  cors:\n    allowOrigins: ['http://a.com']\n    maxAge: 60\n")
        prod = tmp_path / "cors-prod.yaml"
        prod.write_text("corsflow:\n  cors:\n    allowOrigins: ['https://a.com']\n")

        config = Config.from_file(base, active_profiles=["prod", "missing"])
        assert config.get("corsflow.cors.allowOrigins") == ["https://a.com"]
        assert config.get("corsflow.cors.maxAge") == 60
        assert len(config.loaded_sources) == 2


class TestConfigProperties:
    def test_bind_pydantic_model(self):
        config = Config({"corsflow": {"cors": {"allowOrigins": "http://example.com", "maxAge": "30"}}})
        props = config.bind(CorsProperties)
        assert props.allow_origins == ["http://example.com"]
        assert props.max_age == 30

    def test_bind_invalid_pydantic_model_raises(self):
        config = Config({"corsflow": {"cors": {"maxAge": "soon"}}})
        with pytest.raises(ConfigurationException, match="CorsProperties"):
            config.bind(CorsProperties)

    def test_bind_undecorated_raises(self):
        class Plain(BaseModel):
            value: int = 1

        with pytest.raises(ValueError, match="not decorated"):
            Config({}).bind(Plain)


class TestBindEnvOverrides:
    def test_env_sets_field_absent_from_file(self, monkeypatch):
        monkeypatch.setenv("CORSFLOW_CORS_MAX_AGE", "60")
        props = Config({"corsflow": {"cors": {}}}).bind(CorsProperties)
        assert props.max_age == 60

    def test_env_sets_field_when_section_missing(self, monkeypatch):
        monkeypatch.setenv("CORSFLOW_CORS_ALLOW_CREDENTIALS", "true")
        props = Config({}).bind(CorsProperties)
        assert props.allow_credentials is True

    def test_env_overrides_camel_case_key(self, monkeypatch):
        monkeypatch.setenv("CORSFLOW_CORS_MAX_AGE", "120")
        props = Config({"corsflow": {"cors": {"maxAge": 5}}}).bind(CorsProperties)
        assert props.max_age == 120

    def test_env_by_alias_spelling(self, monkeypatch):
        monkeypatch.setenv("CORSFLOW_CORS_MAXAGE", "90")
        props = Config({"corsflow": {"cors": {"max_age": 5}}}).bind(CorsProperties)
        assert props.max_age == 90

    def test_env_list_is_comma_split(self, monkeypatch):
        monkeypatch.setenv("CORSFLOW_CORS_ALLOW_ORIGINS", "http://a.com, http://b.com")
        config = Config({"corsflow": {"cors": {"allowOrigins": ["http://c.com"]}}})
        props = config.bind(CorsProperties)
        assert props.allow_origins == ["http://a.com", "http://b.com"]

    def test_file_values_kept_without_env(self):
        props = Config({"corsflow": {"cors": {"maxAge": 5}}}).bind(CorsProperties)
        assert props.max_age == 5

    def test_invalid_env_value_raises(self, monkeypatch):
        monkeypatch.setenv("CORSFLOW_CORS_MAX_AGE", "-1")
        with pytest.raises(ConfigurationException) as exc_info:
            Config({}).bind(CorsProperties)
        assert exc_info.value.code == "CONFIG_INVALID"
        assert exc_info.value.context["prefix"] == "corsflow.cors"
