"""Unit tests for configuration resolution.

These tests verify the core behaviors of the configuration module:
- Reading settings from environment variables and .env files.
- Prioritizing programmatic overrides over ambient sources.
- Recording the origin of each resolved field.
"""

import os
from unittest.mock import patch

import pytest

from policy_assist.config import FrozenConfig, resolve_config
from policy_assist.constants import (
    DEFAULT_BASE_URL,
    MAX_SEARCH_DEPTH,
    MIN_SUMMARY_LENGTH,
    NETWORK_TIMEOUT,
)
from policy_assist.exceptions import ConfigurationError

pytestmark = pytest.mark.unit


class TestResolution:
    def test_defaults(self):
        resolved = resolve_config()

        assert resolved.base_url == DEFAULT_BASE_URL.rstrip("/")
        assert resolved.timeout_seconds == NETWORK_TIMEOUT == 30.0
        assert resolved.max_search_depth == MAX_SEARCH_DEPTH
        assert resolved.min_summary_length == MIN_SUMMARY_LENGTH
        assert resolved.auth_scheme is None
        assert set(resolved.origin.values()) == {"default"}

    def test_environment_variables(self):
        with patch.dict(
            os.environ,
            {
                "POLICY_ASSIST_BASE_URL": "https://env.example.org/",
                "POLICY_ASSIST_TIMEOUT_SECONDS": "12.5",
            },
        ):
            resolved = resolve_config()

        assert resolved.base_url == "https://env.example.org"
        assert resolved.timeout_seconds == 12.5
        assert resolved.origin["base_url"] == "env"
        assert resolved.origin["timeout_seconds"] == "env"
        assert resolved.origin["error_body_limit"] == "default"

    def test_programmatic_overrides_environment(self):
        with patch.dict(os.environ, {"POLICY_ASSIST_BASE_URL": "https://env.example.org"}):
            resolved = resolve_config({"base_url": "https://override.example.org"})

        assert resolved.base_url == "https://override.example.org"
        assert resolved.origin["base_url"] == "programmatic"

    def test_unknown_programmatic_keys_are_ignored(self):
        resolved = resolve_config({"nonsense": 1, "max_search_depth": 2})
        assert resolved.max_search_depth == 2
        assert "nonsense" not in resolved.origin

    def test_blank_auth_scheme_is_none(self):
        assert resolve_config({"auth_scheme": "  "}).auth_scheme is None


class TestEnvFile:
    def test_env_file_values_are_used(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("POLICY_ASSIST_ERROR_BODY_LIMIT=80\n")

        resolved = resolve_config(use_env_file=env_file)

        assert resolved.error_body_limit == 80
        assert resolved.origin["error_body_limit"] == "env"

    def test_process_env_beats_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("POLICY_ASSIST_ERROR_BODY_LIMIT=80\n")

        with patch.dict(os.environ, {"POLICY_ASSIST_ERROR_BODY_LIMIT": "90"}):
            resolved = resolve_config(use_env_file=env_file)

        assert resolved.error_body_limit == 90

    def test_missing_env_file_raises(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            resolve_config(use_env_file=tmp_path / "missing.env")


class TestValidation:
    @pytest.mark.parametrize(
        "overrides",
        [
            {"timeout_seconds": 0},
            {"timeout_seconds": -1},
            {"error_body_limit": 0},
            {"max_search_depth": -1},
            {"base_url": "  /  "},
        ],
    )
    def test_invalid_values_raise_configuration_error(self, overrides):
        with pytest.raises(ConfigurationError):
            resolve_config(overrides)

    def test_invalid_env_value_raises_configuration_error(self):
        with patch.dict(os.environ, {"POLICY_ASSIST_TIMEOUT_SECONDS": "soon"}):
            with pytest.raises(ConfigurationError):
                resolve_config()


class TestResolvedConfig:
    def test_to_frozen(self):
        frozen = resolve_config({"auth_scheme": "Bearer"}).to_frozen()
        assert isinstance(frozen, FrozenConfig)
        assert frozen.auth_scheme == "Bearer"
        with pytest.raises(AttributeError):
            frozen.base_url = "https://elsewhere"  # type: ignore[misc]

    def test_with_overrides_updates_origin(self):
        resolved = resolve_config()
        updated = resolved.with_overrides(timeout_seconds=5.0, unknown="x")

        assert updated.timeout_seconds == 5.0
        assert updated.origin["timeout_seconds"] == "programmatic"
        assert resolved.timeout_seconds == NETWORK_TIMEOUT
        assert resolved.origin["timeout_seconds"] == "default"

    def test_audit_lists_every_field(self):
        report = resolve_config({"max_search_depth": 3}).audit()
        assert report.startswith("Configuration audit:")
        assert "max_search_depth: 3 (from programmatic)" in report
        assert "timeout_seconds: 30.0 (from default)" in report
        assert "origin" not in report.split("\n", 1)[1]
