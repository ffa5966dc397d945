"""Configuration schema and validation using Pydantic.

This module defines the settings schema that validates and coerces configuration
values from the environment and programmatic overrides into the correct types
with proper defaults.
"""

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from policy_assist.constants import (
    DEFAULT_BASE_URL,
    ERROR_BODY_LIMIT,
    MAX_SEARCH_DEPTH,
    MIN_SUMMARY_LENGTH,
    NETWORK_TIMEOUT,
)


class PolicyAssistSettings(BaseSettings):
    """Pydantic settings schema for the policy-assist client.

    Handles validation, type coercion, and defaults for all configuration
    fields. Environment variables use the POLICY_ASSIST_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="POLICY_ASSIST_",
        env_file=None,  # Only used when explicitly requested
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown env vars for forward compatibility
    )

    # --- Backend ---

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Base URL of the backend API",
        min_length=1,
    )

    timeout_seconds: float = Field(
        default=NETWORK_TIMEOUT,
        description="Total deadline for a single request, in seconds",
        gt=0,
    )

    error_body_limit: int = Field(
        default=ERROR_BODY_LIMIT,
        description="Maximum characters of raw body used as an error message",
        ge=1,
    )

    auth_scheme: str | None = Field(
        default=None,
        description="Optional prefix for the Authorization header (e.g. 'Bearer')",
    )

    # --- Normalization ---

    max_search_depth: int = Field(
        default=MAX_SEARCH_DEPTH,
        description="Maximum nesting depth visited by structural search",
        ge=0,
    )

    min_summary_length: int = Field(
        default=MIN_SUMMARY_LENGTH,
        description="Minimum length of a free-text candidate found by search",
        ge=0,
    )

    # --- Validation Rules ---

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the base URL so endpoints can be appended verbatim."""
        stripped = v.strip().rstrip("/")
        if not stripped:
            raise ValueError("base_url must not be blank")
        return stripped

    @field_validator("auth_scheme", mode="before")
    @classmethod
    def blank_scheme_is_none(cls, v: Any) -> Any:
        """Treat an empty scheme the same as no scheme."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary of resolved values."""
        return {
            "base_url": self.base_url,
            "timeout_seconds": self.timeout_seconds,
            "error_body_limit": self.error_body_limit,
            "auth_scheme": self.auth_scheme,
            "max_search_depth": self.max_search_depth,
            "min_summary_length": self.min_summary_length,
        }
