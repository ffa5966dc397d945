"""Public API for the configuration system.

Provides `resolve_config()`, the single entry point that merges programmatic
overrides, environment variables, an optional .env file and defaults.
"""

import logging
import os
from pathlib import Path
from typing import Any

from dotenv import dotenv_values
from pydantic import ValidationError as PydanticValidationError

from policy_assist.exceptions import ConfigurationError

from .schema import PolicyAssistSettings
from .types import ConfigOrigin, ResolvedConfig

log = logging.getLogger(__name__)

ENV_PREFIX = "POLICY_ASSIST_"
_FIELDS: tuple[str, ...] = tuple(PolicyAssistSettings.model_fields)


def resolve_config(
    programmatic: dict[str, Any] | None = None,
    *,
    use_env_file: str | Path | None = None,
) -> ResolvedConfig:
    """Resolve configuration from all sources with proper precedence.

    Precedence: Programmatic > Environment > .env file > Defaults

    Args:
        programmatic: Dictionary of programmatic overrides (highest precedence).
            Only known configuration fields are used.
        use_env_file: Optional path to a .env file read beneath the process
            environment.

    Returns:
        ResolvedConfig with merged values and source tracking for audit.

    Raises:
        ConfigurationError: If a value fails validation or the .env file is missing.

    Example:
        config = resolve_config({"base_url": "https://api.example.org"})
        transport = ApiTransport(config.to_frozen())
    """
    overrides = {k: v for k, v in (programmatic or {}).items() if k in _FIELDS}
    ignored = sorted(set(programmatic or {}) - set(overrides))
    if ignored:
        log.debug("Ignoring unknown configuration keys: %s", ", ".join(ignored))

    file_values: dict[str, str | None] = {}
    if use_env_file is not None:
        env_path = Path(use_env_file)
        if not env_path.exists():
            raise ConfigurationError(f"Environment file not found: {env_path}")
        file_values = dotenv_values(env_path)

    try:
        settings = PolicyAssistSettings(_env_file=use_env_file, **overrides)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e

    origin = _build_origin(overrides, file_values)
    values = settings.to_dict()
    return ResolvedConfig(**values, origin=origin)


def _build_origin(
    overrides: dict[str, Any], file_values: dict[str, str | None]
) -> dict[str, ConfigOrigin]:
    env_keys = {k.upper() for k in os.environ} | {k.upper() for k in file_values}
    origin: dict[str, ConfigOrigin] = {}
    for field in _FIELDS:
        if field in overrides:
            origin[field] = "programmatic"
        elif f"{ENV_PREFIX}{field}".upper() in env_keys:
            origin[field] = "env"
        else:
            origin[field] = "default"
    return origin
