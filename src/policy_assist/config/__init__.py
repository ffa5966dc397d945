"""Configuration management for the policy-assist client.

Resolve once, freeze, then pass the frozen value to runtime components:

- PolicyAssistSettings: Pydantic schema with POLICY_ASSIST_ environment prefix
- ResolvedConfig: Post-resolution configuration with origin audit metadata
- FrozenConfig: Immutable configuration read by transport and extractor
"""

from .api import resolve_config
from .schema import PolicyAssistSettings
from .types import ConfigOrigin, FrozenConfig, ResolvedConfig, SourceMap

__all__ = [
    "ConfigOrigin",
    "FrozenConfig",
    "PolicyAssistSettings",
    "ResolvedConfig",
    "SourceMap",
    "resolve_config",
]
