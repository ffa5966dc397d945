"""Core configuration data types.

Configuration follows a resolve-once, freeze-then-flow pattern: values are
merged and validated once into a `ResolvedConfig`, then frozen into a
`FrozenConfig` that the transport and extractor read from.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal, NamedTuple

# --- Source Tracking Types ---

ConfigOrigin = Literal["programmatic", "env", "default"]
SourceMap = Mapping[str, ConfigOrigin]

# --- Core Configuration Data ---


class ResolvedConfig(NamedTuple):
    """Configuration after resolution from all sources, before freezing.

    Includes audit metadata recording where each field value came from.
    """

    base_url: str
    timeout_seconds: float
    error_body_limit: int
    auth_scheme: str | None
    max_search_depth: int
    min_summary_length: int

    # Audit metadata - tracks where each field value came from
    origin: SourceMap

    def to_frozen(self) -> "FrozenConfig":
        """Convert to the immutable configuration used at runtime."""
        return FrozenConfig(
            base_url=self.base_url,
            timeout_seconds=self.timeout_seconds,
            error_body_limit=self.error_body_limit,
            auth_scheme=self.auth_scheme,
            max_search_depth=self.max_search_depth,
            min_summary_length=self.min_summary_length,
        )

    def with_overrides(self, **overrides: object) -> "ResolvedConfig":
        """Create a new ResolvedConfig with programmatic overrides applied.

        Unknown fields are ignored. Values are not re-validated; use
        `resolve_config` when overrides come from untrusted input.
        """
        new_values = self._asdict()
        new_origin = dict(self.origin)

        for field, value in overrides.items():
            if field in self._fields and field != "origin":
                new_values[field] = value
                new_origin[field] = "programmatic"

        new_values["origin"] = new_origin
        return ResolvedConfig(**new_values)

    def audit(self) -> str:
        """Generate a report showing the origin of each field."""
        lines = ["Configuration audit:"]
        for field in self._fields:
            if field == "origin":
                continue
            origin = self.origin.get(field, "default")
            lines.append(f"  {field}: {getattr(self, field)!r} (from {origin})")
        return "\n".join(lines)


@dataclass(frozen=True, slots=True)
class FrozenConfig:
    """Immutable configuration passed to runtime components."""

    base_url: str
    timeout_seconds: float
    error_body_limit: int
    auth_scheme: str | None
    max_search_depth: int
    min_summary_length: int
