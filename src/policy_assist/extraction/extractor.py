"""Canonical-shape extraction from loosely shaped backend responses.

The backend wraps the fields we care about inconsistently: sometimes a bare
string, sometimes JSON inside a string, sometimes nested under ``result`` or
``data`` or several levels of both. `ResponseExtractor` finds them with a fixed
strategy order so the same input always yields the same record:

1. strings are parsed as JSON and re-examined; unparseable text becomes the
   sole candidate when a single field was requested
2. known wrapper keys, in configured order
3. the object itself
4. a depth-bounded pre-order search of nested objects

Extraction never raises. Callers get `Found` or `NotFound` and decide how to
fall back; `extract_or_default` covers the common case of keeping the values
the caller already holds.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
import json
import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from policy_assist.constants import (
    FIELD_ALIASES,
    FREE_TEXT_FIELDS,
    MAX_SEARCH_DEPTH,
    MIN_SUMMARY_LENGTH,
    WRAPPER_KEYS,
)
from policy_assist.core.types import (
    FIELD_NAMES,
    CanonicalRecord,
    ExtractionOutcome,
    Found,
    NotFound,
)

if TYPE_CHECKING:
    from policy_assist.config import FrozenConfig
    from policy_assist.core.types import RawResponse

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ExtractorConfig:
    """Tables and limits that drive extraction.

    Attributes:
        wrapper_keys: Container names tried before structural search, in order.
        aliases: Alternate key names per canonical field, in precedence order.
        max_depth: Deepest nesting level visited by structural search (root is 0).
        min_string_length: Minimum trimmed length for free-text candidates found
            by structural search.
        free_text_fields: Fields subject to ``min_string_length``.
    """

    wrapper_keys: tuple[str, ...] = WRAPPER_KEYS
    aliases: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType(dict(FIELD_ALIASES))
    )
    max_depth: int = MAX_SEARCH_DEPTH
    min_string_length: int = MIN_SUMMARY_LENGTH
    free_text_fields: frozenset[str] = FREE_TEXT_FIELDS

    def __post_init__(self) -> None:
        if self.max_depth < 0:
            raise ValueError("max_depth must be >= 0")
        if self.min_string_length < 0:
            raise ValueError("min_string_length must be >= 0")
        if not isinstance(self.aliases, MappingProxyType):
            object.__setattr__(
                self,
                "aliases",
                MappingProxyType({k: tuple(v) for k, v in self.aliases.items()}),
            )

    @classmethod
    def from_settings(cls, config: FrozenConfig) -> ExtractorConfig:
        """Build an extractor configuration from resolved settings."""
        return cls(
            max_depth=config.max_search_depth,
            min_string_length=config.min_summary_length,
        )

    def candidate_keys(self, name: str) -> tuple[str, ...]:
        """Canonical name first, then its aliases in declaration order."""
        return (name, *self.aliases.get(name, ()))


class ResponseExtractor:
    """Locate canonical fields in an arbitrarily wrapped JSON value."""

    def __init__(self, config: ExtractorConfig | None = None) -> None:
        self.config = config or ExtractorConfig()

    def extract(
        self, raw: RawResponse, expected_keys: Iterable[str]
    ) -> ExtractionOutcome:
        """Extract the requested canonical fields from ``raw``.

        Args:
            raw: Deserialized response of unknown shape (or a raw string).
            expected_keys: Canonical field names to look for. Unknown names
                are ignored.

        Returns:
            `Found` with a record holding only requested fields, or `NotFound`.
        """
        keys = self._normalize_keys(expected_keys)
        if not keys:
            return NotFound("no recognized field names requested")
        outcome = self._extract(raw, keys)
        if isinstance(outcome, Found):
            log.debug(
                "Extracted %s via %s",
                ", ".join(outcome.record.present_fields()),
                outcome.strategy,
            )
        else:
            log.debug("Extraction found nothing: %s", outcome.reason)
        return outcome

    def extract_or_default(
        self,
        raw: RawResponse,
        expected_keys: Iterable[str],
        defaults: CanonicalRecord,
    ) -> CanonicalRecord:
        """Extract and fill anything missing from ``defaults``."""
        outcome = self.extract(raw, expected_keys)
        if isinstance(outcome, Found):
            return outcome.record.merged_over(defaults)
        return defaults

    # --- Strategies ---

    def _extract(self, raw: Any, keys: tuple[str, ...]) -> ExtractionOutcome:
        match raw:
            case str():
                return self._from_string(raw, keys, strategy="string")
            case dict():
                return self._from_object(raw, keys)
            case list():
                return NotFound("top-level arrays are not supported")
            case _:
                return NotFound(f"unsupported value type {type(raw).__name__}")

    def _from_string(
        self, text: str, keys: tuple[str, ...], *, strategy: str
    ) -> ExtractionOutcome:
        try:
            parsed = json.loads(text)
        except (ValueError, RecursionError):
            parsed = None
        else:
            # A JSON string literal decodes to a shorter string, so this terminates
            if not (isinstance(parsed, str) and parsed == text):
                return self._extract(parsed, keys)

        candidate = text.strip()
        if len(keys) != 1:
            return NotFound("free text needs exactly one requested field")
        if not candidate:
            return NotFound("empty text")
        return Found(CanonicalRecord(**{keys[0]: candidate}), strategy=strategy)

    def _from_object(
        self, raw: dict[str, Any], keys: tuple[str, ...]
    ) -> ExtractionOutcome:
        if not raw:
            return NotFound("empty object")

        for wrapper in self.config.wrapper_keys:
            inner = raw.get(wrapper)
            if isinstance(inner, dict):
                record = self._direct_fields(inner, keys)
                if record is not None:
                    return Found(record, strategy=f"wrapper:{wrapper}")
            elif isinstance(inner, str) and len(keys) == 1:
                outcome = self._from_string(inner, keys, strategy=f"wrapper:{wrapper}")
                if isinstance(outcome, Found) and self._long_enough(outcome.record):
                    return outcome

        record = self._direct_fields(raw, keys)
        if record is not None:
            return Found(record, strategy="direct")

        record = self._search(raw, keys, depth=0)
        if record is not None:
            return Found(record, strategy="search")
        return NotFound(f"no recognized fields within depth {self.config.max_depth}")

    def _direct_fields(
        self,
        node: dict[str, Any],
        keys: tuple[str, ...],
        *,
        enforce_min_length: bool = False,
    ) -> CanonicalRecord | None:
        values: dict[str, str] = {}
        for name in keys:
            value = self._read_field(node, name)
            if value is None:
                continue
            if (
                enforce_min_length
                and name in self.config.free_text_fields
                and len(value) < self.config.min_string_length
            ):
                continue
            values[name] = value
        return CanonicalRecord(**values) if values else None

    def _read_field(self, node: dict[str, Any], name: str) -> str | None:
        for key in self.config.candidate_keys(name):
            value = node.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
        return None

    def _long_enough(self, record: CanonicalRecord) -> bool:
        return all(
            len(getattr(record, name)) >= self.config.min_string_length
            for name in record.present_fields()
            if name in self.config.free_text_fields
        )

    def _search(
        self, node: dict[str, Any], keys: tuple[str, ...], *, depth: int
    ) -> CanonicalRecord | None:
        # Input is freshly deserialized JSON, so the graph is acyclic
        if depth > self.config.max_depth:
            return None
        record = self._direct_fields(node, keys, enforce_min_length=True)
        if record is not None:
            return record
        for value in node.values():
            if isinstance(value, dict):
                found = self._search(value, keys, depth=depth + 1)
                if found is not None:
                    return found
        return None

    @staticmethod
    def _normalize_keys(expected_keys: Iterable[str]) -> tuple[str, ...]:
        requested = set(expected_keys)
        unknown = requested - set(FIELD_NAMES)
        if unknown:
            log.debug("Ignoring unknown field names: %s", ", ".join(sorted(unknown)))
        return tuple(name for name in FIELD_NAMES if name in requested)
