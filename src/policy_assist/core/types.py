"""Core data types shared by extraction, transport and revision.

This module defines the immutable values that move between the stages of a
revise cycle: the loosely typed JSON received from the backend, the canonical
record the extractor produces from it, and the annotated spans the diff engine
builds over revised text. Each stage returns new values instead of mutating the
ones it received.
"""

from __future__ import annotations

import dataclasses
import enum
import typing

# --- Minimal guard helpers ---


def _require(
    *,
    condition: bool,
    message: str,
    exc: type[Exception] = ValueError,
    field_name: str | None = None,
) -> None:
    """Centralized validation with optional field context for clearer errors."""
    if not condition:
        if field_name:
            raise exc(f"{field_name}: {message}")
        raise exc(message)


# --- Result Monad for Explicit Error Handling ---
# Service methods that must report failure per field without raising return
# one of these instead of leaking exceptions into the caller's edit loop.

TSuccess = typing.TypeVar("TSuccess")
TFailure = typing.TypeVar("TFailure", bound=Exception)


@dataclasses.dataclass(frozen=True, slots=True)
class Success(typing.Generic[TSuccess]):
    """A successful outcome."""

    value: TSuccess


@dataclasses.dataclass(frozen=True, slots=True)
class Failure(typing.Generic[TFailure]):
    """A failed outcome, containing the error."""

    error: TFailure


Result = Success[TSuccess] | Failure[TFailure]

# --- JSON values ---

JsonValue: typing.TypeAlias = (
    "str | int | float | bool | None | list[JsonValue] | dict[str, JsonValue]"
)
# Whatever the backend sent back, already deserialized. No shape is promised.
RawResponse: typing.TypeAlias = JsonValue

# --- Canonical record ---

FIELD_NAMES: tuple[str, ...] = ("title", "problem", "method", "effect", "summary")


@dataclasses.dataclass(frozen=True, slots=True)
class CanonicalRecord:
    """Fixed-shape record produced by the extractor.

    Every field is optional. A ``None`` field means "not provided", never
    "cleared"; see `merged_over` for how absent fields fall back to values the
    caller already holds.
    """

    title: str | None = None
    problem: str | None = None
    method: str | None = None
    effect: str | None = None
    summary: str | None = None

    def __post_init__(self) -> None:
        for name in FIELD_NAMES:
            value = getattr(self, name)
            _require(
                condition=value is None or isinstance(value, str),
                message=f"must be a string or None, got {type(value).__name__}",
                exc=TypeError,
                field_name=name,
            )

    @classmethod
    def from_mapping(cls, mapping: typing.Mapping[str, typing.Any]) -> CanonicalRecord:
        """Build a record from a mapping, ignoring unknown and non-string values."""
        values = {
            name: mapping[name]
            for name in FIELD_NAMES
            if isinstance(mapping.get(name), str)
        }
        return cls(**values)

    def present_fields(self) -> tuple[str, ...]:
        """Names of fields that hold a value, in declaration order."""
        return tuple(name for name in FIELD_NAMES if getattr(self, name) is not None)

    def to_dict(self, *, include_none: bool = False) -> dict[str, str | None]:
        """Return the record as a plain dict."""
        return {
            name: getattr(self, name)
            for name in FIELD_NAMES
            if include_none or getattr(self, name) is not None
        }

    def merged_over(self, defaults: CanonicalRecord) -> CanonicalRecord:
        """Fill every absent field from ``defaults``.

        Present fields win; absent fields keep the default, so a value the
        caller already held is never replaced by nothing.
        """
        return CanonicalRecord(
            **{
                name: (
                    getattr(self, name)
                    if getattr(self, name) is not None
                    else getattr(defaults, name)
                )
                for name in FIELD_NAMES
            }
        )


# --- Extraction outcome ---


@dataclasses.dataclass(frozen=True, slots=True)
class Found:
    """Extraction located at least one requested field."""

    record: CanonicalRecord
    strategy: str = "direct"


@dataclasses.dataclass(frozen=True, slots=True)
class NotFound:
    """Extraction found nothing usable. Never raised, only returned."""

    reason: str = "no recognized fields"


ExtractionOutcome = Found | NotFound

# --- Diff spans ---


class Provenance(enum.StrEnum):
    """Who authored an inserted span."""

    MACHINE = "machine"
    USER = "user"


@dataclasses.dataclass(frozen=True, slots=True)
class Equal:
    """Text shared by the baseline and the revision."""

    text: str


@dataclasses.dataclass(frozen=True, slots=True)
class Inserted:
    """Text introduced by a revision.

    ``original_text`` is what the revision inserted; ``text`` is the live
    content after any user edits.
    """

    text: str
    provenance: Provenance = Provenance.MACHINE
    original_text: str = ""

    @classmethod
    def from_machine(cls, text: str) -> Inserted:
        return cls(text=text, provenance=Provenance.MACHINE, original_text=text)

    @property
    def is_machine(self) -> bool:
        return self.provenance is Provenance.MACHINE


DiffSpan = Equal | Inserted

# --- Field state ---


class FieldStatus(enum.StrEnum):
    """Lifecycle of one revisable text field."""

    IDLE = "idle"
    LOADING = "loading"
    SUGGESTED = "suggested"
    CONFIRMED = "confirmed"
