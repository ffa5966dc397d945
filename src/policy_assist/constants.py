"""
Project-wide constants for the policy-assist client core
"""  # noqa: D200, D212, D415

# ==============================================================================
# API and Network Configuration
# ==============================================================================

DEFAULT_BASE_URL = "http://localhost:8000"
NETWORK_TIMEOUT = 30.0  # seconds, total deadline per request
ERROR_BODY_LIMIT = 500  # characters of raw body surfaced in error messages

# Keys checked, in order, when pulling a message out of an error body
ERROR_MESSAGE_KEYS: tuple[str, ...] = ("detail", "error", "message")

JSON_CONTENT_TYPES: tuple[str, ...] = ("application/json", "+json")

# ==============================================================================
# Response Normalization
# ==============================================================================

# Containers tried before structural search; first match wins
WRAPPER_KEYS: tuple[str, ...] = ("result", "data", "payload", "output", "response")

# Synonyms accepted for canonical fields, in precedence order
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "method": ("solution",),
    "effect": ("expectedEffect", "expected_effect"),
    "summary": ("content",),
}

MAX_SEARCH_DEPTH = 5
MIN_SUMMARY_LENGTH = 20  # shorter strings are skipped during structural search

# Fields whose candidates must meet MIN_SUMMARY_LENGTH during structural search
FREE_TEXT_FIELDS: frozenset[str] = frozenset({"summary"})

PROPOSAL_FIELDS: tuple[str, ...] = ("title", "problem", "method", "effect")
AUTOFILL_FIELDS: tuple[str, ...] = ("summary", "title")
