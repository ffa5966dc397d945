"""Per-field revision lifecycle.

A field moves ``idle -> loading -> suggested -> confirmed``. It can go back
from ``suggested`` to ``loading`` when the user asks for a fresh revision, and
from ``loading`` to ``idle`` when the request fails. ``reset`` returns any state
to ``idle``.

Every request is numbered. Only the most recently issued number may complete
the ``loading`` state, so a slow response to an earlier request can never
overwrite the result of a later one.
"""

from __future__ import annotations

import itertools
import logging

from policy_assist.core.types import DiffSpan, FieldStatus
from policy_assist.exceptions import InvalidTransitionError

from .diffing import AnnotatedText

log = logging.getLogger(__name__)


class RevisableField:
    """One text field that can receive machine revisions."""

    def __init__(self, value: str = "", *, name: str = "field") -> None:
        self.name = name
        self._status = FieldStatus.IDLE
        self._buffer = AnnotatedText.plain(value)
        self._sequence = itertools.count(1)
        self._pending: int | None = None
        self._last_applied: str | None = None

    def __repr__(self) -> str:
        return (
            f"RevisableField(name={self.name!r}, status={self._status.value!r}, "
            f"value={self.value!r})"
        )

    @property
    def status(self) -> FieldStatus:
        return self._status

    @property
    def value(self) -> str:
        return self._buffer.text

    @property
    def spans(self) -> tuple[DiffSpan, ...]:
        return self._buffer.spans

    @property
    def buffer(self) -> AnnotatedText:
        return self._buffer

    @property
    def pending_request(self) -> int | None:
        return self._pending

    # --- Transitions ---

    def begin_request(self) -> int:
        """Enter ``loading`` and return the number of the new request.

        Issuing a request while one is already pending supersedes it.

        Raises:
            InvalidTransitionError: If the field is confirmed.
        """
        if self._status is FieldStatus.CONFIRMED:
            raise InvalidTransitionError(
                f"{self.name}: cannot request a revision after confirmation"
            )
        seq = next(self._sequence)
        if self._pending is not None:
            log.debug("%s: request %d supersedes %d", self.name, seq, self._pending)
        self._pending = seq
        self._status = FieldStatus.LOADING
        return seq

    def apply_suggestion(self, seq: int, revised: str) -> bool:
        """Apply the revision returned for request ``seq``.

        The diff baseline is the field's current text, so spans from an
        earlier revision are replaced rather than merged.

        Returns:
            False when ``seq`` is stale or the field is not loading.
        """
        if not self._accepts(seq):
            log.debug("%s: ignoring stale revision for request %d", self.name, seq)
            return False
        self._pending = None
        self._status = FieldStatus.SUGGESTED
        if revised == self._last_applied and revised == self.value:
            return True
        self._buffer = AnnotatedText.from_revision(self.value, revised)
        self._last_applied = revised
        return True

    def fail(self, seq: int) -> bool:
        """Return to ``idle`` after request ``seq`` failed, keeping the text.

        Returns:
            False when ``seq`` is stale or the field is not loading.
        """
        if not self._accepts(seq):
            return False
        self._pending = None
        self._status = FieldStatus.IDLE
        return True

    def confirm(self) -> str:
        """Accept the suggestion and flatten the text.

        Confirming an already confirmed field is a no-op.

        Raises:
            InvalidTransitionError: If there is no suggestion to confirm.
        """
        if self._status is FieldStatus.CONFIRMED:
            return self.value
        if self._status is not FieldStatus.SUGGESTED:
            raise InvalidTransitionError(
                f"{self.name}: cannot confirm from {self._status.value}"
            )
        self._status = FieldStatus.CONFIRMED
        self._last_applied = None
        return self._buffer.confirm()

    def reset(self, value: str | None = None) -> None:
        """Return to ``idle``, optionally replacing the text."""
        text = self.value if value is None else value
        self._buffer = AnnotatedText.plain(text)
        self._pending = None
        self._last_applied = None
        self._status = FieldStatus.IDLE

    # --- Editing ---

    def edit(self, index: int, new_text: str) -> DiffSpan:
        """Edit one span of a suggested revision."""
        if self._status is not FieldStatus.SUGGESTED:
            raise InvalidTransitionError(
                f"{self.name}: span edits require a suggestion, not {self._status.value}"
            )
        return self._buffer.edit(index, new_text)

    def set_text(self, text: str) -> None:
        """Replace the whole text while the field is idle."""
        if self._status is not FieldStatus.IDLE:
            raise InvalidTransitionError(
                f"{self.name}: free text edits require idle, not {self._status.value}"
            )
        self._buffer = AnnotatedText.plain(text)

    def _accepts(self, seq: int) -> bool:
        return self._status is FieldStatus.LOADING and seq == self._pending
