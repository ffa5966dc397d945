"""Proposal revision: ask the backend helper to polish a draft.

`ProposalReviser.revise` is one transport call followed by extraction with
fallback: whatever the helper fails to return keeps the draft's value.
`ProposalSession` drives the per-field lifecycle around that call so a UI can
show machine insertions, let the user edit them, and confirm.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from policy_assist.constants import PROPOSAL_FIELDS
from policy_assist.core.types import (
    CanonicalRecord,
    Failure,
    FieldStatus,
    Result,
    Success,
)
from policy_assist.exceptions import TransportError
from policy_assist.extraction import ExtractorConfig, ResponseExtractor
from policy_assist.revision import RevisableField
from policy_assist.transport import API_ENDPOINTS

if TYPE_CHECKING:
    from policy_assist.transport import ApiTransport

log = logging.getLogger(__name__)


class ProposalReviser:
    """Calls the revision helper and normalizes its answer."""

    def __init__(
        self,
        transport: ApiTransport,
        extractor: ResponseExtractor | None = None,
    ) -> None:
        self._transport = transport
        self._extractor = extractor or ResponseExtractor(
            ExtractorConfig.from_settings(transport.config)
        )

    async def revise(self, draft: CanonicalRecord) -> CanonicalRecord:
        """Return the helper's revision of ``draft``.

        Fields the helper did not return (or returned blank) keep the draft's
        values.

        Raises:
            TransportError: Propagated unchanged from the transport.
        """
        body = {name: getattr(draft, name) or "" for name in PROPOSAL_FIELDS}
        raw = await self._transport.call(
            API_ENDPOINTS["REVISE_PROPOSAL"],
            "POST",
            body,
            auth_required=True,
        )
        revised = self._extractor.extract_or_default(raw, PROPOSAL_FIELDS, draft)
        if revised == draft:
            log.info("Revision helper returned no usable fields; keeping draft")
        return revised


class ProposalSession:
    """Revisable fields for one proposal draft."""

    def __init__(self, reviser: ProposalReviser, draft: CanonicalRecord) -> None:
        self._reviser = reviser
        self.fields: dict[str, RevisableField] = {
            name: RevisableField(getattr(draft, name) or "", name=name)
            for name in PROPOSAL_FIELDS
        }

    def __getitem__(self, name: str) -> RevisableField:
        return self.fields[name]

    def values(self) -> CanonicalRecord:
        """Current text of every field."""
        return CanonicalRecord(
            **{name: field.value for name, field in self.fields.items()}
        )

    async def request_revision(self) -> Result[CanonicalRecord, TransportError]:
        """Request a machine revision for every field that is not confirmed.

        Transport failures return every affected field to idle with its text
        intact and are reported as `Failure`.
        """
        active = {
            name: field
            for name, field in self.fields.items()
            if field.status is not FieldStatus.CONFIRMED
        }
        if not active:
            return Success(self.values())
        tickets = {name: field.begin_request() for name, field in active.items()}
        draft = self.values()

        try:
            revised = await self._reviser.revise(draft)
        except TransportError as e:
            log.warning("Revision request failed: %s", e)
            self._fail_pending(active, tickets)
            return Failure(e)
        except BaseException:
            # Fields must not stay loading behind an unexpected error or cancellation
            self._fail_pending(active, tickets)
            raise

        for name, field in active.items():
            field.apply_suggestion(tickets[name], getattr(revised, name) or "")
        return Success(revised)

    @staticmethod
    def _fail_pending(
        active: dict[str, RevisableField], tickets: dict[str, int]
    ) -> None:
        for name, field in active.items():
            field.fail(tickets[name])

    def confirm_all(self) -> CanonicalRecord:
        """Confirm every field holding a suggestion and return the values."""
        for field in self.fields.values():
            if field.status in (FieldStatus.SUGGESTED, FieldStatus.CONFIRMED):
                field.confirm()
        return self.values()
