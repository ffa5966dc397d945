"""Article autofill: summarize a policy case from its source URL."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from policy_assist.constants import AUTOFILL_FIELDS
from policy_assist.core.types import CanonicalRecord, Found
from policy_assist.exceptions import ValidationError
from policy_assist.extraction import ExtractorConfig, ResponseExtractor
from policy_assist.transport import API_ENDPOINTS

if TYPE_CHECKING:
    from policy_assist.transport import ApiTransport

log = logging.getLogger(__name__)


class AutofillService:
    """Fetches a summary (and possibly a title) for an article URL."""

    def __init__(
        self,
        transport: ApiTransport,
        extractor: ResponseExtractor | None = None,
    ) -> None:
        self._transport = transport
        self._extractor = extractor or ResponseExtractor(
            ExtractorConfig.from_settings(transport.config)
        )

    async def autofill(self, url: str) -> CanonicalRecord:
        """Return whatever summary/title the backend produced for ``url``.

        Fields the backend did not produce are None.

        Raises:
            ValidationError: If ``url`` is blank.
            TransportError: Propagated unchanged from the transport.
        """
        if not isinstance(url, str) or not url.strip():
            raise ValidationError("url is required")
        target = url.strip()
        # Older backends read the link under different names
        body = {"url": target, "link": target, "reference": target}
        raw = await self._transport.call(
            API_ENDPOINTS["AUTOFILL"], "POST", body, text_field="summary"
        )
        outcome = self._extractor.extract(raw, AUTOFILL_FIELDS)
        if not isinstance(outcome, Found):
            # Bare or wrapped free text only qualifies when a single field is asked for
            outcome = self._extractor.extract(raw, ("summary",))
        if isinstance(outcome, Found):
            return outcome.record
        log.info("Autofill returned nothing usable for %s: %s", target, outcome.reason)
        return CanonicalRecord()

    async def autofill_or_default(
        self, url: str, defaults: CanonicalRecord
    ) -> CanonicalRecord:
        """Like `autofill`, keeping ``defaults`` for anything not returned."""
        record = await self.autofill(url)
        return record.merged_over(defaults)
