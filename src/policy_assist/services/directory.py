"""Region lookup and guideline creation."""

from __future__ import annotations

from collections.abc import Sequence
import logging
from typing import TYPE_CHECKING

from policy_assist.exceptions import TransportError
from policy_assist.transport import API_ENDPOINTS

if TYPE_CHECKING:
    from policy_assist.core.types import RawResponse
    from policy_assist.transport import ApiTransport

log = logging.getLogger(__name__)


class RegionDirectory:
    """Resolves region display names to backend region ids."""

    def __init__(self, transport: ApiTransport) -> None:
        self._transport = transport

    async def fetch_region_id(self, name: str) -> int | None:
        """Return the id of the region called ``name``.

        An exact ``display_name`` match wins; otherwise the first search hit
        is used. Returns None when nothing matches or the lookup fails.
        """
        try:
            data = await self._transport.call(
                API_ENDPOINTS["GET_REGIONS"], params={"q": name, "page": 1}
            )
        except TransportError as e:
            log.warning("Region lookup for %r failed: %s", name, e)
            return None

        if not isinstance(data, list) or not data:
            return None
        items = [item for item in data if isinstance(item, dict)]
        for item in items:
            if item.get("display_name") == name and isinstance(item.get("id"), int):
                return item["id"]
        first = items[0].get("id") if items else None
        return first if isinstance(first, int) else None


class GuidelineService:
    """Creates drafting guidelines for a new proposal."""

    def __init__(self, transport: ApiTransport) -> None:
        self._transport = transport

    async def create_guideline(
        self, title: str, rid: int, categories: Sequence[str], problem: str
    ) -> RawResponse:
        """Post a guideline request and return the raw response."""
        return await self._transport.call(
            API_ENDPOINTS["CREATE_GUIDELINE"],
            "POST",
            {
                "title": title,
                "rid": rid,
                "categories": list(categories),
                "problem": problem,
            },
            auth_required=True,
        )
