"""Backend-facing services built on transport, extraction and revision."""

from .autofill import AutofillService
from .directory import GuidelineService, RegionDirectory
from .proposals import ProposalReviser, ProposalSession

__all__ = [
    "AutofillService",
    "GuidelineService",
    "ProposalReviser",
    "ProposalSession",
    "RegionDirectory",
]
