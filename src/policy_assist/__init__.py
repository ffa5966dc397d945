"""Client core for the policy proposal service."""

import importlib.metadata
import logging

from policy_assist.config import FrozenConfig, ResolvedConfig, resolve_config
from policy_assist.core.types import (
    CanonicalRecord,
    DiffSpan,
    Equal,
    ExtractionOutcome,
    Failure,
    FieldStatus,
    Found,
    Inserted,
    NotFound,
    Provenance,
    Result,
    Success,
)
from policy_assist.exceptions import (
    ConfigurationError,
    HttpStatusError,
    InvalidTransitionError,
    NetworkError,
    PolicyAssistError,
    RequestTimeoutError,
    TransportError,
    ValidationError,
)
from policy_assist.extraction import ExtractorConfig, ResponseExtractor
from policy_assist.revision import AnnotatedText, RevisableField, compute_diff
from policy_assist.services import (
    AutofillService,
    GuidelineService,
    ProposalReviser,
    ProposalSession,
    RegionDirectory,
)
from policy_assist.telemetry import TelemetryContext, TelemetryReporter
from policy_assist.transport import API_ENDPOINTS, ApiTransport, build_endpoint

try:
    __version__ = importlib.metadata.version("policy-assist")
except importlib.metadata.PackageNotFoundError:
    __version__ = "development"

# Set up a null handler for the library's root logger.
# This prevents 'No handler found' errors if the consuming app has no logging configured.
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Public API
__all__ = [  # noqa: RUF022
    # Configuration
    "resolve_config",
    "ResolvedConfig",
    "FrozenConfig",
    # Transport
    "ApiTransport",
    "API_ENDPOINTS",
    "build_endpoint",
    # Extraction
    "ResponseExtractor",
    "ExtractorConfig",
    # Revision
    "compute_diff",
    "AnnotatedText",
    "RevisableField",
    # Services
    "ProposalReviser",
    "ProposalSession",
    "AutofillService",
    "RegionDirectory",
    "GuidelineService",
    # Telemetry (extension points)
    "TelemetryContext",
    "TelemetryReporter",
    # Core Types
    "CanonicalRecord",
    "ExtractionOutcome",
    "Found",
    "NotFound",
    "DiffSpan",
    "Equal",
    "Inserted",
    "Provenance",
    "FieldStatus",
    "Result",
    "Success",
    "Failure",
    # Exceptions
    "PolicyAssistError",
    "ConfigurationError",
    "ValidationError",
    "InvalidTransitionError",
    "TransportError",
    "NetworkError",
    "RequestTimeoutError",
    "HttpStatusError",
]
