"""Exceptions raised by the policy-assist client core"""  # noqa: D415


class PolicyAssistError(Exception):
    """Base exception for policy-assist errors"""  # noqa: D415


class ConfigurationError(PolicyAssistError):
    """Raised when configuration values fail validation"""  # noqa: D415


class ValidationError(PolicyAssistError):
    """Raised when caller input is rejected before any request is made"""  # noqa: D415


class InvalidTransitionError(PolicyAssistError):
    """Raised when a revisable field is driven through an illegal transition"""  # noqa: D415


class TransportError(PolicyAssistError):
    """Base class for failures surfaced by the HTTP transport"""  # noqa: D415


class NetworkError(TransportError):
    """Raised when the connection fails (DNS, refused, reset)"""  # noqa: D415


class RequestTimeoutError(TransportError, TimeoutError):
    """Raised when a request exceeds the fixed deadline"""  # noqa: D415


class HttpStatusError(TransportError):
    """Raised when the backend answers with a non-2xx status.

    Attributes:
        status_code: HTTP status returned by the backend.
        message: Best-effort human readable message taken from the body.
        body: Raw response text, untruncated.
    """

    def __init__(self, status_code: int, message: str, body: str = "") -> None:
        super().__init__(f"API Error {status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.body = body
