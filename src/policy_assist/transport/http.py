"""HTTP transport for the policy backend.

`ApiTransport` issues one JSON request per `call`, enforces a fixed total
deadline, maps failures onto the typed transport errors and classifies the
body before handing it back. It does not retry and does not validate
credentials; a missing token surfaces as a 401/403 from the backend.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Mapping
import logging
from types import TracebackType
from typing import TYPE_CHECKING, Any, Self

import httpx

from policy_assist.config import FrozenConfig, resolve_config
from policy_assist.exceptions import HttpStatusError, NetworkError, RequestTimeoutError
from policy_assist.telemetry import TelemetryContext

from .classify import classify_body, extract_error_message

if TYPE_CHECKING:
    from policy_assist.core.types import JsonValue, RawResponse
    from policy_assist.telemetry import TelemetryContextProtocol

log = logging.getLogger(__name__)

TokenProvider = Callable[[], str | None]

# --- Telemetry scopes/keys ---
T_HTTP_CALL = "http.call"
T_HTTP_STATUS = "http.status"
T_HTTP_ERRORS = "http.errors"


class ApiTransport:
    """Async JSON transport bound to one backend base URL.

    Use as an async context manager, or call `aclose()` when done.

    Args:
        config: Frozen configuration. Resolved from the environment when omitted.
        token_provider: Zero-argument callable returning the current opaque
            credential, or None when the user is not signed in.
        transport: Optional httpx transport, mainly for tests.
        telemetry: Optional telemetry context.
    """

    def __init__(
        self,
        config: FrozenConfig | None = None,
        *,
        token_provider: TokenProvider | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        telemetry: TelemetryContextProtocol | None = None,
    ) -> None:
        self.config = config or resolve_config().to_frozen()
        self._token_provider = token_provider
        self._telemetry: TelemetryContextProtocol = telemetry or TelemetryContext()
        self._client = httpx.AsyncClient(
            base_url=self.config.base_url,
            transport=transport,
            timeout=httpx.Timeout(self.config.timeout_seconds),
        )

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def call(
        self,
        endpoint: str,
        method: str = "GET",
        body: JsonValue | None = None,
        *,
        auth_required: bool = False,
        text_field: str = "text",
        params: Mapping[str, Any] | None = None,
    ) -> RawResponse:
        """Send one request and return the classified body.

        Args:
            endpoint: Path appended to the base URL (e.g. ``/helper``).
            method: HTTP method.
            body: JSON-serializable request body; omitted when None.
            auth_required: Attach the credential header when one is available.
            text_field: Key used to wrap plain-text response bodies.
            params: Optional query parameters.

        Returns:
            None for empty bodies, parsed JSON, or ``{text_field: text}``.

        Raises:
            RequestTimeoutError: The deadline elapsed; the request was cancelled.
            NetworkError: The connection failed.
            HttpStatusError: The backend answered with a non-2xx status.
        """
        method = method.upper()
        headers = self._build_headers(auth_required=auth_required)
        log.debug("%s %s (auth=%s)", method, endpoint, auth_required)

        with self._telemetry(T_HTTP_CALL, method=method, endpoint=endpoint) as tele:
            response = await self._send(method, endpoint, body, headers, params)
            tele.metric(T_HTTP_STATUS, response.status_code, endpoint=endpoint)
            if not response.is_success:
                tele.count(T_HTTP_ERRORS, endpoint=endpoint)

        text = response.text
        if not response.is_success:
            message = extract_error_message(text, self.config.error_body_limit)
            if not message:
                message = response.reason_phrase or "empty response body"
            log.warning(
                "%s %s failed with status %d: %s",
                method,
                endpoint,
                response.status_code,
                message,
            )
            raise HttpStatusError(response.status_code, message, text)

        return classify_body(
            text, response.headers.get("content-type"), text_field=text_field
        )

    async def _send(
        self,
        method: str,
        endpoint: str,
        body: JsonValue | None,
        headers: dict[str, str],
        params: Mapping[str, Any] | None,
    ) -> httpx.Response:
        deadline = self.config.timeout_seconds
        try:
            async with asyncio.timeout(deadline):
                return await self._client.request(
                    method,
                    endpoint,
                    json=body,
                    headers=headers,
                    params=params,
                )
        except httpx.TimeoutException as e:
            log.warning("%s %s timed out at transport level", method, endpoint)
            raise RequestTimeoutError(
                f"Request to {endpoint} timed out after {deadline:g}s"
            ) from e
        except TimeoutError as e:
            log.warning("%s %s exceeded the %gs deadline", method, endpoint, deadline)
            raise RequestTimeoutError(
                f"Request to {endpoint} timed out after {deadline:g}s"
            ) from e
        except httpx.TransportError as e:
            log.warning("%s %s failed to connect: %s", method, endpoint, e)
            raise NetworkError(f"Failed to reach {endpoint}: {e}") from e

    def _build_headers(self, *, auth_required: bool) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if auth_required and self._token_provider is not None:
            token = self._token_provider()
            if token:
                scheme = self.config.auth_scheme
                headers["Authorization"] = f"{scheme} {token}" if scheme else token
        return headers
