"""Telemetry context and reporter interfaces.

Transport calls are timed under dotted scopes (``http.call``) and status codes
are recorded as metrics. When telemetry is disabled the factory hands back a
shared no-op context so instrumented code pays almost nothing.
"""

from collections import deque
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
import logging
import os
import time
from types import TracebackType
from typing import Any, Protocol, Self, TypeAlias, runtime_checkable

log = logging.getLogger(__name__)

# Context-aware scope stack so nested async calls report correct parents
_scope_stack_var: ContextVar[tuple[str, ...]] = ContextVar(
    "policy_assist_scope_stack",
    default=(),
)


def _env_enabled() -> bool:
    return os.getenv("POLICY_ASSIST_TELEMETRY") == "1" or os.getenv("DEBUG") == "1"


@runtime_checkable
class TelemetryReporter(Protocol):
    """Duck-typed protocol for telemetry reporters."""

    def record_timing(self, scope: str, duration: float, **metadata: Any) -> None: ...  # noqa: D102
    def record_metric(self, scope: str, value: Any, **metadata: Any) -> None: ...  # noqa: D102


@dataclass(frozen=True, slots=True)
class _NoOpTelemetryContext:
    """An immutable and stateless no-op context."""

    def __call__(self, name: str, **metadata: Any) -> Self:  # noqa: ARG002
        return self

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> bool | None:
        return None

    def metric(self, name: str, value: Any, **metadata: Any) -> None:
        pass

    def count(self, name: str, increment: int = 1, **metadata: Any) -> None:
        pass


class _EnabledTelemetryContext:
    """Telemetry context that forwards to reporters."""

    __slots__ = ("reporters",)

    def __init__(self, *reporters: TelemetryReporter):
        self.reporters = reporters

    def __call__(
        self, name: str, **metadata: Any
    ) -> AbstractContextManager["_EnabledTelemetryContext"]:
        return self._create_scope(name, **metadata)

    @contextmanager
    def _create_scope(
        self, name: str, **metadata: Any
    ) -> Iterator["_EnabledTelemetryContext"]:
        if not name or not isinstance(name, str):
            raise ValueError("Scope name must be a non-empty string")

        scope_stack = _scope_stack_var.get()
        scope_path = ".".join((*scope_stack, name))
        start_time = time.perf_counter()
        token = _scope_stack_var.set((*scope_stack, name))

        failed = False
        try:
            yield self
        except BaseException:
            failed = True
            raise
        finally:
            duration = time.perf_counter() - start_time
            _scope_stack_var.reset(token)
            enhanced_metadata = {
                "depth": len(scope_stack),
                "parent_scope": ".".join(scope_stack) if scope_stack else None,
                "failed": failed,
                **metadata,
            }
            for reporter in self.reporters:
                try:
                    reporter.record_timing(scope_path, duration, **enhanced_metadata)
                except Exception as e:
                    log.error(
                        "Telemetry reporter '%s' failed: %s",
                        type(reporter).__name__,
                        e,
                        exc_info=True,
                    )

    def metric(self, name: str, value: Any, **metadata: Any) -> None:
        """Record a metric within the current scope."""
        scope_stack = _scope_stack_var.get()
        scope_path = ".".join((*scope_stack, name))
        for reporter in self.reporters:
            try:
                reporter.record_metric(scope_path, value, **metadata)
            except Exception as e:
                log.error(
                    "Telemetry reporter '%s' failed: %s",
                    type(reporter).__name__,
                    e,
                    exc_info=True,
                )

    def count(self, name: str, increment: int = 1, **metadata: Any) -> None:
        """Record a counter metric."""
        self.metric(name, increment, metric_type="counter", **metadata)


_NO_OP_SINGLETON = _NoOpTelemetryContext()

TelemetryContextProtocol: TypeAlias = _EnabledTelemetryContext | _NoOpTelemetryContext


def TelemetryContext(  # noqa: N802
    *reporters: TelemetryReporter, enabled: bool | None = None
) -> TelemetryContextProtocol:
    """Return a telemetry context.

    Reporters only receive data when telemetry is enabled, either explicitly
    through ``enabled`` or via POLICY_ASSIST_TELEMETRY=1 / DEBUG=1.
    """
    active = _env_enabled() if enabled is None else enabled
    if active and reporters:
        return _EnabledTelemetryContext(*reporters)
    return _NO_OP_SINGLETON


class InMemoryReporter:
    """Reporter that keeps the most recent entries per scope in memory."""

    def __init__(self, max_entries_per_scope: int = 1000):
        self.max_entries = max_entries_per_scope
        self.timings: dict[str, deque[tuple[float, dict[str, Any]]]] = {}
        self.metrics: dict[str, deque[tuple[Any, dict[str, Any]]]] = {}

    def record_timing(self, scope: str, duration: float, **metadata: Any) -> None:
        self.timings.setdefault(scope, deque(maxlen=self.max_entries)).append(
            (duration, metadata)
        )

    def record_metric(self, scope: str, value: Any, **metadata: Any) -> None:
        self.metrics.setdefault(scope, deque(maxlen=self.max_entries)).append(
            (value, metadata)
        )

    def get_report(self) -> str:
        """Summarize collected timings and metrics."""
        lines = ["=== Telemetry Report ==="]
        for scope, values in sorted(self.timings.items()):
            durations = [v[0] for v in values]
            lines.append(
                f"{scope:<30} | Calls: {len(durations):<4} | "
                f"Avg: {sum(durations) / len(durations):.4f}s"
            )
        for scope, values in sorted(self.metrics.items()):
            lines.append(f"{scope:<30} | Count: {len(values):<4}")
        return "\n".join(lines)
