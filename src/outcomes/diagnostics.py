"""Diagnostic traces attached to Failure values.

A trace is a debugging side channel: it never participates in equality,
hashing or repr of the Failure carrying it.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass, field

from .config import get_settings


@dataclass(frozen=True, slots=True)
class ErrorContext:
    """One frame of a trace: the operation that saw the failure, where, and extra metadata."""

    operation: str
    location: str = ""
    metadata: dict[str, object] = field(default_factory=dict)

    def __str__(self) -> str:
        loc = f" at {self.location}" if self.location else ""
        meta = f" ({', '.join(f'{k}={v}' for k, v in self.metadata.items())})" if self.metadata else ""
        return f"{self.operation}{loc}{meta}"


# Pre-allocated empty tuple for default contexts
_EMPTY_CONTEXTS: tuple[ErrorContext, ...] = ()


@dataclass(frozen=True, slots=True)
class ErrorTrace:
    """Stack of contexts describing how a failure travelled, plus optional traceback text."""

    message: str
    contexts: tuple[ErrorContext, ...] = _EMPTY_CONTEXTS
    details: str | None = None

    def with_context(self, ctx: ErrorContext) -> ErrorTrace:
        """Append a frame (returns new trace). Oldest frames drop past trace.max_contexts."""
        limit = get_settings().trace.max_contexts
        return ErrorTrace(self.message, (*self.contexts, ctx)[-limit:], self.details)

    def with_operation(self, operation: str, location: str = "", **metadata: object) -> ErrorTrace:
        return self.with_context(ErrorContext(operation, location, dict(metadata)))

    def format(self, *, include_details: bool = False) -> str:
        """Format trace as human-readable string."""
        parts = [self.message]
        if self.contexts:
            parts.append("\nContext trace:\n" + "\n".join(f"  - {ctx}" for ctx in self.contexts))
        if include_details and self.details:
            parts.append(f"\nDetails:\n{self.details}")
        return "".join(parts)

    __str__ = format


def context(operation: str, location: str = "", **metadata: object) -> ErrorContext:
    """Create ErrorContext concisely."""
    return ErrorContext(operation, location, dict(metadata))


def trace(message: str, *, details: str | None = None) -> ErrorTrace:
    """Create ErrorTrace concisely."""
    return ErrorTrace(message, _EMPTY_CONTEXTS, details)


def trace_from_exc(exc: BaseException, *, operation: str = "") -> ErrorTrace:
    """Build a trace from an exception, keeping its formatted traceback when enabled."""
    details = None
    if get_settings().trace.capture_traceback:
        details = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    t = ErrorTrace(str(exc) or type(exc).__name__, _EMPTY_CONTEXTS, details)
    return t.with_operation(operation) if operation else t


__all__ = ["ErrorContext", "ErrorTrace", "context", "trace", "trace_from_exc"]
