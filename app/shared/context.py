"""Request context management using contextvars.

Holds request-scoped values (request ID, correlation ID, verified caller)
so that log records and spans can carry them without threading them
through every call.

Usage:
    set_request_id("abc")
    set_correlation_id("abc")
    set_current_identity("doc_123")
    snapshot = get_request_context()
"""

import logging
from contextvars import ContextVar
from dataclasses import dataclass

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)
_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)
_current_identity_id: ContextVar[str | None] = ContextVar(
    "current_identity_id", default=None
)


@dataclass(frozen=True)
class RequestContext:
    """Immutable snapshot of the current request context."""

    request_id: str | None
    correlation_id: str | None
    identity_id: str | None


def set_request_id(request_id: str | None) -> None:
    """Set the request ID for this request (called by RequestIDMiddleware)."""
    _request_id.set(request_id)


def set_correlation_id(correlation_id: str | None) -> None:
    """Set the correlation ID for this request (called by CorrelationIDMiddleware)."""
    _correlation_id.set(correlation_id)


def set_current_identity(identity_id: str | None) -> None:
    """Set the verified caller for this request (called after token verification)."""
    _current_identity_id.set(identity_id)


def get_current_identity_id() -> str | None:
    return _current_identity_id.get()


def get_request_context() -> RequestContext:
    """Return a snapshot of the current request context."""
    return RequestContext(
        request_id=_request_id.get(),
        correlation_id=_correlation_id.get(),
        identity_id=_current_identity_id.get(),
    )


def clear_request_context() -> None:
    """Reset all request-scoped values (tests, background work)."""
    _request_id.set(None)
    _correlation_id.set(None)
    _current_identity_id.set(None)


class RequestContextLogFilter(logging.Filter):
    """Adds request_id and identity_id attributes to every log record ('-' when unset)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id.get() or "-"
        record.identity_id = _current_identity_id.get() or "-"
        return True
