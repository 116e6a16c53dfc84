"""
Request correlation IDs.

A short ID is attached to every request so that log lines, Sentry events and
error responses for the same request can be tied together.
"""

import uuid
from contextvars import ContextVar

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")


def generate_correlation_id() -> str:
    """
    Generate a short correlation ID.

    Returns:
        8-character hexadecimal string (e.g. "3f9a01bc").
    """
    return uuid.uuid4().hex[:8]


def get_correlation_id() -> str:
    """Return the current request's correlation ID, or "" outside a request."""
    return correlation_id_var.get()


def set_correlation_id(correlation_id: str) -> None:
    """Bind a correlation ID to the current request context."""
    correlation_id_var.set(correlation_id)
