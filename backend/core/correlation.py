"""
Request-scoped correlation IDs.

Every request gets a short ID that is echoed in the X-Correlation-ID header,
attached to log records and returned in error bodies so a moderator report
can be traced back to the server logs.
"""

import uuid
from contextvars import ContextVar

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")


def generate_correlation_id() -> str:
    """
    Generate a short correlation ID.

    Returns:
        8-character hexadecimal string.
    """
    return uuid.uuid4().hex[:8]


def get_correlation_id() -> str:
    """Return the correlation ID of the current context, or "" if unset."""
    return correlation_id_var.get()


def set_correlation_id(correlation_id: str) -> None:
    """
    Bind a correlation ID to the current context.

    Args:
        correlation_id: ID received from the client or freshly generated.
    """
    correlation_id_var.set(correlation_id)
