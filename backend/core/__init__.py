"""Core infrastructure: correlation IDs, logging, Sentry and realtime push."""

from core.correlation import (
    correlation_id_var,
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from core.logging_config import configure_logging
from core.realtime import ConnectionManager, connection_manager
from core.sentry_config import init_sentry

__all__ = [
    "ConnectionManager",
    "configure_logging",
    "connection_manager",
    "correlation_id_var",
    "generate_correlation_id",
    "get_correlation_id",
    "init_sentry",
    "set_correlation_id",
]
