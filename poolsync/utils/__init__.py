"""
Shared helpers
"""
from .logger import (
    get_logger,
    setup_logger,
    log_error_with_context,
    log_sql_error,
    log_database_connection_error,
)

__all__ = [
    "get_logger",
    "setup_logger",
    "log_error_with_context",
    "log_sql_error",
    "log_database_connection_error",
]
