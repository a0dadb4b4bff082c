"""
Logging setup
Provides the package loggers and helpers for detailed error records
"""
import logging
import os
import sys
import traceback
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Dict, Any, Mapping

_SECRET_KEYS = ("password", "passwd", "secret")


class DetailedFormatter(logging.Formatter):
    """Formatter that appends extra context attached to the record"""

    def format(self, record: logging.LogRecord) -> str:
        """
        Format a log record

        Args:
            record: the log record

        Returns:
            formatted log line
        """
        formatted = super().format(record)

        if hasattr(record, 'extra_context'):
            formatted += f"\nContext: {record.extra_context}"

        return formatted


def setup_logger(
    name: str = "poolsync",
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    console_output: bool = True
) -> logging.Logger:
    """
    Configure a logger

    Args:
        name: logger name
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL; read from LOG_LEVEL when None
        log_file: log file path; read from LOG_FILE when None, no file output if unset
        console_output: whether to write to stderr

    Returns:
        the configured logger
    """
    if log_level is None:
        log_level = os.getenv("LOG_LEVEL", "INFO")

    if log_file is None:
        log_file = os.getenv("LOG_FILE")

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, log_level.upper()))

    # avoid duplicate handlers on repeated setup
    logger.handlers.clear()

    log_format = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            Path(log_dir).mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(DetailedFormatter(log_format, date_format))
        logger.addHandler(file_handler)

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(getattr(logging, log_level.upper()))
        console_handler.setFormatter(DetailedFormatter(log_format, date_format))
        logger.addHandler(console_handler)

    return logger


def get_logger(name: str = "poolsync") -> logging.Logger:
    """
    Get a logger, configuring the package root logger on first use

    Args:
        name: logger name, usually __name__

    Returns:
        logger instance
    """
    root = logging.getLogger("poolsync")
    if not root.handlers:
        setup_logger("poolsync")
    return logging.getLogger(name)


def mask_secrets(config: Mapping[str, Any]) -> Dict[str, Any]:
    """Copy of config with password-like values replaced by ***, nested mappings included"""
    safe_config = {}
    for key, value in config.items():
        if any(secret in str(key).lower() for secret in _SECRET_KEYS):
            safe_config[key] = "***"
        elif isinstance(value, Mapping):
            safe_config[key] = mask_secrets(value)
        else:
            safe_config[key] = value
    return safe_config


def log_error_with_context(
    logger: logging.Logger,
    message: str,
    error: Exception,
    context: Optional[Dict[str, Any]] = None
):
    """
    Log an error together with structured context

    Args:
        logger: target logger
        message: error message
        error: the exception
        context: extra information such as the SQL statement
    """
    error_details = {
        "message": message,
        "error_type": type(error).__name__,
        "error_message": str(error),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

    if context:
        error_details["context"] = context

    error_details["traceback"] = traceback.format_exc()

    logger.error(
        f"{message}\nDetails: {error_details}",
        exc_info=True,
        extra={"extra_context": context}
    )


def log_sql_error(
    logger: logging.Logger,
    sql: str,
    data_source_id: str,
    error: Exception
):
    """
    Log a failed SQL statement

    Args:
        logger: target logger
        sql: the statement
        data_source_id: data source the statement ran against
        error: the exception
    """
    context = {
        "sql": sql,
        "data_source_id": data_source_id,
    }
    log_error_with_context(logger, "SQL execution failed", error, context)


def log_database_connection_error(
    logger: logging.Logger,
    db_config: Dict[str, Any],
    error: Exception
):
    """
    Log a failed pool creation

    Args:
        logger: target logger
        db_config: data source configuration (secrets are masked)
        error: the exception
    """
    context = {
        "db_config": mask_secrets(db_config),
    }
    log_error_with_context(logger, "Database connection failed", error, context)
