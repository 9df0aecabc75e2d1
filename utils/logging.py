"""
Structured logging helpers for the posture tracking service.

This module provides the JSON formatter, a logger accessor and a timing
decorator shared by the pipeline, the video adapters and the API layer.
"""

import functools
import logging
import json
from datetime import datetime


class JsonFormatter(logging.Formatter):
    """
    Formatter that outputs JSON strings for each log record.
    Useful for structured logging to be ingested by log analysis tools.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
            }

        # Add extra attributes
        if hasattr(record, "extra"):
            log_data["extra"] = record.extra

        return json.dumps(log_data)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the specified name.

    Args:
        name: Logger name, typically __name__ of the module

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


def log_execution_time(logger: logging.Logger, level: int = logging.DEBUG):
    """
    Decorator to log execution time of a function.

    Args:
        logger: Logger to use
        level: Log level to use

    Returns:
        Decorator function
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            start_time = datetime.now()
            try:
                result = func(*args, **kwargs)
                elapsed = datetime.now() - start_time
                logger.log(
                    level,
                    f"Function {func.__name__} executed in {elapsed.total_seconds():.3f} seconds",
                    extra={"execution_time": elapsed.total_seconds()}
                )
                return result
            except Exception as e:
                elapsed = datetime.now() - start_time
                logger.error(
                    f"Function {func.__name__} failed after {elapsed.total_seconds():.3f} seconds: {str(e)}",
                    exc_info=True,
                    extra={"execution_time": elapsed.total_seconds()}
                )
                raise
        return wrapper
    return decorator
