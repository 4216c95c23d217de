import json
import logging
import sys
from typing import Dict, Any, Optional
import uuid

from hybrid_intent.config import get_settings

settings = get_settings()


class CustomJsonFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """
        Format the log record as a JSON string.

        Args:
            record: The log record to format

        Returns:
            str: JSON formatted log string
        """
        log_object = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "service": settings.SERVICE_NAME,
            "environment": settings.ENVIRONMENT,
        }

        if hasattr(record, "correlation_id"):
            log_object["correlation_id"] = record.correlation_id

        if hasattr(record, "channel"):
            log_object["channel"] = record.channel

        if hasattr(record, "intent"):
            log_object["intent"] = record.intent

        if record.exc_info:
            log_object["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_object)


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure global logging settings.

    Args:
        level: Optional level name overriding ``LOG_LEVEL`` from settings
    """
    log_level = getattr(logging, (level or settings.LOG_LEVEL).upper())

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(CustomJsonFormatter())

    logging.basicConfig(
        level=log_level,
        handlers=[handler],
        force=True
    )

    # scikit-learn and joblib are chatty at DEBUG
    logging.getLogger("sklearn").setLevel(logging.WARNING)
    logging.getLogger("joblib").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a configured logger instance.

    Args:
        name: Name for the logger

    Returns:
        logging.Logger: Configured logger instance
    """
    return logging.getLogger(name)


class LoggerAdapter(logging.LoggerAdapter):
    """
    Adapter for adding correlation ID and other context to logs.
    """

    def __init__(self, logger: logging.Logger, correlation_id: Optional[str] = None, extra: Optional[Dict[str, Any]] = None):
        """
        Initialize the logger adapter.

        Args:
            logger: Base logger to adapt
            correlation_id: Correlation ID tying log lines to one message
            extra: Extra fields to include in all logs
        """
        self.correlation_id = correlation_id or str(uuid.uuid4())
        extra_dict = extra or {}
        extra_dict["correlation_id"] = self.correlation_id
        super().__init__(logger, extra_dict)

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        """Process the log message to add context data."""
        kwargs["extra"] = kwargs.get("extra", {})
        kwargs["extra"].update(self.extra)
        return msg, kwargs


def get_request_logger(name: str, correlation_id: Optional[str] = None, channel: Optional[str] = None) -> LoggerAdapter:
    """
    Get a logger configured with per-message context.

    Args:
        name: Logger name
        correlation_id: Message correlation ID for tracing
        channel: Optional chat channel the message arrived on

    Returns:
        LoggerAdapter: Configured logger adapter
    """
    logger = get_logger(name)
    extra = {}
    if channel:
        extra["channel"] = channel

    return LoggerAdapter(logger, correlation_id, extra)
