"""Structured logging configuration with correlation ID support."""

import json
import logging
from contextvars import ContextVar
from datetime import datetime, timezone

# Context variable holding the correlation ID of the request being served
correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")

# Attributes every LogRecord carries; anything else arrived through ``extra=``
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "correlation_id"}


class JsonFormatter(logging.Formatter):
    """Formats log records as single-line JSON documents."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, object] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "correlation_id": getattr(record, "correlation_id", "") or "N/A",
        }

        for key, value in vars(record).items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                log_entry[key] = value

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        if record.stack_info:
            log_entry["stack_info"] = self.formatStack(record.stack_info)

        return json.dumps(log_entry, default=str)


class CorrelationIdFilter(logging.Filter):
    """Stamps the active correlation ID onto every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = correlation_id_var.get()
        return True


def configure_logging(log_level: str = "INFO") -> None:
    """
    Install the JSON handler on the root logger.

    Safe to call more than once: later calls only change the level and leave
    other handlers (pytest's capture handler, for one) in place.

    Args:
        log_level: Logging level name such as "INFO" or "DEBUG".
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level.upper())

    if any(isinstance(h.formatter, JsonFormatter) for h in root_logger.handlers):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    handler.addFilter(CorrelationIdFilter())
    root_logger.addHandler(handler)
