"""Logging configuration utilities."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _render_value(value: Any) -> str:
    text = str(value)
    if " " in text or "=" in text:
        return json.dumps(text)
    return text


class KeyValueFormatter(logging.Formatter):
    """Plain text formatter that appends structured fields as key=value."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = getattr(record, "fields", None)
        if fields:
            rendered = " ".join(f"{k}={_render_value(v)}" for k, v in fields.items())
            line = f"{line} {rendered}"
        return line


class JSONFormatter(logging.Formatter):
    """Formatter emitting one JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        fields = getattr(record, "fields", None)
        if fields:
            payload.update(fields)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def setup_logging(
    level: str = "INFO",
    json_format: bool = False,
    format_string: Optional[str] = None,
    quiet_loggers: Optional[List[str]] = None,
) -> None:
    """Configure logging for the autoresize service.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: Emit one JSON object per line instead of text.
        format_string: Custom format string for text log messages.
        quiet_loggers: List of logger names to set to WARNING level.
    """
    if format_string is None:
        format_string = DEFAULT_FORMAT

    # Convert string to logging level
    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(KeyValueFormatter(format_string))

    logging.basicConfig(level=log_level, handlers=[handler], force=True)

    # Quiet down verbose third-party loggers
    default_quiet = ["asyncio"]
    quiet_loggers = (quiet_loggers or []) + default_quiet

    for logger_name in quiet_loggers:
        logging.getLogger(logger_name).setLevel(logging.WARNING)


def log_event(logger: logging.Logger, level: int, msg: str, **fields: Any) -> None:
    """Log a message with structured fields attached.

    Args:
        logger: Logger to emit on.
        level: Numeric log level (e.g. logging.INFO).
        msg: Human readable message.
        **fields: Structured key/value pairs rendered by the formatters.
    """
    logger.log(level, msg, extra={"fields": fields})
