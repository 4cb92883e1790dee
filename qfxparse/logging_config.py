import json
import logging
from datetime import datetime
from typing import Any, MutableMapping, Optional, Tuple

# Keyword arguments the stdlib logging calls accept themselves
_LOGGING_KWARGS = ('exc_info', 'stack_info', 'stacklevel', 'extra')


class JSONFormatter(logging.Formatter):
    """One JSON object per line, with any structured fields merged in."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(getattr(record, "extra_fields", None) or {})
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging(log_level: int = logging.INFO, log_file: Optional[str] = None):
    """
    Route the root logger to stderr, and to log_file when given, as JSON lines.
    """
    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(log_level)
    for handler in handlers:
        handler.setFormatter(JSONFormatter())
        root.addHandler(handler)


class QFXLoggerAdapter(logging.LoggerAdapter):
    """
    Collects non-logging keyword arguments into record.extra_fields.

        logger.debug("Decoded record", record="STMTTRN", fields=9)
    """

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        fields = {key: kwargs.pop(key) for key in list(kwargs) if key not in _LOGGING_KWARGS}
        extra = dict(kwargs.get("extra") or {})
        extra["extra_fields"] = {**extra.get("extra_fields", {}), **fields}
        kwargs["extra"] = extra
        return msg, kwargs


def get_logger(name: str) -> QFXLoggerAdapter:
    return QFXLoggerAdapter(logging.getLogger(name), {})
