"""
Structured Logging
==================
Event-style JSON logging for builders, containers and analyzers.

Every call takes an event type plus a data dict:

    logger = get_logger(__name__)
    logger.info("vwap.window_capped", {"max_window": 500})

Handlers are attached at most once per underlying logging.Logger, so a
module may call get_logger(__name__) freely.
"""

import json
import logging
import os
import sys
import threading
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..infrastructure.config.settings import LoggingSettings

_loggers: Dict[str, 'StructuredLogger'] = {}
_loggers_lock = threading.RLock()

PLAIN_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


# ============================================================================
# JSON ENCODING
# ============================================================================

class CustomJsonEncoder(json.JSONEncoder):
    """Encodes datetime, Decimal, Enum and class objects found in event data"""

    def default(self, obj):
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, Decimal):
            return str(obj)
        if isinstance(obj, Enum):
            return obj.name
        if isinstance(obj, type):
            return obj.__name__
        return super().default(obj)


def _stringify_keys(value: Any) -> Any:
    """TAs keys may be ints or tuples; JSON objects need string keys"""
    if isinstance(value, dict):
        return {str(key): _stringify_keys(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_stringify_keys(item) for item in value]
    return value


class JsonFormatter(logging.Formatter):
    """One JSON object per record; dict messages are merged into the object"""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "funcName": record.funcName,
            "lineno": record.lineno,
        }
        if isinstance(record.msg, dict):
            entry.update(_stringify_keys(record.msg))
        else:
            entry["message"] = record.getMessage()

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, cls=CustomJsonEncoder)


# ============================================================================
# STRUCTURED LOGGER
# ============================================================================

class StructuredLogger:
    """
    Thin wrapper over logging.Logger with an (event_type, data) call form.

    Args:
        name: Underlying logging.Logger name
        config: LoggingSettings section
        filename: Write to this file under config.log_dir even when
            file logging is disabled globally
    """

    def __init__(self, name: str, config: 'LoggingSettings', filename: Optional[str] = None):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.getLevelName(str(config.level.value).upper()))
        self.logger.propagate = False
        self._structured = config.structured_logging

        if config.console_enabled:
            self._attach_console()

        if filename is None and config.file_enabled:
            filename = f"{name}.jsonl"
        if filename is not None:
            self._attach_file(
                Path(config.log_dir) / filename,
                max_bytes=config.max_file_size_mb * 1024 * 1024,
                backup_count=config.backup_count,
            )

    def _formatter(self) -> logging.Formatter:
        return JsonFormatter() if self._structured else logging.Formatter(PLAIN_FORMAT)

    def _attach_console(self):
        already = any(
            type(handler) is logging.StreamHandler and handler.stream is sys.stdout
            for handler in self.logger.handlers
        )
        if already:
            return
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(self._formatter())
        self.logger.addHandler(handler)

    def _attach_file(self, path: Path, max_bytes: int, backup_count: int):
        target = os.path.abspath(path)
        already = any(
            isinstance(handler, RotatingFileHandler) and handler.baseFilename == target
            for handler in self.logger.handlers
        )
        if already:
            return
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(target, maxBytes=max_bytes, backupCount=backup_count, encoding='utf-8')
        handler.setFormatter(self._formatter())
        self.logger.addHandler(handler)

    def is_enabled_for(self, level: int) -> bool:
        return self.logger.isEnabledFor(level)

    def _emit(self, level: int, event_type: str, data: Optional[Dict[str, Any]], exc_info=False):
        self.logger.log(level, {"event_type": event_type, "data": data or {}}, exc_info=exc_info)

    def debug(self, event_type: str, data: Optional[Dict[str, Any]] = None):
        self._emit(logging.DEBUG, event_type, data)

    def info(self, event_type: str, data: Optional[Dict[str, Any]] = None):
        self._emit(logging.INFO, event_type, data)

    def warning(self, event_type: str, data: Optional[Dict[str, Any]] = None):
        self._emit(logging.WARNING, event_type, data)

    def error(self, event_type: str, data: Optional[Dict[str, Any]] = None, exc_info=False):
        """Log an error event; exc_info attaches the active exception's traceback"""
        self._emit(logging.ERROR, event_type, data, exc_info=exc_info)


def get_logger(name: str) -> StructuredLogger:
    """
    Return the StructuredLogger for name, creating it on first use.

    Configuration is read from LoggingSettings (CANDLE_TA_LOG_* environment)
    once per name.
    """
    logger = _loggers.get(name)
    if logger is not None:
        return logger

    with _loggers_lock:
        if name not in _loggers:
            from ..infrastructure.config.settings import LoggingSettings
            _loggers[name] = StructuredLogger(name, LoggingSettings())
        return _loggers[name]


__all__ = ['CustomJsonEncoder', 'JsonFormatter', 'StructuredLogger', 'get_logger']
