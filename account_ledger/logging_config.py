"""
Structured Logging Configuration Module

Ledger decisions and HTTP requests are logged as one JSON object per line,
with optional action/resource/correlation fields attached by ``log_action``.
"""

import logging
import json
from datetime import datetime, timezone
from typing import Optional


TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Record attributes copied into the JSON line when present
STRUCTURED_FIELDS = ("correlation_id", "action", "resource", "extra")


class JSONFormatter(logging.Formatter):
    """Render a log record as a single JSON line"""
    
    def format(self, record):
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in STRUCTURED_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                entry[name] = value
        
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        
        return json.dumps(entry, default=str)


def setup_logging(level: str = "INFO", log_format: str = "json",
                  log_file: Optional[str] = None,
                  logger_name: str = "account_ledger") -> logging.Logger:
    """
    Install a single handler on the application logger.
    
    Calling it again replaces the previous handler, so every app factory
    call can configure logging without stacking duplicate output.
    
    Args:
        level: Level name such as "INFO" or "WARNING"
        log_format: "json" or "text"
        log_file: Write to this file instead of stderr
        logger_name: Logger to configure; ``account_ledger.*`` loggers inherit it
    """
    logger = logging.getLogger(logger_name)
    
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    
    handler = logging.FileHandler(log_file) if log_file else logging.StreamHandler()
    if log_format == "text":
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    else:
        handler.setFormatter(JSONFormatter())
    
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper()))
    logger.propagate = False
    
    return logger


def get_logger(name: str = "account_ledger") -> logging.Logger:
    return logging.getLogger(name)


def log_action(logger: logging.Logger, level: str, message: str,
               action: Optional[str] = None, resource: Optional[str] = None,
               correlation_id: Optional[str] = None,
               extra: Optional[dict] = None):
    """
    Emit ``message`` with the structured ledger fields attached.
    
    ``resource`` names what was touched (e.g. "account:1"); ``extra`` holds
    values such as balance and limit. Nothing is built when ``level`` is
    disabled for ``logger``.
    """
    levelno = getattr(logging, level.upper())
    if not logger.isEnabledFor(levelno):
        return
    
    record = logger.makeRecord(logger.name, levelno, __name__, 0, message, (), None)
    fields = {
        "action": action,
        "resource": resource,
        "correlation_id": correlation_id,
        "extra": extra,
    }
    for name, value in fields.items():
        if value:
            setattr(record, name, value)
    
    logger.handle(record)
