import json
import logging
import logging.config
import os
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import yaml

from . import config as settings

# LogRecord attributes that are not user-supplied extras
_RESERVED_ATTRS = {
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename',
    'module', 'lineno', 'funcName', 'created', 'msecs', 'relativeCreated',
    'thread', 'threadName', 'processName', 'process', 'exc_info', 'exc_text',
    'stack_info', 'taskName', 'message', 'asctime', 'component',
}

LOGGER_NAMES = ("enrich", "processors")


class JsonFormatter(logging.Formatter):
    """JSON formatter with structured fields"""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "component": getattr(record, 'component', record.name),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        # Structured extras passed via extra={...}
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_entry[key] = value

        return json.dumps(log_entry, default=str)


def _default_config(log_level: str, log_format: str) -> Dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {"()": JsonFormatter},
            "text": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S"
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": log_level,
                "formatter": log_format,
                "stream": "ext://sys.stderr"
            }
        },
        "loggers": {
            name: {"level": log_level, "propagate": True}
            for name in LOGGER_NAMES
        },
        "root": {
            "level": log_level,
            "handlers": ["console"]
        }
    }


def setup_logging(log_level: Optional[str] = None, log_format: Optional[str] = None,
                  config_file: Optional[str] = None) -> Dict[str, Any]:
    """Setup logging from a YAML file or from LOG_LEVEL / LOG_FORMAT"""
    log_level = (log_level or settings.LOG_LEVEL).upper()
    log_format = log_format or settings.LOG_FORMAT
    if log_format not in ("json", "text"):
        log_format = "text"
    config_file = config_file or settings.LOGGING_CONFIG_FILE

    config = None
    if config_file and os.path.exists(config_file):
        try:
            with open(config_file, 'r') as f:
                config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logging.getLogger("processors").warning(f"Could not load {config_file}: {e}")

    if not config:
        config = _default_config(log_level, log_format)

    logging.config.dictConfig(config)
    return config
