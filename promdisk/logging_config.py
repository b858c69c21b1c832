"""
Logging configuration that keeps stdout free for the report table
and hides webhook keys.
"""

import logging
import logging.config
import re
from typing import Any, Dict

_WEBHOOK_KEY = re.compile(r"(key=)[^&\s'\"]+")


class WebhookKeyFilter(logging.Filter):
    """Filter that redacts webhook ``key=`` query parameters."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Rewrite the record message with the key masked."""
        message = record.getMessage()
        if "key=" in message:
            record.msg = _WEBHOOK_KEY.sub(r"\1***", message)
            record.args = None
        return True  # Never drop records, only rewrite them


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """Get logging configuration with webhook key redaction."""
    level = level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "webhook_key_filter": {
                "()": WebhookKeyFilter
            }
        },
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            }
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                # stdout is reserved for the rendered table
                "stream": "ext://sys.stderr",
                "filters": ["webhook_key_filter"]
            }
        },
        "loggers": {
            "promdisk": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            },
            "urllib3": {
                "handlers": ["default"],
                "level": "WARNING",
                "propagate": False
            }
        },
        "root": {
            "level": level,
            "handlers": ["default"]
        }
    }


def setup_logging(level: str = "INFO") -> None:
    """Apply the logging configuration."""
    logging.config.dictConfig(get_logging_config(level))
