"""
Minimal JSON logging so cache activity lands in the host's log pipeline.
Why: consistent, machine-readable logs with low noise.
"""

import json
import logging
from typing import Any, Dict, Optional, Union

from .config.settings import load_settings


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def setup_logging(level: Optional[Union[int, str]] = None) -> None:
    """Attach a JSON stream handler to the root logger once.

    ``level`` defaults to FETCH_CACHE_LOG_LEVEL (INFO when unset).
    """
    root = logging.getLogger()
    if any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        return
    handler = logging.StreamHandler()
    handler.setFormatter(_JsonFormatter())
    root.setLevel(level if level is not None else load_settings().log_level)
    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
