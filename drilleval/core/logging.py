"""
Structured logging configuration.

Library modules only ask for loggers; handlers are installed by
``setup_logging()``, which the command line entry point calls.

Records may carry an ``extra_data`` mapping. The exercise context keys
(``exercise_id``, ``exercise_type``) are promoted to top-level fields,
everything else is kept as scoring detail.
"""

import sys
import logging
from typing import Any, Dict
from datetime import datetime, timezone
import json
from pathlib import Path

from .config import get_settings

CONTEXT_FIELDS = ("exercise_id", "exercise_type")


def _split_extra(record: logging.LogRecord) -> tuple[Dict[str, Any], Dict[str, Any]]:
    extra = dict(getattr(record, "extra_data", None) or {})
    context = {key: extra.pop(key) for key in CONTEXT_FIELDS if key in extra}
    return context, extra


class StructuredFormatter(logging.Formatter):
    """JSON structured log formatter"""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON"""
        context, detail = _split_extra(record)
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **context,
        }

        if detail:
            log_data["detail"] = detail

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable formatter: ``[exercise_id] message key=value ...``"""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

    def formatMessage(self, record: logging.LogRecord) -> str:
        context, detail = _split_extra(record)
        message = record.message
        if "exercise_id" in context:
            message = f"[{context['exercise_id']}] {message}"
        if detail:
            message += " " + " ".join(f"{key}={value}" for key, value in detail.items())
        original, record.message = record.message, message
        try:
            return super().formatMessage(record)
        finally:
            record.message = original


def setup_logging(level: str | None = None) -> None:
    """Configure root logging from settings (``level`` overrides LOG_LEVEL)."""
    settings = get_settings()

    log_level = getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO)

    if settings.LOG_FORMAT == "json":
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = TextFormatter()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)

    handlers: list[logging.Handler] = [console_handler]

    if settings.LOG_FILE:
        log_path = Path(settings.LOG_FILE)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(level=log_level, handlers=handlers, force=True)


def get_logger(name: str) -> logging.Logger:
    """Get logger instance"""
    return logging.getLogger(name)


class ExerciseLoggerAdapter(logging.LoggerAdapter):
    """Logger bound to one exercise; per-call ``extra_data`` is merged in."""

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        extra_data = kwargs.pop("extra_data", {})
        kwargs.setdefault("extra", {})["extra_data"] = {**self.extra, **extra_data}
        return msg, kwargs


def get_context_logger(name: str, **context) -> ExerciseLoggerAdapter:
    """Get logger with permanent context (typically ``exercise_id`` and ``exercise_type``)"""
    return ExerciseLoggerAdapter(get_logger(name), context)
