"""Logging configuration.

Modules log through ``logging.getLogger(__name__)``; this module wires the
root logger once at startup with either a plain text or a JSON formatter.
"""
import json
import logging
import logging.handlers
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False


class JSONFormatter(logging.Formatter):
    """One JSON object per log line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def setup_logging(
    level: str = "INFO",
    fmt: str = "text",
    log_file: Optional[str] = None,
    max_file_size_mb: int = 10,
    backup_count: int = 5,
    force: bool = False,
) -> None:
    """Configure the root logger.

    Safe to call more than once; later calls are ignored unless ``force``.
    """
    global _configured
    if _configured and not force:
        return

    formatter: logging.Formatter
    if fmt == "json":
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(TEXT_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=max_file_size_mb * 1024 * 1024,
                backupCount=backup_count,
            )
        )

    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_galleryblue", False):
            root.removeHandler(handler)
    for handler in handlers:
        handler.setFormatter(formatter)
        handler._galleryblue = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    root.setLevel(level.upper())

    # uvicorn's access log duplicates what the handlers already record
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    _configured = True
