"""
Logging setup.

- Console handler always; rotating file handlers when LOG_DIR is set
- Request ID aware formatter (id comes from g.request_id)
"""

from __future__ import annotations
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from flask import g, has_request_context

from app.config import Settings

_FMT = "%(asctime)s [%(levelname)s] %(name)s %(request_id)s - %(message)s"


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            rid = g.get("request_id") if has_request_context() else None
            record.request_id = rid or "-"
        return True


def _mk_handler(path: Path, level: int) -> RotatingFileHandler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(path, maxBytes=5_000_000, backupCount=3, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FMT))
    handler.addFilter(RequestIdFilter())
    return handler


def configure_logging(settings: Settings) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, settings.LOG_LEVEL, logging.INFO))

    # create_app() may run many times per process (tests); install once
    if getattr(root, "_fflip_configured", False):
        return

    # Console (dev)
    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(_FMT))
    console.addFilter(RequestIdFilter())
    root.addHandler(console)

    # Files
    if settings.LOG_DIR:
        logs_dir = Path(settings.LOG_DIR)
        root.addHandler(_mk_handler(logs_dir / "fflip.log", logging.INFO))
        root.addHandler(_mk_handler(logs_dir / "errors.log", logging.ERROR))

    root._fflip_configured = True  # type: ignore[attr-defined]
