"""Logging configuration for tray item processes."""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from .settings import default_log_path

LOG_LEVEL_ENV_VAR = "TRAY_ITEM_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(log_path: Optional[Path] = None) -> None:
    """Set up logging for console and a rolling log file.

    - Console level can be overridden via TRAY_ITEM_LOG_LEVEL (e.g., DEBUG/INFO).
    - Detailed DEBUG logs are always written to the rolling log file.
    """
    level_name = os.getenv(LOG_LEVEL_ENV_VAR, "INFO").upper()
    console_level = getattr(logging, level_name, logging.INFO)

    fmt = logging.Formatter(LOG_FORMAT)

    handlers: list[logging.Handler] = []

    ch = logging.StreamHandler()
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    handlers.append(ch)

    path = log_path or default_log_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(
            str(path), maxBytes=1_000_000, backupCount=2, encoding="utf-8"
        )
    except OSError:
        # If file logging fails, continue with console-only
        logging.getLogger(__name__).debug("File logging disabled", exc_info=True)
    else:
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(fmt)
        handlers.append(fh)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)
    for h in handlers:
        root.addHandler(h)
