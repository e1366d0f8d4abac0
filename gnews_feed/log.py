"""Logging configuration for the command-line entry point."""
from __future__ import annotations

import logging
import os
from typing import Optional

FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging with console output."""
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(FORMAT))

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel((level or os.getenv("LOG_LEVEL", "INFO")).upper())
    root.addHandler(handler)
