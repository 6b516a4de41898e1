"""Logging setup for the pyzbase32 command line."""

import logging
import os
from typing import Optional

DEFAULT_LOG_LEVEL = "WARNING"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure the root logger, falling back to PYZBASE32_LOG_LEVEL"""
    log_level = (level or os.getenv("PYZBASE32_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
