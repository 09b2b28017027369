"""Logging setup shared by the CLI and the library modules."""

import logging
import sys
from typing import Optional

# Bibliothèques trop bavardes en INFO
NOISY_LOGGERS = ("aiohttp", "asyncio", "sqlalchemy.engine", "redis")


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure the root logger once, on stderr so that stdout stays clean
    for the command output.

    Args:
        level: level name (DEBUG, INFO, ...); INFO when omitted
    """
    log_level = getattr(logging, level.upper()) if level else logging.INFO

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("riftrewind").setLevel(log_level)
