"""Common logging setup for the chat service."""

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Configure root logging once for the process.

    Args:
        level: Level name such as ``INFO`` or ``debug``
        log_file: Optional file to log to instead of stderr
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        filename=log_file if log_file else None,
    )

    # python-socketio / engineio are chatty at INFO
    logging.getLogger("socketio").setLevel(max(log_level, logging.WARNING))
    logging.getLogger("engineio").setLevel(max(log_level, logging.WARNING))
