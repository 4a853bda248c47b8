"""Logging configuration for the edge dock."""

import logging
import os

LOG_LEVEL = os.environ.get("EDGEDOCK_LOG_LEVEL", "WARNING").upper()

logging.basicConfig(
    format="%(asctime)s.%(msecs)03d %(name)-18s %(levelname)-5s %(message)s",
    datefmt="%H:%M:%S",
    level=getattr(logging, LOG_LEVEL, logging.WARNING),
)


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the 'edgedock.' namespace.

    Level controlled by EDGEDOCK_LOG_LEVEL env var (default WARNING).
    """
    return logging.getLogger(f"edgedock.{name}")
