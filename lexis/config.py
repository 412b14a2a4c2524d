"""
Configuration constants for lexis.

Defaults shared by the message types, the bus and the command line tools.
"""

import logging

# Color maps
DEFAULT_RANGE = (0.0, 1.0)  # Range of the default color map

# Image encoding
DEFAULT_JPEG_QUALITY = 90
PREVIEW_WIDTH = 256
PREVIEW_HEIGHT = 16

# Progress monitoring
PROGRESS_MAX_AGE_SEC = 60  # Operations without updates are dropped after this

# Logging
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"


def setup_logging(level: int = logging.INFO) -> None:
    """Configure root logging for the command line tools."""
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
