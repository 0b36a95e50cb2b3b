"""Logging setup for the podunits CLI."""

import logging
import sys
from typing import TextIO


def setup_logging(level: str = "INFO", stream: TextIO = sys.stdout):
    """Setup logging configuration.

    The CLI passes stderr so rendered units on stdout stay clean.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    # Configure root logger
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        handlers=[
            logging.StreamHandler(stream)
        ],
        force=True,
    )
