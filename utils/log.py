# utils/log.py
import logging

"""
Logging setup for the command-line drivers.

Library code never configures logging; CLIs call setup_logging once and hand
the resulting logger to the functions that report progress or failures.
"""

LOG_FORMAT = "%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s"


def setup_logging(level="INFO", name: str = "plankton") -> logging.Logger:
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S")
    logger = logging.getLogger(name)
    logger.setLevel(level)
    return logger
