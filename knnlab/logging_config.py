# knnlab/logging_config.py

import logging
import sys
from typing import Optional, Union

from .config import LOG_LEVEL


def setup_logging(
    level: Optional[Union[int, str]] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Configure the 'knnlab' logger.

    Safe to call repeatedly (e.g. when a notebook cell is re-run):
    existing handlers are replaced, not duplicated.
    """
    if level is None:
        level = LOG_LEVEL
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger("knnlab")
    logger.setLevel(level)

    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger
