# utils/logger.py
import logging
import os
import sys
from config.paths import LOG_PATH

ROOT_LOGGER_NAME = "scheduler"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Ensure directory exists
LOG_PATH.parent.mkdir(parents=True, exist_ok=True)

logger = logging.getLogger(ROOT_LOGGER_NAME)
logger.setLevel(LOG_LEVEL)

# Prevent duplicate handlers if imported multiple times
if not logger.handlers:
    # Every roster run appends to the same file
    file_handler = logging.FileHandler(LOG_PATH, encoding="utf-8")
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(levelname)s - %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    # Stream handler (stdout -> docker logs)
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))

    logger.addHandler(file_handler)
    logger.addHandler(stream_handler)


def get_logger(name: str) -> logging.Logger:
    """Return a logger below the roster logger so its records reach the handlers above."""
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logger.getChild(name)
