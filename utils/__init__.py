"""
utils/__init__.py - Shared Helpers

Logger construction used by the launcher, the crawler, the frontier and
every worker thread.
"""

import os
import logging

# Directory that receives one log file per logger (or per shared filename)
LOG_DIR = "Logs"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name, filename=None):
    """
    Build (or fetch) a named logger writing to Logs/<filename>.log and stderr.

    Args:
        name: Logger name shown in each record (e.g. "Worker-3")
        filename: Log file stem; workers share one file ("Worker")

    Returns:
        logging.Logger with file and console handlers attached once
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.INFO)
    if logger.handlers:
        return logger

    os.makedirs(LOG_DIR, exist_ok=True)
    formatter = logging.Formatter(LOG_FORMAT)

    fh = logging.FileHandler(
        os.path.join(LOG_DIR, f"{filename if filename else name}.log"),
        encoding="utf-8")
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(formatter)

    ch = logging.StreamHandler()
    ch.setLevel(logging.INFO)
    ch.setFormatter(formatter)

    logger.addHandler(fh)
    logger.addHandler(ch)
    return logger
