import logging
import sys


def setup_logger(name: str = "watch_notify", level: str = "WARNING") -> logging.Logger:
    logger = logging.getLogger(name)
    logger.propagate = False
    logger.setLevel(level)
    if logger.handlers:
        return logger  # avoid duplicate handlers

    # observer failures are diagnostics, keep them off stdout
    handler = logging.StreamHandler(sys.stderr)
    formatter = logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s: %(message)s")
    handler.setFormatter(formatter)

    logger.addHandler(handler)
    return logger
