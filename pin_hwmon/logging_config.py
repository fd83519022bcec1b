import logging
import sys


def setup_logger(name: str, level: int = logging.WARNING) -> logging.Logger:
    """
    Configure a logger that writes to stderr.

    stdout is reserved for command output, so diagnostics must never go there.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # already configured, do not add a second handler
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            fmt="[%(asctime)s] %(levelname)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(handler)

    return logger
