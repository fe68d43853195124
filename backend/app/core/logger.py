import logging

from app.core.config import settings


def get_logger(name: str) -> logging.Logger:
    """Return a named logger with a console handler attached once."""
    logger = logging.getLogger(name)
    logger.setLevel(settings.LOG_LEVEL.upper())

    # Console handler for terminal output
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(
            "[NEXTHIRE] %(levelname)s %(name)s: %(message)s"
        ))
        logger.addHandler(handler)

    return logger
