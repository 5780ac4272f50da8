import sys
from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)

_configured_level = None


def configure_logging(level: str = "INFO") -> None:
    """Install the single stderr sink at the given level.

    Calling again with the same level is a no-op, so every app created in a test
    run shares one sink instead of stacking duplicates.
    """
    global _configured_level
    level = level.upper()
    if _configured_level == level:
        return
    logger.remove()
    logger.add(sink=sys.stderr, level=level, format=LOG_FORMAT)
    _configured_level = level


def get_logger(name: str = None):
    """Get the application logger, optionally bound to a context name."""
    if name:
        return logger.bind(name=name)
    return logger
