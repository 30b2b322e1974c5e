import logging

from driftjson.models import LogLevel

PACKAGE_LOGGER = "driftjson"

_LEVELS = {
    LogLevel.ERROR: logging.ERROR,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.INFO: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
}


def apply_log_level(level: LogLevel) -> None:
    """Set the minimum level emitted by every ``driftjson.*`` logger."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    if level is LogLevel.NONE:
        logger.disabled = True
        return
    logger.disabled = False
    logger.setLevel(_LEVELS[level])
