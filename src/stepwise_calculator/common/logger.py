"""Package-wide logger."""
import logging

LOGGER_NAME = "stepwise_calculator"
LOG_FORMAT = "[%(name)s] [%(levelname)s] %(message)s"


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """
    Return the named logger, attaching a stderr handler the first time.

    :param str name: Logger name

    :return: Configured logger
    :rtype: logging.Logger
    """
    log = logging.getLogger(name)

    # Prevent double handlers when the module is imported again
    if not log.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        log.addHandler(handler)
        log.setLevel(logging.WARNING)

    return log


def configure_logging(level: str) -> None:
    """
    Set the verbosity of the package logger.

    :param str level: Level name, e.g. "DEBUG" or "WARNING"
    """
    logger.setLevel(level.upper())


logger = get_logger()
