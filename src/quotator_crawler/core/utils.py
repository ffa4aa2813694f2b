import logging
import sys

PACKAGE_LOGGER_PREFIX = "quotator_crawler"


def setup_logger(
    name: str = PACKAGE_LOGGER_PREFIX,
    log_level: int = logging.INFO,
    log_format: str | None = None,
) -> logging.Logger:
    """
    Configure logging to stderr with the specified format and level.

    Args:
        name: Logger name, prefixed with the package name when it is not already
        log_level: Logging level (default: logging.INFO)
        log_format: Custom log format string (optional)

    Returns:
        Configured logger instance
    """
    if not name.startswith(PACKAGE_LOGGER_PREFIX):
        name = f"{PACKAGE_LOGGER_PREFIX}.{name}"

    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()
    logger.propagate = False

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.NOTSET)

    if log_format is None:
        log_format = "[%(asctime)s] %(levelname)s [%(name)s.%(funcName)s:%(lineno)d] %(message)s"
    formatter = logging.Formatter(log_format, datefmt="%Y-%m-%d %H:%M:%S")
    console_handler.setFormatter(formatter)

    logger.addHandler(console_handler)

    return logger


def configure_log_level(log_level: int) -> None:
    """Apply a level to every logger created through setup_logger."""
    for name, logger in logging.Logger.manager.loggerDict.items():
        if name.startswith(PACKAGE_LOGGER_PREFIX) and isinstance(logger, logging.Logger):
            logger.setLevel(log_level)
