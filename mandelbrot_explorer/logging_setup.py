"""
Logging configuration for the explorer.

Every module logs through the package logger returned by get_logger().
Nothing is printed until configure_logging() installs handlers; the
command line entry point calls it once the settings are known.

Handlers:
- Console (stderr), on by default
- Rotating log file, only when a path is given
"""

import logging
import logging.handlers


LOGGER_NAME = "mandelbrot_explorer"

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"

# Rotating file limits
LOG_FILE_MAX_BYTES = 1024 * 1024
LOG_FILE_BACKUPS = 3


def get_logger():
    """Return the package logger."""
    return logging.getLogger(LOGGER_NAME)


def parse_level(name):
    """
    Convert a level name such as 'debug' or 'INFO' to its numeric value.

    Raises:
        ValueError if the name is not a standard logging level
    """
    level = logging.getLevelName(str(name).upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {name}")
    return level


def configure_logging(level=logging.INFO, console=True, log_file=None):
    """
    Install handlers on the package logger.

    Safe to call more than once: handlers from an earlier call are
    closed and replaced, so messages are never duplicated.

    Args:
        level: Numeric level or level name
        console: Log to stderr
        log_file: Path of a rotating log file, or None for no file

    Returns:
        The configured package logger
    """
    if isinstance(level, str):
        level = parse_level(level)

    logger = get_logger()
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    handlers = []
    if console:
        handlers.append(logging.StreamHandler())
    if log_file:
        handlers.append(logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS,
            encoding="utf-8"
        ))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger
