"""
Logging Configuration
Attaches handlers to the 'fvtemporal' logger for scripts and the demo.

The library itself only creates module loggers (``logging.getLogger(__name__)``);
scheme calls report their coefficients at DEBUG and the time loop reports
each step at INFO. Nothing is printed until an application calls
:func:`setup_logging` or configures logging itself.
"""
import logging
import sys
from typing import Optional, Union

from fvtemporal.config import LOG_DATEFMT, LOG_FORMAT, LOGGER_NAMESPACE


def _make_handler(handler: logging.Handler, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Route the package's log records to stdout and optionally to a file.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        level: Logging level, as a number or a name such as "DEBUG".
        log_file: Optional path of a log file, overwritten on every call.

    Returns:
        The 'fvtemporal' logger.
    """
    if isinstance(level, str):
        name = level
        level = logging.getLevelName(name.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown logging level name: {name}")

    logger = logging.getLogger(LOGGER_NAMESPACE)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)
    logger.addHandler(_make_handler(logging.StreamHandler(sys.stdout), level, formatter))
    if log_file:
        logger.addHandler(
            _make_handler(logging.FileHandler(log_file, mode='w', encoding='utf-8'), level, formatter)
        )

    logger.info(f"Logging initialized at level {logging.getLevelName(level)}.")
    return logger
