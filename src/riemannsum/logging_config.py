"""
Logging Configuration
The package logs under the 'riemannsum' namespace and stays silent unless the
host application configures logging or calls `setup_logging`.
"""
import logging
import sys
from typing import Optional

LOGGER_NAME = "riemannsum"

# Marks handlers installed here, so reconfiguring never touches the host's handlers
_OWNED = "_riemannsum_owned"


def attach_null_handler() -> logging.Logger:
    """
    Gives the package logger a NullHandler, once. Called on package import.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if not any(isinstance(h, logging.NullHandler) for h in logger.handlers):
        logger.addHandler(logging.NullHandler())
    return logger


def _own(handler: logging.Handler, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    setattr(handler, _OWNED, True)
    return handler


def setup_logging(
    level: int = logging.WARNING,
    log_file: Optional[str] = None,
    stream=sys.stderr
) -> logging.Logger:
    """
    Sends the package's records to `stream` and, optionally, a file.

    Handlers from a previous call are replaced; handlers added by anyone else
    are left in place.

    Args:
        level: Logging level (e.g. logging.DEBUG to see partition details)
        log_file: Optional path to save logs to a file.
        stream: Stream for the console handler.

    Returns:
        The package logger.
    """
    logger = attach_null_handler()
    logger.setLevel(level)

    for handler in [h for h in logger.handlers if getattr(h, _OWNED, False)]:
        logger.removeHandler(handler)
        handler.close()

    # Format: Time - Module - Level - Message
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    logger.addHandler(_own(logging.StreamHandler(stream), level, formatter))

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        logger.addHandler(_own(file_handler, level, formatter))

    logger.debug("Logging configured.")
    return logger
