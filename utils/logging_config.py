"""
Logging setup for command-line entry points.

Library modules only create module loggers; handlers are installed here.
"""
import logging
import os
from typing import Optional

DEFAULT_FORMAT = '%(asctime)s %(levelname)s [%(name)s] %(message)s'


def setup_logging(level: Optional[str] = None, fmt: str = DEFAULT_FORMAT) -> logging.Logger:
    """
    Configure root logging.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR); falls back to
            the LOG_LEVEL environment variable, then INFO
        fmt: Log record format

    Returns:
        The root logger
    """
    if level is None:
        level = os.getenv('LOG_LEVEL', 'INFO')

    numeric_level = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")

    logging.basicConfig(level=numeric_level, format=fmt, force=True)
    return logging.getLogger()
