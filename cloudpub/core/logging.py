"""Logging utilities for cloudpub modules."""

import logging
from typing import Optional

ROOT_LOGGER_NAME = 'cloudpub'


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a cloudpub logger that automatically inherits from root logger.

    This ensures that loggers work with basicConfig() without needing
    explicit setup_logging() calls. The logger will:
    - Live under the ``cloudpub`` namespace
    - Propagate to root logger (default behavior)
    - Only set a default level if root logger has no handlers

    Args:
        name: Dotted suffix (e.g. ``upload.chunk``). ``None`` returns
            the package logger itself.

    Returns:
        Configured logger instance
    """
    if not name:
        full_name = ROOT_LOGGER_NAME
    elif name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + '.'):
        full_name = name
    else:
        full_name = f"{ROOT_LOGGER_NAME}.{name}"

    logger = logging.getLogger(full_name)
    logger.propagate = True

    # Only set default level if root logger has no handlers
    # (i.e., basicConfig hasn't been called yet)
    root_logger = logging.getLogger()
    if not root_logger.handlers and logger.level == logging.NOTSET:
        logger.setLevel(logging.WARNING)

    return logger
