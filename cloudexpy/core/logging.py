"""Logging utilities for cloudexpy modules."""

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger that automatically inherits from root logger.

    This ensures that loggers work with basicConfig() without needing
    explicit setup_logging() calls. The logger will:
    - Propagate to root logger (default behavior)
    - Only set a default level if root logger has no handlers

    Args:
        name: Logger name (e.g. 'cloudexpy.upload.chunk')

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.propagate = True

    # basicConfig() not called yet
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logger.setLevel(logging.WARNING)

    return logger


def redact(params: dict) -> dict:
    """Return a copy of request parameters safe for log output."""
    hidden = {'signature', 'api_key', 'api_secret', 'secret'}
    return {
        key: ('***' if str(key) in hidden else value)
        for key, value in params.items()
    }
