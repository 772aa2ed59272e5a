"""Shared logger utility.

Provides a consistent get_logger function. Falls back to a minimal plain-text
configuration on first use if configure_logging has not run yet.
"""

from __future__ import annotations

import logging

_configured = False


def get_logger(name: str, auto_configure: bool = True) -> logging.Logger:
    """Get a preconfigured structured logger.

    Args:
        name: Logger name (usually dotted component name)
        auto_configure: Whether to apply the fallback configuration on first use

    Returns:
        Configured logger instance
    """
    global _configured

    if auto_configure and not _configured:
        _configure_minimal_logging()
        _configured = True

    logger = logging.getLogger(name)
    logger.propagate = True
    return logger


def _configure_minimal_logging():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def is_configured() -> bool:
    return _configured


def mark_configured():
    """Mark logging as configured (called by shared.logging.json.configure_logging)."""
    global _configured
    _configured = True
