"""Shared utilities used by the dashboard service."""

from .config import BaseLoggingConfig, BaseServiceConfig
from .constants import Environment

__all__ = [
    "Environment",
    "BaseServiceConfig",
    "BaseLoggingConfig",
]
