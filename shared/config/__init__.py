"""Shared configuration base classes.

Provides the logging and environment settings every runnable component of the
dashboard shares, so service settings only declare what is specific to them.
"""

from pydantic_settings import BaseSettings


class BaseLoggingConfig(BaseSettings):
    """Common logging configuration."""

    app_log_level: str = "INFO"
    app_log_redaction_patterns: list[str] = [
        "password",
        "token",
        "secret",
        "authorization",
        "cookie",
    ]
    app_environment: str = "production"


class BaseServiceConfig(BaseLoggingConfig):
    """Base configuration for a runnable service.

    Services should inherit from this and add their own specific settings.
    The service_name should be overridden by each service.
    """

    service_name: str = "unknown"  # Should be overridden by service


__all__ = ["BaseLoggingConfig", "BaseServiceConfig"]
