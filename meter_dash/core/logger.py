from __future__ import annotations

import logging
from typing import Iterable

from shared.constants import Environment
from shared.logging.json import configure_logging as _shared_configure_logging
from shared.logging.logger import get_logger as _shared_get_logger

from .config import settings


class RedactingFilter(logging.Filter):
    """Masks whole log lines whose rendered message mentions a sensitive pattern."""

    def __init__(self, patterns: Iterable[str]):
        super().__init__()
        self.patterns = [p.lower() for p in patterns]

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        msg = record.getMessage().lower()
        if any(p in msg for p in self.patterns):
            record.msg = "[REDACTED SENSITIVE LOG CONTENT]"
            record.args = ()
        return True


_configured = False


def configure_logging():
    global _configured
    if _configured:
        return
    _shared_configure_logging(
        service=settings.service_name,
        level=settings.app_log_level,
        environment=settings.app_environment,
        redaction_patterns=settings.app_log_redaction_patterns,
        json_output=not Environment.is_development(settings.app_environment),
    )
    # Attach redaction filter at root so it applies to all handlers
    root = logging.getLogger()
    for h in root.handlers:
        h.addFilter(RedactingFilter(settings.app_log_redaction_patterns))
    _configured = True


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return _shared_get_logger(name)
