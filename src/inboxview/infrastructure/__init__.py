# src/inboxview/infrastructure/__init__.py
"""Infrastructure layer - configuration, logging and the IMAP adapter."""

from inboxview.infrastructure.logging_setup import configure_logging
from inboxview.infrastructure.settings import Settings, load_settings

__all__ = [
    # Settings
    "Settings",
    "load_settings",
    # Logging
    "configure_logging",
]
