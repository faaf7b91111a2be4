"""Application layer - ports and use cases."""

from inboxview.application.ports.email_source import LatestEmailSource
from inboxview.application.use_cases.render_latest_email import (
    MESSAGE_NOT_FOUND_TEXT,
    NO_MESSAGES_TEXT,
    RenderedPage,
    RenderLatestEmailUseCase,
)

__all__ = [
    "LatestEmailSource",
    "MESSAGE_NOT_FOUND_TEXT",
    "NO_MESSAGES_TEXT",
    "RenderedPage",
    "RenderLatestEmailUseCase",
]
