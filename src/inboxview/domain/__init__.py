"""Domain entities and errors."""

from inboxview.domain.entities.email_envelope import EmailAddress, EmailEnvelope, LatestEmail
from inboxview.domain.errors import (
    AuthenticationFailureError,
    ConfigUnavailableError,
    ConnectionFailureError,
    DecodeFailureError,
    FetchFailureError,
    InboxViewError,
    MailboxSelectFailureError,
    MailRetrievalError,
    MessageNotFoundError,
)

__all__ = [
    # Entities
    "EmailAddress",
    "EmailEnvelope",
    "LatestEmail",
    # Errors
    "InboxViewError",
    "ConfigUnavailableError",
    "MailRetrievalError",
    "ConnectionFailureError",
    "AuthenticationFailureError",
    "MailboxSelectFailureError",
    "FetchFailureError",
    "DecodeFailureError",
    "MessageNotFoundError",
]
