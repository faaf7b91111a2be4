"""Error kinds raised across the fetch / extract / serve pipeline."""


class InboxViewError(Exception):
    """Base class for all inboxview errors."""


class ConfigUnavailableError(InboxViewError):
    """The settings file is missing, unreadable or malformed. Fatal at startup."""


class MailRetrievalError(InboxViewError):
    """A request-scoped failure while talking to the mail server."""


class ConnectionFailureError(MailRetrievalError):
    pass


class AuthenticationFailureError(MailRetrievalError):
    pass


class MailboxSelectFailureError(MailRetrievalError):
    pass


class FetchFailureError(MailRetrievalError):
    pass


class DecodeFailureError(InboxViewError):
    """Quoted-printable decoding failed; recovered by the manual fallback."""


class MessageNotFoundError(InboxViewError):
    """FETCH returned no data for a sequence number SELECT reported."""
