"""inboxview - serve the latest email in an IMAP inbox as a web page."""

__version__ = "0.1.0"
