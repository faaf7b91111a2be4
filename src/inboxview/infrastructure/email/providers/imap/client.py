from __future__ import annotations
import imaplib
from typing import Optional

from loguru import logger

from inboxview.application.ports.email_source import LatestEmailSource
from inboxview.domain.entities.email_envelope import LatestEmail
from inboxview.domain.errors import (
    AuthenticationFailureError,
    ConnectionFailureError,
    FetchFailureError,
    MailboxSelectFailureError,
    MessageNotFoundError,
)
from inboxview.infrastructure.email.providers.imap.mapper import headers_to_envelope
from inboxview.infrastructure.settings import Settings

# PEEK so serving the page does not mark the message \Seen
FETCH_ITEMS = "(BODY.PEEK[HEADER.FIELDS (FROM SUBJECT DATE)] BODY.PEEK[TEXT])"


def _detail(data) -> str:
    if data and isinstance(data[0], bytes):
        return data[0].decode("utf-8", errors="replace")
    return str(data)


def split_fetch_response(data: list) -> tuple[bytes, bytes]:
    """Separate the header section from the TEXT section of a FETCH response."""
    headers = b""
    body = b""
    for item in data or []:
        if not isinstance(item, tuple) or len(item) < 2 or not isinstance(item[1], (bytes, bytearray)):
            continue
        meta = item[0].upper() if isinstance(item[0], bytes) else b""
        if b"HEADER" in meta:
            headers += bytes(item[1])
        elif b"TEXT" in meta:
            body += bytes(item[1])
    return headers, body


class ImapLatestEmailSource(LatestEmailSource):
    """Reads the newest message of one mailbox over IMAP4 SSL.

    One session per call: connect, login, select, fetch, logout. Nothing is retried.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def _connect(self) -> imaplib.IMAP4_SSL:
        host, port = self.settings.imap_host, self.settings.imap_port
        logger.debug(f"Connecting to {host}:{port}")
        try:
            return imaplib.IMAP4_SSL(host, port, timeout=self.settings.imap_timeout)
        except (OSError, imaplib.IMAP4.error) as e:
            raise ConnectionFailureError(f"failed to connect to IMAP server: {e}") from e

    def _login(self, conn: imaplib.IMAP4_SSL) -> None:
        try:
            conn.login(self.settings.email, self.settings.password.get_secret_value())
        except (OSError, imaplib.IMAP4.error) as e:
            raise AuthenticationFailureError(f"failed to login: {e}") from e

    def _select(self, conn: imaplib.IMAP4_SSL) -> int:
        """Select the mailbox read-only and return its message count."""
        mailbox = self.settings.mailbox
        try:
            typ, data = conn.select(mailbox, readonly=True)
        except (OSError, imaplib.IMAP4.error) as e:
            raise MailboxSelectFailureError(f"failed to select {mailbox}: {e}") from e
        if typ != "OK":
            raise MailboxSelectFailureError(f"failed to select {mailbox}: {_detail(data)}")

        try:
            return int(data[0])
        except (TypeError, ValueError, IndexError) as e:
            raise MailboxSelectFailureError(f"failed to select {mailbox}: bad EXISTS count {data!r}") from e

    def _fetch(self, conn: imaplib.IMAP4_SSL, seq: int) -> LatestEmail:
        try:
            typ, data = conn.fetch(str(seq), FETCH_ITEMS)
        except (OSError, imaplib.IMAP4.error) as e:
            raise FetchFailureError(f"failed to fetch message: {e}") from e
        if typ != "OK":
            raise FetchFailureError(f"failed to fetch message: {_detail(data)}")

        headers, body = split_fetch_response(data)
        if not headers and not body:
            # expunged between SELECT and FETCH
            raise MessageNotFoundError(f"FETCH {seq} returned no message data")

        return LatestEmail(
            seq=seq,
            envelope=headers_to_envelope(headers),
            body_text=body.decode("utf-8", errors="replace"),
        )

    def _release(self, conn: imaplib.IMAP4_SSL) -> None:
        try:
            conn.logout()
        except (OSError, imaplib.IMAP4.error) as e:
            logger.debug(f"IMAP logout failed: {e}")

    def fetch_latest(self) -> Optional[LatestEmail]:
        conn = self._connect()
        try:
            self._login(conn)
            count = self._select(conn)
            logger.info(f"{self.settings.mailbox} holds {count} messages")
            if count == 0:
                return None
            return self._fetch(conn, count)
        finally:
            self._release(conn)
