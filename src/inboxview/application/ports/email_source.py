from __future__ import annotations
from typing import Optional

from inboxview.domain.entities.email_envelope import LatestEmail


class LatestEmailSource:
    def fetch_latest(self) -> Optional[LatestEmail]:
        """Return the highest-numbered message in the mailbox, or None if it is empty.

        Implementations open and release their own session per call and raise a
        ``MailRetrievalError`` subclass on connection, login, select or fetch failure,
        or ``MessageNotFoundError`` when the message vanished before it was fetched.
        """
        raise NotImplementedError
