from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class EmailAddress:
    mailbox: str
    host: str
    name: Optional[str] = None

    @property
    def address(self) -> str:
        if not self.host:
            return self.mailbox
        return f"{self.mailbox}@{self.host}"

    @property
    def display(self) -> str:
        """'Name <box@host>' when a display name exists, else 'box@host'."""
        if self.name:
            return f"{self.name} <{self.address}>"
        return self.address


@dataclass(frozen=True)
class EmailEnvelope:
    sender: Optional[EmailAddress]
    subject: str
    date: Optional[datetime]

    @property
    def sender_display(self) -> str:
        return self.sender.display if self.sender else ""

    @property
    def formatted_date(self) -> str:
        return self.date.strftime(DATE_FORMAT) if self.date else ""


@dataclass(frozen=True)
class LatestEmail:
    # sequence number of the message in the selected mailbox
    seq: int
    envelope: EmailEnvelope
    body_text: str
