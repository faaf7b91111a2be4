from __future__ import annotations
from datetime import datetime
from email import policy
from email.message import EmailMessage as ParsedMessage
from email.parser import BytesParser
from typing import Optional

from inboxview.domain.entities.email_envelope import EmailAddress, EmailEnvelope


def _first_sender(em: ParsedMessage) -> Optional[EmailAddress]:
    header = em.get("From")
    if header is None:
        return None
    addresses = getattr(header, "addresses", ())
    if not addresses:
        return None
    addr = addresses[0]
    return EmailAddress(
        mailbox=addr.username,
        host=addr.domain,
        name=addr.display_name or None,
    )


def _parse_date(em: ParsedMessage) -> Optional[datetime]:
    # Date parsing can be messy; an unparseable header renders as empty
    try:
        header = em.get("Date")
        return header.datetime if header else None
    except (TypeError, ValueError, AttributeError):
        return None


def headers_to_envelope(header_bytes: bytes) -> EmailEnvelope:
    """Build the envelope from a HEADER.FIELDS (FROM SUBJECT DATE) section."""
    em = BytesParser(policy=policy.default).parsebytes(header_bytes, headersonly=True)
    return EmailEnvelope(
        sender=_first_sender(em),
        subject=str(em.get("Subject") or "").strip(),
        date=_parse_date(em),
    )
