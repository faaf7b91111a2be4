"""Render the latest email of a mailbox as a single web page."""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from inboxview.application.ports.email_source import LatestEmailSource
from inboxview.domain.errors import MessageNotFoundError
from inboxview.infrastructure.email.html_body import decode_html, extract_html
from inboxview.infrastructure.email.metadata_panel import build_plain_summary, insert_metadata_panel

NO_MESSAGES_TEXT = "No messages in inbox"
MESSAGE_NOT_FOUND_TEXT = "No messages found"


@dataclass(frozen=True)
class RenderedPage:
    content: str
    # False for the sentinel and the plain-text summary
    is_html: bool


class RenderLatestEmailUseCase:
    """Fetch, extract and decorate the most recent message.

    Flow:
    1. Fetch the highest-numbered message (envelope + TEXT section)
    2. Locate the HTML document inside the raw body and trim it
    3. Decode quoted-printable (manual fallback on failure)
    4. Splice the From / Subject / Date panel into the document

    Messages without an HTML part degrade to a plain-text summary.
    Nothing is cached: every call goes back to the mail server.
    """

    def __init__(self, source: LatestEmailSource) -> None:
        self.source = source

    def run(self) -> RenderedPage:
        try:
            latest = self.source.fetch_latest()
        except MessageNotFoundError as e:
            logger.warning(f"Latest message disappeared: {e}")
            return RenderedPage(content=MESSAGE_NOT_FOUND_TEXT, is_html=False)

        if latest is None:
            logger.info("Mailbox is empty")
            return RenderedPage(content=NO_MESSAGES_TEXT, is_html=False)

        envelope = latest.envelope
        html = extract_html(latest.body_text)
        if html is None:
            logger.info(f"Message {latest.seq} has no HTML part, using plain-text summary")
            return RenderedPage(content=build_plain_summary(envelope), is_html=False)

        decoded = decode_html(html)
        logger.debug(f"Message {latest.seq}: extracted {len(html)} chars, decoded to {len(decoded)}")
        return RenderedPage(content=insert_metadata_panel(decoded, envelope), is_html=True)
