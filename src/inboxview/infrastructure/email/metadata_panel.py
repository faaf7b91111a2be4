"""From / Subject / Date panel spliced into the rendered email."""

from __future__ import annotations

import html
import re

from inboxview.domain.entities.email_envelope import EmailEnvelope

_BODY_OPEN_RE = re.compile(r"<body\b", re.IGNORECASE)
_HTML_OPEN_RE = re.compile(r"<html\b", re.IGNORECASE)

PANEL_TEMPLATE = """
	<div style="
		background-color: #f5f5f5;
		border: 1px solid #ddd;
		border-radius: 5px;
		padding: 15px;
		margin: 10px;
		font-family: Arial, sans-serif;
		font-size: 14px;
		color: #333;
		box-shadow: 0 2px 4px rgba(0,0,0,0.1);
	">
		<div style="margin-bottom: 5px;"><strong>From:</strong> {sender}</div>
		<div style="margin-bottom: 5px;"><strong>Subject:</strong> {subject}</div>
		<div style="margin-bottom: 0;"><strong>Date:</strong> {date}</div>
	</div>
	"""

PLAIN_SUMMARY_HEADER = "=== Latest Email ===\n\n"


def build_metadata_panel(envelope: EmailEnvelope) -> str:
    return PANEL_TEMPLATE.format(
        sender=html.escape(envelope.sender_display),
        subject=html.escape(envelope.subject),
        date=envelope.formatted_date,
    )


def _end_of_open_tag(document: str, pattern: re.Pattern[str]) -> int:
    """Index just past the '>' closing the first tag matching ``pattern``, or -1."""
    match = pattern.search(document)
    if match is None:
        return -1
    close = document.find(">", match.end())
    if close == -1:
        return -1
    return close + 1


def insert_metadata_panel(document: str, envelope: EmailEnvelope) -> str:
    """Insert exactly one panel after <body ...>, else after <html ...>, else at the top."""
    panel = build_metadata_panel(envelope)

    for pattern in (_BODY_OPEN_RE, _HTML_OPEN_RE):
        insert_at = _end_of_open_tag(document, pattern)
        if insert_at != -1:
            return document[:insert_at] + panel + document[insert_at:]

    return panel + document


def build_plain_summary(envelope: EmailEnvelope) -> str:
    """Text used when the message carries no HTML part."""
    lines = [PLAIN_SUMMARY_HEADER]
    if envelope.sender is not None:
        lines.append(f"From: {envelope.sender_display}\n")
    lines.append(f"Subject: {envelope.subject}\n")
    lines.append(f"Date: {envelope.formatted_date}\n\n")
    return "".join(lines)
