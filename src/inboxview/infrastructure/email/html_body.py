"""Locate, trim and decode the HTML document inside a raw TEXT body section."""

from __future__ import annotations

import quopri
import re
from typing import Optional

from loguru import logger

from inboxview.domain.errors import DecodeFailureError

_DOCTYPE_RE = re.compile(r"<!DOCTYPE", re.IGNORECASE)
_HTML_OPEN_RE = re.compile(r"<html\b", re.IGNORECASE)
_HTML_CLOSE_RE = re.compile(r"</html>", re.IGNORECASE)

# soft line break, allowing transport padding between "=" and the line end
_PADDED_SOFT_BREAK_RE = re.compile(rb"=[ \t]+(\r?\n)")
_SOFT_BREAK_RE = re.compile(r"=[ \t]*\r?\n")

# Intentionally incomplete: anything else stays literally in the output.
MANUAL_REPLACEMENTS: tuple[tuple[str, str], ...] = (
    ("=20", " "),
    ("=3D", "="),
    ("=E2=80=99", "'"),
    ("=E2=80=93", "–"),
    ("=E2=80=94", "—"),
)


def truncate_at_last_close(html: str) -> str:
    """Cut everything after the last </html>, keeping the tag itself."""
    last = None
    for last in _HTML_CLOSE_RE.finditer(html):
        pass
    if last is None:
        return html
    return html[: last.end()]


def extract_html(raw: str) -> Optional[str]:
    """Return the HTML document embedded in ``raw``, or None if there is none.

    The document starts at the first doctype marker (or, failing that, the
    first <html tag) and ends at the last </html>, which drops multipart
    terminators and other MIME boilerplate trailing the part.
    """
    if not raw:
        return None

    start = _DOCTYPE_RE.search(raw) or _HTML_OPEN_RE.search(raw)
    if start is None:
        return None

    return truncate_at_last_close(raw[start.start():])


def decode_quoted_printable(text: str) -> str:
    """Quoted-printable decode of ``text`` into a UTF-8 string.

    Stray "=" signs that do not start an escape are kept literally.

    Raises:
        DecodeFailureError: when non-empty input decodes to nothing or the
            decoded bytes are not UTF-8.
    """
    data = _PADDED_SOFT_BREAK_RE.sub(rb"=\1", text.encode("utf-8"))
    decoded = quopri.decodestring(data)
    if data and not decoded:
        raise DecodeFailureError("quoted-printable decode produced no output")

    try:
        return decoded.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeFailureError(f"decoded body is not valid UTF-8: {e}") from e


def manual_unescape(text: str) -> str:
    """Best-effort fallback: drop soft line breaks, replace a few known escapes."""
    text = _SOFT_BREAK_RE.sub("", text)
    for escape, replacement in MANUAL_REPLACEMENTS:
        text = text.replace(escape, replacement)
    return text


def decode_html(html: str) -> str:
    """Decode an extracted document, falling back to manual_unescape."""
    try:
        decoded = decode_quoted_printable(html)
    except DecodeFailureError as e:
        logger.debug(f"Quoted-printable decode failed ({e}), using manual unescape")
        return manual_unescape(html)

    # decoding can expose a different closing boundary
    return truncate_at_last_close(decoded)
