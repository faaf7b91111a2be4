# =============================================================================
# Pytest Configuration and Fixtures
# =============================================================================
# Shared fixtures for the inboxview test suite. No test touches the network:
# IMAP goes through FakeImap, HTTP through FastAPI's TestClient.
# =============================================================================

import imaplib
import json
import os
from datetime import datetime, timezone

import pytest

from inboxview.application.ports.email_source import LatestEmailSource
from inboxview.domain import EmailAddress, EmailEnvelope, LatestEmail
from inboxview.infrastructure.settings import Settings

SAMPLE_HEADERS = (
    b"From: Jane Doe <jane@example.com>\r\n"
    b"Subject: Quarterly report\r\n"
    b"Date: Mon, 15 Jan 2024 10:30:00 +0000\r\n"
    b"\r\n"
)

SAMPLE_BODY = (
    b"--b1\r\n"
    b"Content-Type: text/html; charset=utf-8\r\n"
    b"Content-Transfer-Encoding: quoted-printable\r\n"
    b"\r\n"
    b"<!DOCTYPE html>\r\n"
    b"<html><body style=3D\"margin:0\"><p>Numbers are=20in</p></body></html>\r\n"
    b"--b1--\r\n"
)


def make_fetch_data(seq, headers=SAMPLE_HEADERS, body=SAMPLE_BODY):
    """Shape of imaplib's FETCH response for the header + TEXT sections."""
    return [
        (f"{seq} (BODY[HEADER.FIELDS (FROM SUBJECT DATE)] {{{len(headers)}}}".encode(), headers),
        (f" BODY[TEXT] {{{len(body)}}}".encode(), body),
        b")",
    ]


class FakeImap:
    """Stands in for imaplib.IMAP4_SSL; calling it 'connects'."""

    def __init__(self):
        self.count = 3
        self.fetch_data = make_fetch_data(3)
        self.connect_error = None
        self.login_error = None
        self.select_response = None
        self.fetch_response = None
        self.fetch_error = None
        self.calls = []
        self.logged_out = False

    def __call__(self, host, port, timeout=None):
        self.calls.append(("connect", host, port, timeout))
        if self.connect_error:
            raise self.connect_error
        return self

    def login(self, user, password):
        self.calls.append(("login", user, password))
        if self.login_error:
            raise self.login_error
        return "OK", [b"LOGIN completed"]

    def select(self, mailbox="INBOX", readonly=False):
        self.calls.append(("select", mailbox, readonly))
        if self.select_response:
            return self.select_response
        return "OK", [str(self.count).encode()]

    def fetch(self, message_set, message_parts):
        self.calls.append(("fetch", message_set, message_parts))
        if self.fetch_error:
            raise self.fetch_error
        if self.fetch_response:
            return self.fetch_response
        return "OK", self.fetch_data

    def logout(self):
        self.logged_out = True
        return "BYE", [b"LOGOUT received"]

    def call_names(self):
        return [c[0] for c in self.calls]


class FakeSource(LatestEmailSource):
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = 0

    def fetch_latest(self):
        self.calls += 1
        if self.error:
            raise self.error
        return self.result


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's INBOXVIEW_* / LOG_LEVEL variables out of the tests."""
    for key in list(os.environ):
        if key.upper().startswith("INBOXVIEW_") or key.upper() == "LOG_LEVEL":
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def config_data():
    return {
        "imap_server": "imap.example.com:993",
        "email": "me@example.com",
        "password": "s3cret",
        "listen_port": "8080",
    }


@pytest.fixture
def write_config(tmp_path):
    """Write a settings dict (or raw text) to a file and return its path."""

    def _write(data, name="config.json"):
        path = tmp_path / name
        path.write_text(data if isinstance(data, str) else json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def settings(config_data):
    return Settings(**config_data)


@pytest.fixture
def fake_imap(monkeypatch):
    fake = FakeImap()
    monkeypatch.setattr(imaplib, "IMAP4_SSL", fake)
    return fake


@pytest.fixture
def sample_envelope():
    return EmailEnvelope(
        sender=EmailAddress(mailbox="jane", host="example.com", name="Jane Doe"),
        subject="Quarterly report",
        date=datetime(2024, 1, 15, 10, 30, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def sample_html():
    return (
        "<!DOCTYPE html>\n"
        "<html lang=\"en\">\n"
        "<head><title>Report</title></head>\n"
        "<body style=\"x\">\n"
        "<p>Numbers are in.</p>\n"
        "</body>\n"
        "</html>"
    )


@pytest.fixture
def make_latest(sample_envelope):
    def _make(body_text, seq=7, envelope=None):
        return LatestEmail(seq=seq, envelope=envelope or sample_envelope, body_text=body_text)

    return _make


@pytest.fixture
def fake_source():
    """Factory for FakeSource(result=..., error=...)."""
    return FakeSource
