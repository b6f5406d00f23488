"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import json
import math
from typing import Any

import httpx
import pytest


def _make_record(
    message_id: str,
    *,
    sender: str = "noreply@example.com",
    to: list[str] | None = None,
    cc: list[str] | None = None,
    bcc: list[str] | None = None,
    subject: str = "Hello",
    plain: str | None = "Hello there",
    html: str | None = "<p>Hello there</p>",
    attachments: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Build a message record the way the fake inbox stores it."""
    formats: dict[str, Any] = {}
    if plain is not None:
        formats["plain"] = {}
    if html is not None:
        formats["html"] = {}
    return {
        "id": message_id,
        "sender_message": sender,
        "recipients_message_to": to if to is not None else ["user@example.com"],
        "recipients_message_cc": cc or [],
        "recipients_message_bcc": bcc or [],
        "subject": subject,
        "attachments": attachments or [],
        "formats": formats,
        "_plain": plain,
        "_html": html,
    }


class FakeMailhog:
    """In-memory MailHog API served through httpx.MockTransport."""

    def __init__(self, page_size: int = 2) -> None:
        self.page_size = page_size
        self.messages: list[dict[str, Any]] = []
        self.requests: list[httpx.Request] = []
        self.released: list[tuple[str, dict[str, Any]]] = []
        self.failing_paths: set[str] = set()
        self.overrides: dict[str, tuple[int, str]] = {}

    def add(self, record: dict[str, Any]) -> None:
        self.messages.append(record)

    def requested_paths(self, method: str = "GET") -> list[str]:
        return [str(r.url.raw_path, "ascii") for r in self.requests if r.method == method]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        assert path.startswith("/api/messages/")
        rest = path[len("/api/messages/") :]
        if path in self.failing_paths:
            return httpx.Response(500)
        if path in self.overrides:
            status, text = self.overrides[path]
            return httpx.Response(status, text=text)

        if request.method == "DELETE":
            if rest:
                self.messages = [m for m in self.messages if m["id"] != rest]
            else:
                self.messages = []
            return httpx.Response(200)

        if request.method == "POST" and rest.endswith("/release"):
            self.released.append((rest[: -len("/release")], json.loads(request.content)))
            return httpx.Response(200)

        if not rest:
            return self._page(int(request.url.params.get("page", "0")))

        if "." in rest:
            message_id, fmt = rest.rsplit(".", 1)
            record = self._find(message_id)
            if record is None:
                return httpx.Response(404)
            if fmt in ("plain", "html"):
                return httpx.Response(200, text=record[f"_{fmt}"] + "\r\n")
            return httpx.Response(200, json={"data": self._public(record)})

        record = self._find(rest)
        if record is None:
            return httpx.Response(200, text="null")
        return httpx.Response(200, json={**self._public(record), "body": record["_plain"]})

    def _page(self, page: int) -> httpx.Response:
        pages_total = math.ceil(len(self.messages) / self.page_size)
        start = page * self.page_size
        data = [{"id": m["id"]} for m in self.messages[start : start + self.page_size]]
        return httpx.Response(200, json={"data": data, "meta": {"pages_total": pages_total}})

    def _find(self, message_id: str) -> dict[str, Any] | None:
        return next((m for m in self.messages if m["id"] == message_id), None)

    @staticmethod
    def _public(record: dict[str, Any]) -> dict[str, Any]:
        return {k: v for k, v in record.items() if not k.startswith("_")}


@pytest.fixture
def make_record():
    """Provide the message record builder."""
    return _make_record


@pytest.fixture
def fake_mailhog() -> FakeMailhog:
    """Provide an empty fake MailHog server."""
    return FakeMailhog()


@pytest.fixture
def mock_settings():
    """Provide settings pointing at the fake server."""
    from mailhog_client.config import Settings

    return Settings(base_url="http://mailhog.test:8025/", timeout=5.0)


@pytest.fixture
def client(fake_mailhog: FakeMailhog, mock_settings):
    """Provide a client wired to the fake server."""
    from mailhog_client.mailhog.client import MailhogClient

    http_client = httpx.Client(transport=httpx.MockTransport(fake_mailhog.handler))
    client = MailhogClient(http_client=http_client, settings=mock_settings)
    yield client
    http_client.close()


@pytest.fixture
def sample_record() -> dict:
    """Provide a decoded message record with its body attached."""
    return {
        "id": 42,
        "sender_message": "Sender Name <sender@example.com>",
        "recipients_message_to": ["a@x.com", "b@y.com"],
        "recipients_message_cc": ["cc@example.com"],
        "recipients_message_bcc": [],
        "subject": "Welcome",
        "body": "Thanks for signing up",
        "attachments": [{"filename": "invoice.pdf", "mime_type": "application/pdf"}],
        "headers": {"X-Mailer": ["app"]},
    }
