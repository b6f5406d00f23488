"""MailHog API client implementation.

This module provides a synchronous client for the MailHog HTTP API.

Notes:
    Requests are sent one at a time through an ``httpx.Client``. Transport
    errors and non-2xx responses surface as the ``httpx`` exceptions raised
    by the transport; the client does not retry or translate them.
"""

from __future__ import annotations

from types import TracebackType
from typing import Any

import httpx
import structlog
from pydantic_core import PydanticSerializationError

from mailhog_client.config import Settings
from mailhog_client.exceptions import MessageEncodingError, NoSuchMessageError
from mailhog_client.mailhog.pagination import MessageIterator
from mailhog_client.mailhog.parsing import message_from_mailhog_response
from mailhog_client.models import Message, ReleaseRequest
from mailhog_client.specification import Specification

logger = structlog.get_logger()

TEXT_FORMATS = frozenset({"plain", "html"})


class MailhogClient:
    """MailHog API client for inbox operations.

    This client lists, fetches, filters, deletes and releases
    messages captured by a MailHog server.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        http_client: httpx.Client | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize MailHog client.

        Args:
            base_url: MailHog base URL. If None, uses the URL from settings.
            http_client: Transport to send requests with. If None, the client
                creates one and closes it in ``close()``.
            settings: Client settings. If None, uses default settings.
        """
        from mailhog_client.config import get_settings

        self.settings = settings or get_settings()
        self.base_url = (base_url or self.settings.base_url).rstrip("/")
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.Client(timeout=self.settings.timeout)
        logger.info("mailhog_client_initialized", base_url=self.base_url)

    def close(self) -> None:
        if self._owns_http_client:
            self._http.close()

    def __enter__(self) -> MailhogClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def find_all_messages(self) -> MessageIterator:
        """Iterate over every message in the inbox, across all pages.

        Pages and message details are fetched lazily as the iterator is
        consumed. Each call starts a new traversal.

        Returns:
            Iterator of messages in server order.
        """
        return MessageIterator(self._fetch_page, self._load_message)

    def fetch_metadata(self, message_id: str) -> dict[str, Any]:
        """Fetch a message record with its body attached.

        The plain-text body is used when the message has one; otherwise
        the HTML body is used.

        Args:
            message_id: The MailHog message ID.

        Returns:
            Message record dictionary with a ``body`` key.
        """
        record = self.fetch_by_format(message_id, "json")
        formats = record.get("formats") or {}
        body_format = "plain" if "plain" in formats else "html"
        record["body"] = self.fetch_by_format(message_id, body_format)[0]
        return record

    def fetch_by_format(self, message_id: str, format: str) -> Any:
        """Fetch one representation of a message.

        Args:
            message_id: The MailHog message ID.
            format: ``plain``, ``html``, ``json`` or any other format the
                server supports.

        Returns:
            For ``plain`` and ``html``, a one-element list holding the text
            with trailing line breaks removed. For any other format, the
            ``data`` field of the decoded JSON response.
        """
        response = self._request("GET", f"/api/messages/{message_id}.{format}")
        if format in TEXT_FORMATS:
            return [response.text.rstrip("\r\n")]
        return response.json()["data"]

    def find_latest_messages(self, number_of_messages: int) -> list[Message]:
        """Return the most recent messages, oldest first."""
        if number_of_messages <= 0:
            return []
        return list(self.find_all_messages())[-number_of_messages:]

    def find_messages_satisfying(self, specification: Specification) -> list[Message]:
        """Return every message the specification is satisfied by, in server order."""
        return [m for m in self.find_all_messages() if specification.is_satisfied_by(m)]

    def get_last_message(self) -> Message:
        """Return the most recent message.

        Raises:
            NoSuchMessageError: If the inbox is empty.
        """
        messages = self.find_latest_messages(1)
        if not messages:
            raise NoSuchMessageError("No last message found. Inbox empty?")
        return messages[0]

    def get_number_of_messages(self) -> int:
        # Walks every page; MailHog has no cheap count.
        return sum(1 for _ in self.find_all_messages())

    def delete_message(self, message_id: str) -> None:
        logger.info("deleting_message", message_id=message_id)
        self._request("DELETE", f"/api/messages/{message_id}")

    def purge_messages(self) -> None:
        logger.info("purging_messages")
        self._request("DELETE", "/api/messages/")

    def release_message(self, message_id: str, host: str, port: int, email_address: str) -> None:
        """Ask MailHog to forward a message to a real SMTP server.

        Args:
            message_id: The MailHog message ID.
            host: SMTP host to release to.
            port: SMTP port.
            email_address: Recipient address for the released message.

        Raises:
            MessageEncodingError: If the release request cannot be serialized.
        """
        try:
            body = ReleaseRequest(host=host, port=port, email=email_address).to_json()
        except PydanticSerializationError as exc:
            raise MessageEncodingError(
                f"Unable to JSON encode data to release message {message_id}"
            ) from exc

        logger.info("releasing_message", message_id=message_id, host=host, port=port)
        self._request(
            "POST",
            f"/api/messages/{message_id}/release",
            content=body,
            headers={"Content-Type": "application/json"},
        )

    def get_message_by_id(self, message_id: str) -> Message:
        """Get a specific message by ID.

        Args:
            message_id: The MailHog message ID.

        Returns:
            The message.

        Raises:
            NoSuchMessageError: If the server has no message with this ID.
        """
        response = self._request("GET", f"/api/messages/{message_id}")
        payload = response.json() if response.content.strip() else None
        if payload is None:
            raise NoSuchMessageError.for_message_id(message_id)
        return message_from_mailhog_response(payload)

    def _fetch_page(self, page: int) -> dict[str, Any]:
        return self._request("GET", "/api/messages/", params={"page": page}).json()

    def _load_message(self, message_id: str) -> Message:
        return message_from_mailhog_response(self.fetch_metadata(message_id))

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        url = f"{self.base_url}{path}"
        logger.debug("mailhog_request", method=method, url=url)
        response = self._http.request(method, url, **kwargs)
        response.raise_for_status()
        return response
