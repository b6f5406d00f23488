"""Lazy iteration over the MailHog message list.

MailHog serves the message list in pages. ``MessageIterator`` walks those pages
one at a time and only fetches a message's details when the caller asks for
that message, so a caller that stops early never requests the pages it did not
read.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Iterator
from typing import Any

import structlog

from mailhog_client.models import Message

logger = structlog.get_logger()

PageFetcher = Callable[[int], dict[str, Any]]
MessageLoader = Callable[[str], Message]


class MessageIterator(Iterator[Message]):
    """Cursor over every message in the inbox, in server order.

    Args:
        fetch_page: Returns the decoded list response for a zero-based page.
        load_message: Returns the full message for a message ID.
    """

    def __init__(self, fetch_page: PageFetcher, load_message: MessageLoader) -> None:
        self._fetch_page = fetch_page
        self._load_message = load_message
        self.current_page = 0
        self.total_pages: int | None = None
        self._pending: deque[dict[str, Any]] = deque()

    @property
    def exhausted(self) -> bool:
        return (
            not self._pending
            and self.total_pages is not None
            and self.current_page >= self.total_pages
        )

    def __iter__(self) -> MessageIterator:
        return self

    def __next__(self) -> Message:
        while not self._pending:
            if self.exhausted:
                raise StopIteration
            self._load_next_page()

        summary = self._pending.popleft()
        return self._load_message(str(summary["id"]))

    def _load_next_page(self) -> None:
        page = self._fetch_page(self.current_page)
        data = page.get("data") or []
        self.total_pages = int((page.get("meta") or {}).get("pages_total") or 0)
        logger.debug(
            "messages_page_fetched",
            page=self.current_page,
            pages_total=self.total_pages,
            message_count=len(data),
        )
        self._pending.extend(data)
        self.current_page += 1
