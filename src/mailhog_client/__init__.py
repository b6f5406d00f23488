"""MailHog client - test-inbox access for automated test suites.

This package provides a client for listing, filtering, deleting and
releasing email messages captured by a MailHog server.
"""

__version__ = "0.1.0"

from mailhog_client.config import Settings, get_settings
from mailhog_client.exceptions import (
    ContactParseError,
    MailhogClientError,
    MessageEncodingError,
    NoSuchMessageError,
)
from mailhog_client.mailhog import MailhogClient, MessageFactory, MessageIterator
from mailhog_client.models import Contact, ContactCollection, Headers, Message

__all__ = [
    "Contact",
    "ContactCollection",
    "ContactParseError",
    "Headers",
    "MailhogClient",
    "MailhogClientError",
    "Message",
    "MessageEncodingError",
    "MessageFactory",
    "MessageIterator",
    "NoSuchMessageError",
    "Settings",
    "get_settings",
    "__version__",
]
