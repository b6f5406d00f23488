"""MailHog API access: client, pagination and payload mapping."""

from mailhog_client.mailhog.client import MailhogClient
from mailhog_client.mailhog.pagination import MessageIterator
from mailhog_client.mailhog.parsing import MessageFactory, message_from_mailhog_response

__all__ = ["MailhogClient", "MessageFactory", "MessageIterator", "message_from_mailhog_response"]
