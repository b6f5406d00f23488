"""Helpers for mapping MailHog API payloads into internal models."""

from __future__ import annotations

from copy import deepcopy
from typing import Any

from mailhog_client.models import Contact, ContactCollection, Headers, Message


def _address_list(payload: dict[str, Any], key: str) -> list[str]:
    value = payload.get(key) or []
    if isinstance(value, str):
        return [value]
    return [str(x) for x in value]


def message_from_mailhog_response(payload: dict[str, Any]) -> Message:
    """Convert a MailHog message record to a Message.

    Headers are always left empty; header data in the payload is ignored.

    Args:
        payload: Decoded message record, with the body already attached.

    Returns:
        Message: Immutable message model.

    Raises:
        ContactParseError: If an address cannot be parsed or contains a comma.
    """

    attachments = payload.get("attachments") or []
    if not isinstance(attachments, (list, tuple)):
        attachments = []

    return Message(
        id=str(payload.get("id") or ""),
        sender=Contact.from_string(str(payload.get("sender_message") or "")),
        recipients=ContactCollection.from_addresses(_address_list(payload, "recipients_message_to")),
        cc=ContactCollection.from_addresses(_address_list(payload, "recipients_message_cc")),
        bcc=ContactCollection.from_addresses(_address_list(payload, "recipients_message_bcc")),
        subject=str(payload.get("subject") or ""),
        body=str(payload.get("body") or ""),
        attachments=tuple(deepcopy(a) for a in attachments),
        headers=Headers({}),
    )


class MessageFactory:
    """Builds Message instances from MailHog responses."""

    @staticmethod
    def from_mailhog_response(payload: dict[str, Any]) -> Message:
        return message_from_mailhog_response(payload)
