"""Message specifications.

A specification is any object with an ``is_satisfied_by(message)`` method.
``MailhogClient.find_messages_satisfying`` keeps the messages a specification
is satisfied by. The built-in specifications below can be combined with
``&``, ``|`` and ``~``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Protocol, runtime_checkable

from mailhog_client.models import Contact, Message


@runtime_checkable
class Specification(Protocol):
    def is_satisfied_by(self, message: Message) -> bool: ...


class BaseSpecification(ABC):
    """Base class for specifications that support composition."""

    @abstractmethod
    def is_satisfied_by(self, message: Message) -> bool:
        raise NotImplementedError

    def __and__(self, other: Specification) -> AndSpecification:
        return AndSpecification(self, other)

    def __or__(self, other: Specification) -> OrSpecification:
        return OrSpecification(self, other)

    def __invert__(self) -> NotSpecification:
        return NotSpecification(self)


def _as_contact(value: Contact | str) -> Contact:
    return value if isinstance(value, Contact) else Contact.from_string(value)


def _contact_matches(expected: Contact, actual: Contact) -> bool:
    if not actual.matches(expected.email_address):
        return False
    # A name is only compared when one was asked for.
    return expected.name is None or expected.name == actual.name


class SenderSpecification(BaseSpecification):
    def __init__(self, sender: Contact | str) -> None:
        self.sender = _as_contact(sender)

    def is_satisfied_by(self, message: Message) -> bool:
        return _contact_matches(self.sender, message.sender)


class RecipientSpecification(BaseSpecification):
    """Satisfied when the contact is among the To, Cc or Bcc recipients."""

    def __init__(self, recipient: Contact | str) -> None:
        self.recipient = _as_contact(recipient)

    def is_satisfied_by(self, message: Message) -> bool:
        return any(
            _contact_matches(self.recipient, contact)
            for collection in (message.recipients, message.cc, message.bcc)
            for contact in collection
        )


class SubjectSpecification(BaseSpecification):
    def __init__(self, subject: str) -> None:
        self.subject = subject

    def is_satisfied_by(self, message: Message) -> bool:
        return message.subject == self.subject


class BodySpecification(BaseSpecification):
    """Satisfied when the snippet occurs anywhere in the body."""

    def __init__(self, snippet: str) -> None:
        self.snippet = snippet

    def is_satisfied_by(self, message: Message) -> bool:
        return self.snippet in message.body


def _attachment_name(attachment: Any) -> str | None:
    if isinstance(attachment, dict):
        name = attachment.get("filename") or attachment.get("name")
        return str(name) if name is not None else None
    return getattr(attachment, "filename", None)


class AttachmentSpecification(BaseSpecification):
    def __init__(self, filename: str) -> None:
        self.filename = filename

    def is_satisfied_by(self, message: Message) -> bool:
        return any(_attachment_name(a) == self.filename for a in message.attachments)


class HeaderSpecification(BaseSpecification):
    """Satisfied when the header is present, and has ``value`` if one is given."""

    def __init__(self, name: str, value: str | None = None) -> None:
        self.name = name
        self.value = value

    def is_satisfied_by(self, message: Message) -> bool:
        if self.value is None:
            return message.headers.has(self.name)
        return self.value in message.headers.get_all(self.name)


class AndSpecification(BaseSpecification):
    def __init__(self, *specifications: Specification) -> None:
        if not specifications:
            raise ValueError("AndSpecification needs at least one specification")
        self.specifications = specifications

    def is_satisfied_by(self, message: Message) -> bool:
        return all(s.is_satisfied_by(message) for s in self.specifications)


class OrSpecification(BaseSpecification):
    def __init__(self, *specifications: Specification) -> None:
        if not specifications:
            raise ValueError("OrSpecification needs at least one specification")
        self.specifications = specifications

    def is_satisfied_by(self, message: Message) -> bool:
        return any(s.is_satisfied_by(message) for s in self.specifications)


class NotSpecification(BaseSpecification):
    def __init__(self, specification: Specification) -> None:
        self.specification = specification

    def is_satisfied_by(self, message: Message) -> bool:
        return not self.specification.is_satisfied_by(message)
