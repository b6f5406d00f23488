"""Custom exceptions for the MailHog client."""

from __future__ import annotations


class MailhogClientError(Exception):
    """Base exception for all MailHog client errors."""


class NoSuchMessageError(MailhogClientError, LookupError):
    """Exception raised when a requested message does not exist."""

    def __init__(self, message: str, message_id: str | None = None) -> None:
        super().__init__(message)
        self.message_id = message_id

    @classmethod
    def for_message_id(cls, message_id: str) -> NoSuchMessageError:
        return cls(f"No message found with ID {message_id}", message_id=message_id)


class MessageEncodingError(MailhogClientError, RuntimeError):
    """Exception raised when a request payload cannot be serialized."""


class ContactParseError(MailhogClientError, ValueError):
    """Exception raised when an address cannot be mapped to a contact."""
