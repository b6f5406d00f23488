"""Data models for the MailHog client.

Messages and their parts are immutable Pydantic models built from MailHog API
payloads.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator

from mailhog_client.models.contact import Contact, ContactCollection


class Headers(RootModel[dict[str, tuple[str, ...]]]):
    """Header name to header values. Name lookups are case-insensitive.

    The model is frozen but ``root`` is a plain dict; treat it as read-only.
    """

    model_config = ConfigDict(frozen=True)

    def get_all(self, name: str) -> tuple[str, ...]:
        wanted = name.lower()
        for key, values in self.root.items():
            if key.lower() == wanted:
                return values
        return ()

    def get(self, name: str, default: str | None = None) -> str | None:
        values = self.get_all(name)
        return values[0] if values else default

    def has(self, name: str) -> bool:
        return bool(self.get_all(name))

    def __iter__(self) -> Iterator[str]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)


def _empty_headers() -> Headers:
    return Headers({})


class Message(BaseModel):
    """A captured email message.

    Immutability is shallow: fields cannot be reassigned, but attachment
    descriptors are the decoded JSON objects and are not frozen.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Server-assigned message ID")
    sender: Contact = Field(description="Sender")
    recipients: ContactCollection = Field(description="To recipients")
    cc: ContactCollection = Field(description="Cc recipients")
    bcc: ContactCollection = Field(description="Bcc recipients")
    subject: str = Field(default="", description="Subject")
    body: str = Field(default="", description="Plain-text body, or HTML when no plain part exists")
    attachments: tuple[Any, ...] = Field(
        default=(), description="Attachment descriptors as returned by the server"
    )
    headers: Headers = Field(default_factory=_empty_headers, description="Message headers")


class ReleaseRequest(BaseModel):
    """Body of a release request: the SMTP host a message is forwarded to."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    host: str = Field(alias="Host")
    port: str = Field(alias="Port")
    email: str = Field(alias="Email")

    @field_validator("port", mode="before")
    @classmethod
    def _port_as_string(cls, value: Any) -> Any:
        # MailHog expects the port as a string.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


__all__ = [
    "Contact",
    "ContactCollection",
    "Headers",
    "Message",
    "ReleaseRequest",
]
