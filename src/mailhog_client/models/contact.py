"""Address value objects.

A ``ContactCollection`` maps to and from the comma-delimited address string
MailHog uses for recipient lists. The mapping is bidirectional: rendering a
collection with ``to_string`` and parsing it back yields an equal collection.
Addresses that contain the delimiter cannot survive that round trip and are
rejected instead of being split in two.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from email.utils import formataddr, getaddresses, parseaddr, quote

from pydantic import BaseModel, ConfigDict, Field, RootModel

from mailhog_client.exceptions import ContactParseError

DELIMITER = ","


class Contact(BaseModel):
    """An email address with an optional display name."""

    model_config = ConfigDict(frozen=True)

    email_address: str = Field(description="Bare email address")
    name: str | None = Field(default=None, description="Display name, if any")

    @classmethod
    def from_string(cls, value: str) -> Contact:
        """Parse ``addr`` or ``Name <addr>`` into a Contact.

        Raises:
            ContactParseError: If no address can be found in ``value``.
        """
        name, address = parseaddr(value.strip())
        if not address:
            raise ContactParseError(f"Unable to parse contact from {value!r}")
        return cls(email_address=address, name=name or None)

    def matches(self, address: str) -> bool:
        return self.email_address.lower() == address.strip().lower()

    def __str__(self) -> str:
        if not self.name:
            return self.email_address
        if self.name.isascii():
            return formataddr((self.name, self.email_address))
        # formataddr would RFC 2047 encode the name; parseaddr does not decode it.
        return f'"{quote(self.name)}" <{self.email_address}>'


class ContactCollection(RootModel[tuple[Contact, ...]]):
    """Ordered, immutable sequence of contacts."""

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_string(cls, value: str) -> ContactCollection:
        """Parse a comma-separated address string. Empty input gives an empty collection.

        Raises:
            ContactParseError: If an entry has no address, or its name or
                address contains the list delimiter.
        """
        if not value or not value.strip():
            return cls(())
        contacts = []
        for name, address in getaddresses([value]):
            if not address:
                raise ContactParseError(f"Unable to parse contacts from {value!r}")
            if DELIMITER in name or DELIMITER in address:
                raise ContactParseError(
                    f"Contact {name!r} <{address}> contains the list delimiter {DELIMITER!r}"
                )
            contacts.append(Contact(email_address=address, name=name or None))
        return cls(tuple(contacts))

    @classmethod
    def from_addresses(cls, addresses: Iterable[str]) -> ContactCollection:
        """Build a collection from individual address strings.

        Raises:
            ContactParseError: If an address contains the list delimiter.
        """
        addresses = list(addresses)
        for address in addresses:
            if DELIMITER in address:
                raise ContactParseError(
                    f"Address {address!r} contains the list delimiter {DELIMITER!r}"
                )
        return cls.from_string(DELIMITER.join(addresses))

    def to_string(self) -> str:
        """Render the collection in the form accepted by ``from_string``.

        Raises:
            ContactParseError: If a rendered contact contains the list delimiter.
        """
        rendered = [str(contact) for contact in self.root]
        for item in rendered:
            if DELIMITER in item:
                raise ContactParseError(
                    f"Contact {item!r} contains the list delimiter {DELIMITER!r}"
                )
        return DELIMITER.join(rendered)

    def __iter__(self) -> Iterator[Contact]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __getitem__(self, index: int) -> Contact:
        return self.root[index]

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Contact):
            return item in self.root
        if isinstance(item, str):
            return any(contact.matches(item) for contact in self.root)
        return False
