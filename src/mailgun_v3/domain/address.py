"""Email address value object and the minimal RFC 5322 parser.

The parser does not try to be a full RFC 5322 implementation. It accepts
``addr@domain.tld`` and ``Display Name <addr@domain.tld>`` and rejects the
obviously broken shapes.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import InvalidAddressError

_RE_NAME_ADDRESS = re.compile(r"^(.*) <([^>]+)>$")
_RE_DISPLAY_NAME = re.compile(r"^[^<>]+$")
# TODO: replace with a proper RFC 5322 / RFC 6532 address grammar
_RE_ADDRESS = re.compile(r"^[^<> ]+@[^<> ]+\.[^<> ]+$")


@dataclass(frozen=True, slots=True)
class EmailAddress:
    """An email address, with or without a display name.

    Example:
        >>> str(EmailAddress.named("Bob Test", "test@email.com"))
        'Bob Test <test@email.com>'
        >>> str(EmailAddress.address_only("test@email.com"))
        'test@email.com'
    """

    address: str
    name: str | None = None

    @classmethod
    def address_only(cls, address: str) -> EmailAddress:
        return cls(address=address)

    @classmethod
    def named(cls, name: str, address: str) -> EmailAddress:
        return cls(address=address, name=name)

    @property
    def email(self) -> str:
        """The bare address without display name."""
        return self.address

    def __str__(self) -> str:
        if self.name is not None:
            return f"{self.name} <{self.address}>"
        return self.address


def is_valid_display_name(name: str) -> bool:
    """Return True when *name* contains no angle brackets.

    Examples:
        >>> is_valid_display_name("Bob Test")
        True
        >>> is_valid_display_name("<Bob Test>")
        False
    """
    return _RE_DISPLAY_NAME.match(name) is not None


def is_valid_address(address: str) -> bool:
    """Return True for ``local@domain.tld`` shaped strings.

    Examples:
        >>> is_valid_address("test@email.com")
        True
        >>> is_valid_address("@email.com")
        False
    """
    return _RE_ADDRESS.match(address) is not None


def parse_address(text: str) -> EmailAddress:
    """Parse ``addr`` or ``Name <addr>`` into an :class:`EmailAddress`.

    Args:
        text: Raw address as typed by a user or read from configuration.

    Returns:
        Parsed address with optional display name.

    Raises:
        InvalidAddressError: "Invalid display name" when the name contains
            angle brackets, "Invalid email address" when the address part
            is not ``local@domain.tld``.

    Examples:
        >>> parse_address("Bob Test <test@email.com>")
        EmailAddress(address='test@email.com', name='Bob Test')
        >>> parse_address("test")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        InvalidAddressError: Invalid email address
    """
    match = _RE_NAME_ADDRESS.match(text)
    result = EmailAddress.named(match.group(1), match.group(2)) if match else EmailAddress.address_only(text)

    if result.name is not None and not is_valid_display_name(result.name):
        raise InvalidAddressError("Invalid display name")
    if not is_valid_address(result.address):
        raise InvalidAddressError("Invalid email address")
    return result


__all__ = [
    "EmailAddress",
    "is_valid_address",
    "is_valid_display_name",
    "parse_address",
]
