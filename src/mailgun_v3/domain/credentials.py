"""Mailgun private API key, API base URL, and sending domain."""

from __future__ import annotations

from dataclasses import dataclass, field

from .enums import Region
from .errors import InvalidCredentialsError

#: Default API base for the US region.
MAILGUN_DEFAULT_API = Region.US.api_base

#: Shortest API key Mailgun has ever issued (``key-`` plus 32 hex chars is 36).
MIN_API_KEY_LENGTH = 35


@dataclass(frozen=True, slots=True)
class Credentials:
    """Validated connection settings for one sending domain.

    The shape checks catch swapped arguments and empty values, not every
    malformed URL.

    Example:
        >>> creds = Credentials.create("key-" + "0" * 32, "mg.example.com")
        >>> creds.api_base
        'https://api.mailgun.net/v3'
        >>> "key-" in repr(creds)
        False
    """

    api_base: str
    api_key: str = field(repr=False)
    domain: str

    def __post_init__(self) -> None:
        if not self.api_base.startswith("http"):
            raise InvalidCredentialsError("api_base does not start with http")
        if "." not in self.api_base:
            raise InvalidCredentialsError("api_base does not contain any dots")
        if len(self.api_key) < MIN_API_KEY_LENGTH:
            raise InvalidCredentialsError("api_key is too short")
        if "." not in self.domain:
            raise InvalidCredentialsError("domain does not contain any dots")

    @classmethod
    def create(cls, api_key: str, domain: str, *, region: Region = Region.US) -> Credentials:
        """Build credentials against the public API host of *region*."""
        return cls(api_base=region.api_base, api_key=api_key, domain=domain)

    @classmethod
    def with_base(cls, api_base: str, api_key: str, domain: str) -> Credentials:
        """Build credentials against a custom API base (proxies, mock servers)."""
        return cls(api_base=api_base.rstrip("/"), api_key=api_key, domain=domain)


__all__ = [
    "Credentials",
    "MAILGUN_DEFAULT_API",
    "MIN_API_KEY_LENGTH",
]
