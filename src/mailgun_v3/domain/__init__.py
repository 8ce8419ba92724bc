"""Domain layer - pure business logic with no I/O or framework dependencies.

Contains the value objects that describe a Mailgun request and the error
taxonomy shared by every adapter.

Contents:
    * :mod:`.address` - Email address value object and parser
    * :mod:`.credentials` - API key, base URL, and sending domain
    * :mod:`.message` - Outbound message model
    * :mod:`.enums` - Domain enumerations (OutputFormat, Region, ClickTracking)
    * :mod:`.errors` - Domain exception types
"""

from __future__ import annotations

from .address import EmailAddress, is_valid_address, is_valid_display_name, parse_address
from .credentials import MAILGUN_DEFAULT_API, Credentials
from .enums import ClickTracking, OutputFormat, Region
from .errors import (
    ApiError,
    ConfigurationError,
    InvalidAddressError,
    InvalidCredentialsError,
    InvalidMessageError,
    MailgunError,
    MailgunTimeoutError,
    PayloadError,
    TransportError,
)
from .message import MAX_TAGS, Attachment, Message, MessageBody, SendOptions, Template

__all__ = [
    # Address
    "EmailAddress",
    "is_valid_address",
    "is_valid_display_name",
    "parse_address",
    # Credentials
    "MAILGUN_DEFAULT_API",
    "Credentials",
    # Message
    "MAX_TAGS",
    "Attachment",
    "Message",
    "MessageBody",
    "SendOptions",
    "Template",
    # Enums
    "ClickTracking",
    "OutputFormat",
    "Region",
    # Errors
    "ApiError",
    "ConfigurationError",
    "InvalidAddressError",
    "InvalidCredentialsError",
    "InvalidMessageError",
    "MailgunError",
    "MailgunTimeoutError",
    "PayloadError",
    "TransportError",
]
