"""Python bindings for Mailgun's v3 JSON API.

Build a :class:`Message`, pair it with :class:`Credentials` and a sender, and
hand it to :class:`MailgunClient`:

    >>> from mailgun_v3 import EmailAddress, Message, MessageBody
    >>> msg = Message(
    ...     to=(EmailAddress.address_only("bob@example.com"),),
    ...     subject="Hello",
    ...     body=MessageBody(text="Hi Bob"),
    ... )
    >>> msg.recipients[0].email
    'bob@example.com'

Layout follows the usual layering:
- Domain exports: addresses, credentials, messages, errors
- Adapter exports: the httpx client and typed responses
- Composition exports: wired layered configuration
- Metadata: package information
"""

from __future__ import annotations

# Metadata
from .__init__conf__ import print_info

# Adapter exports
from .adapters.mailgun.client import MailgunClient
from .adapters.mailgun.payload import MessagePayload, attachment_from_path, build_message_payload
from .adapters.mailgun.responses import DnsRecord, DomainInfo, SendResponse, ValidationResponse

# Composition exports (wired adapters)
from .composition import get_config

# Domain exports
from .domain import (
    ApiError,
    Attachment,
    ClickTracking,
    ConfigurationError,
    Credentials,
    EmailAddress,
    InvalidAddressError,
    InvalidCredentialsError,
    InvalidMessageError,
    MailgunError,
    MailgunTimeoutError,
    Message,
    MessageBody,
    PayloadError,
    Region,
    SendOptions,
    Template,
    TransportError,
    parse_address,
)

__all__ = [
    "ApiError",
    "Attachment",
    "ClickTracking",
    "ConfigurationError",
    "Credentials",
    "DnsRecord",
    "DomainInfo",
    "EmailAddress",
    "InvalidAddressError",
    "InvalidCredentialsError",
    "InvalidMessageError",
    "MailgunClient",
    "MailgunError",
    "MailgunTimeoutError",
    "Message",
    "MessageBody",
    "MessagePayload",
    "PayloadError",
    "Region",
    "SendOptions",
    "SendResponse",
    "Template",
    "TransportError",
    "ValidationResponse",
    "attachment_from_path",
    "build_message_payload",
    "get_config",
    "parse_address",
    "print_info",
]
