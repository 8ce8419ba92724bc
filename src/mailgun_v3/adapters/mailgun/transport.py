"""Mailgun operations exposed as application ports.

Each function takes a :class:`MailgunConfig`, opens a short-lived
:class:`MailgunClient`, performs one call and closes it again. These are the
functions the composition root wires into ``AppServices``.
"""

from __future__ import annotations

import dataclasses
import logging

import httpx

from mailgun_v3.domain.address import EmailAddress
from mailgun_v3.domain.errors import ConfigurationError
from mailgun_v3.domain.message import Message

from .client import MailgunClient
from .config import MailgunConfig
from .responses import DomainInfo, SendResponse, ValidationResponse

logger = logging.getLogger(__name__)

# Keywords that may indicate sensitive data in exception messages
_SENSITIVE_KEYWORDS = frozenset(
    {
        "password",
        "credential",
        "secret",
        "token",
        "api_key",
        "private key",
    }
)


def sanitize_exception_message(exc: Exception) -> str:
    """Sanitize exception message to prevent credential exposure.

    Returns a generic message when the original exception text contains
    keywords suggesting sensitive data. The full exception is preserved in the
    chain for DEBUG-level logging.

    Example:
        >>> class FakeExc(Exception): pass
        >>> sanitize_exception_message(FakeExc("Connection refused"))
        'Connection refused'
        >>> sanitize_exception_message(FakeExc("Invalid private key"))
        'Mailgun request failed. Check the API key configuration.'
    """
    return sanitize_message(str(exc))


def sanitize_message(text: str) -> str:
    """Replace *text* with a generic hint when it looks credential related.

    Example:
        >>> sanitize_message("timeout: must be positive")
        'timeout: must be positive'
        >>> sanitize_message("api_key: Input should be a valid string")
        'Mailgun request failed. Check the API key configuration.'
    """
    lowered = text.lower()
    if any(keyword in lowered for keyword in _SENSITIVE_KEYWORDS):
        return "Mailgun request failed. Check the API key configuration."
    return text


def _resolve_sender(config: MailgunConfig, sender: EmailAddress | None) -> EmailAddress:
    """Determine the sender from override or config default.

    Raises:
        ConfigurationError: When neither override nor config provides a sender.
    """
    resolved = sender if sender is not None else config.sender
    if resolved is None:
        raise ConfigurationError("No from_address configured and no sender provided")
    return resolved


def _apply_config_defaults(config: MailgunConfig, message: Message) -> Message:
    """Turn on ``o:testmode`` when the config asks for it and the message is silent."""
    if config.test_mode and message.options.test_mode is None:
        options = dataclasses.replace(message.options, test_mode=True)
        return dataclasses.replace(message, options=options)
    return message


def send_message(
    *,
    config: MailgunConfig,
    message: Message,
    sender: EmailAddress | None = None,
    transport: httpx.BaseTransport | None = None,
) -> SendResponse:
    """Send *message* through the Mailgun messages endpoint.

    Args:
        config: Mailgun configuration containing credentials and defaults.
        message: Structurally valid outbound message.
        sender: Override sender. Uses config.from_address when None.
        transport: Optional httpx transport (tests).

    Returns:
        Mailgun's queue acknowledgement.

    Raises:
        ConfigurationError: Missing API key, domain, or sender.
        InvalidCredentialsError: Configured credentials fail shape checks.
        ApiError: Mailgun rejected the request.
        TransportError: The request did not complete.
        PayloadError: Mailgun's answer was not the expected JSON.
    """
    credentials = config.to_credentials()
    resolved_sender = _resolve_sender(config, sender)
    effective = _apply_config_defaults(config, message)
    with MailgunClient(credentials, timeout=config.timeout, transport=transport) as client:
        return client.send_message(resolved_sender, effective)


def validate_address(
    *,
    config: MailgunConfig,
    address: str,
    transport: httpx.BaseTransport | None = None,
) -> ValidationResponse:
    """Validate one address with Mailgun's validation service."""
    credentials = config.to_credentials()
    with MailgunClient(credentials, timeout=config.timeout, transport=transport) as client:
        return client.validate_address(address)


def get_domain(
    *,
    config: MailgunConfig,
    transport: httpx.BaseTransport | None = None,
) -> DomainInfo:
    """Fetch details of the configured sending domain."""
    credentials = config.to_credentials()
    with MailgunClient(credentials, timeout=config.timeout, transport=transport) as client:
        return client.get_domain()


__all__ = [
    "get_domain",
    "sanitize_exception_message",
    "sanitize_message",
    "send_message",
    "validate_address",
]
