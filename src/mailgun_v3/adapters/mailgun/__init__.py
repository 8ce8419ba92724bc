"""Mailgun adapter - v3 HTTP API over httpx.

Structure:
    * :mod:`.config` - Mailgun configuration model and loader
    * :mod:`.payload` - Message to form-field mapping
    * :mod:`.responses` - Typed response models and JSON parsing
    * :mod:`.client` - Blocking httpx client
    * :mod:`.transport` - Port functions wired by the composition root

Contents:
    * :class:`.config.MailgunConfig` - Mailgun configuration container
    * :class:`.client.MailgunClient` - Typed API calls
    * :func:`.transport.send_message` - Primary sending interface
"""

from __future__ import annotations

from .client import MailgunClient
from .config import MailgunConfig, load_mailgun_config_from_dict
from .payload import MessagePayload, attachment_from_path, build_message_payload
from .responses import DnsRecord, DomainInfo, SendResponse, ValidationResponse
from .transport import get_domain, send_message, validate_address

__all__ = [
    "DnsRecord",
    "DomainInfo",
    "MailgunClient",
    "MailgunConfig",
    "MessagePayload",
    "SendResponse",
    "ValidationResponse",
    "attachment_from_path",
    "build_message_payload",
    "get_domain",
    "load_mailgun_config_from_dict",
    "send_message",
    "validate_address",
]
