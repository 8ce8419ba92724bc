"""In-memory Mailgun adapters for testing.

Provides Mailgun functions that satisfy the same Protocols as production
adapters but perform no HTTP requests.

Contents:
    * :class:`MailgunSpy` - Captures Mailgun calls and returns canned results.
    * :func:`load_mailgun_config_from_dict_in_memory` - In-memory config loader.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from ...domain.address import EmailAddress, is_valid_address
from ...domain.errors import ConfigurationError
from ...domain.message import Message
from ..mailgun.config import MailgunConfig
from ..mailgun.responses import DomainInfo, SendResponse, ValidationResponse


def _empty_record_list() -> list[dict[str, Any]]:
    """Create an empty typed list for call records."""
    return []


@dataclass
class MailgunSpy:
    """Captures Mailgun operations for test assertions.

    Each test should create its own MailgunSpy instance to avoid cross-test
    pollution. The spy's methods match the Protocol signatures expected by
    AppServices.

    Attributes:
        sent_messages: Captured send_message calls.
        validations: Captured validate_address calls.
        domain_lookups: Captured get_domain calls.
        raise_exception: When set, every operation raises this exception
            after recording the call.

    Example:
        >>> from mailgun_v3.domain.message import MessageBody
        >>> spy = MailgunSpy()
        >>> config = MailgunConfig(from_address="ann@example.com")
        >>> msg = Message(to=(EmailAddress.address_only("bob@example.com"),), subject="Hi", body=MessageBody(text="x"))
        >>> spy.send_message(config=config, message=msg).message
        'Queued. Thank you.'
        >>> len(spy.sent_messages)
        1
    """

    sent_messages: list[dict[str, Any]] = field(default_factory=_empty_record_list)
    validations: list[dict[str, Any]] = field(default_factory=_empty_record_list)
    domain_lookups: list[dict[str, Any]] = field(default_factory=_empty_record_list)
    raise_exception: Exception | None = None
    validation_result: str = "deliverable"

    def clear(self) -> None:
        """Reset captured data for next test."""
        self.sent_messages.clear()
        self.validations.clear()
        self.domain_lookups.clear()
        self.raise_exception = None

    def _maybe_raise(self) -> None:
        if self.raise_exception is not None:
            raise self.raise_exception

    def send_message(
        self,
        *,
        config: MailgunConfig,
        message: Message,
        sender: EmailAddress | None = None,
    ) -> SendResponse:
        """Record the call and return a queued acknowledgement.

        Raises:
            ConfigurationError: When neither *sender* nor config provide a sender,
                mirroring the production adapter.
            Exception: If raise_exception is set, raises that exception.
        """
        resolved = sender if sender is not None else config.sender
        if resolved is None:
            raise ConfigurationError("No from_address configured and no sender provided")
        self.sent_messages.append({"config": config, "message": message, "sender": resolved})
        self._maybe_raise()
        return SendResponse(id=f"<{len(self.sent_messages)}@spy.mailgun.test>", message="Queued. Thank you.")

    def validate_address(self, *, config: MailgunConfig, address: str) -> ValidationResponse:
        """Record the call; malformed addresses come back undeliverable."""
        self.validations.append({"config": config, "address": address})
        self._maybe_raise()
        if not is_valid_address(address):
            return ValidationResponse(address=address, result="undeliverable", risk="high", reason=["malformed"])
        return ValidationResponse(address=address, result=self.validation_result, risk="low")

    def get_domain(self, *, config: MailgunConfig) -> DomainInfo:
        """Record the call and describe the configured domain as active."""
        self.domain_lookups.append({"config": config})
        self._maybe_raise()
        return DomainInfo(
            name=config.domain or "spy.mailgun.test",
            state="active",
            type="custom",
            created_at=datetime(2020, 1, 1, tzinfo=timezone.utc),
        )


def load_mailgun_config_from_dict_in_memory(
    config_dict: Mapping[str, Any],
) -> MailgunConfig:
    """Parse Mailgun config from dict using the real Pydantic model."""
    raw = config_dict.get("mailgun", {})
    return MailgunConfig.model_validate(raw if raw else {})


__all__ = [
    "MailgunSpy",
    "load_mailgun_config_from_dict_in_memory",
]
