"""Composition root wiring adapters to application ports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

# Configuration services
from ..adapters.config.display import display_config
from ..adapters.config.loader import get_config

# Logging services
from ..adapters.logging.setup import init_logging

# Mailgun services
from ..adapters.mailgun.config import load_mailgun_config_from_dict
from ..adapters.mailgun.transport import get_domain, send_message, validate_address

if TYPE_CHECKING:
    from ..adapters.memory.mailgun import MailgunSpy
    from ..application.ports import (
        DisplayConfig,
        GetConfig,
        GetDomain,
        InitLogging,
        LoadMailgunConfigFromDict,
        SendMessage,
        ValidateAddress,
    )

    _assert_get_config: GetConfig = get_config
    _assert_display_config: DisplayConfig = display_config
    _assert_send_message: SendMessage = send_message
    _assert_validate_address: ValidateAddress = validate_address
    _assert_get_domain: GetDomain = get_domain
    _assert_load_mailgun_config_from_dict: LoadMailgunConfigFromDict = load_mailgun_config_from_dict
    _assert_init_logging: InitLogging = init_logging


@dataclass(frozen=True, slots=True)
class AppServices:
    """Frozen container holding all application port implementations."""

    get_config: GetConfig
    display_config: DisplayConfig
    send_message: SendMessage
    validate_address: ValidateAddress
    get_domain: GetDomain
    load_mailgun_config_from_dict: LoadMailgunConfigFromDict
    init_logging: InitLogging


def build_production() -> AppServices:
    """Wire the httpx-backed Mailgun adapters and lib_log_rich logging."""
    return AppServices(
        get_config=get_config,
        display_config=display_config,
        send_message=send_message,
        validate_address=validate_address,
        get_domain=get_domain,
        load_mailgun_config_from_dict=load_mailgun_config_from_dict,
        init_logging=init_logging,
    )


def build_testing(*, spy: MailgunSpy | None = None) -> AppServices:
    """Wire in-memory adapters into an AppServices container.

    Args:
        spy: Optional MailgunSpy that records every Mailgun call. A fresh spy
            is created when omitted; pass your own to assert on it.

    Returns:
        AppServices container that performs no network or filesystem I/O.
        Its ``init_logging`` starts no lib_log_rich runtime, so CLI runs pair
        it with ``build_production().init_logging``.
    """
    from ..adapters.memory import (
        MailgunSpy,
        display_config_in_memory,
        get_config_in_memory,
        init_logging_in_memory,
        load_mailgun_config_from_dict_in_memory,
    )

    mailgun_spy = spy if spy is not None else MailgunSpy()

    return AppServices(
        get_config=get_config_in_memory,
        display_config=display_config_in_memory,
        send_message=mailgun_spy.send_message,
        validate_address=mailgun_spy.validate_address,
        get_domain=mailgun_spy.get_domain,
        load_mailgun_config_from_dict=load_mailgun_config_from_dict_in_memory,
        init_logging=init_logging_in_memory,
    )


__all__ = [
    # Configuration
    "get_config",
    "display_config",
    # Mailgun
    "send_message",
    "validate_address",
    "get_domain",
    "load_mailgun_config_from_dict",
    # Logging
    "init_logging",
    # Composition
    "AppServices",
    "build_production",
    "build_testing",
]
