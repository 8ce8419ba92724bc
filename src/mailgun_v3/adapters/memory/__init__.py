"""In-memory adapter implementations for testing.

Provides lightweight implementations of all application ports that operate
entirely in memory -- no filesystem, no HTTP, no logging framework.

Contents:
    * :mod:`.config` - In-memory configuration and logging adapters
    * :mod:`.mailgun` - In-memory Mailgun adapters (MailgunSpy class)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import (
    display_config_in_memory,
    get_config_in_memory,
    init_logging_in_memory,
)
from .mailgun import (
    MailgunSpy,
    load_mailgun_config_from_dict_in_memory,
)

# Static conformance assertions
if TYPE_CHECKING:
    from mailgun_v3.application.ports import (
        DisplayConfig,
        GetConfig,
        GetDomain,
        InitLogging,
        LoadMailgunConfigFromDict,
        SendMessage,
        ValidateAddress,
    )

    _assert_get_config: GetConfig = get_config_in_memory
    _assert_display_config: DisplayConfig = display_config_in_memory
    _assert_load_mailgun_config: LoadMailgunConfigFromDict = load_mailgun_config_from_dict_in_memory
    _assert_init_logging: InitLogging = init_logging_in_memory
    _assert_send_message: SendMessage = MailgunSpy().send_message
    _assert_validate_address: ValidateAddress = MailgunSpy().validate_address
    _assert_get_domain: GetDomain = MailgunSpy().get_domain

__all__ = [
    "MailgunSpy",
    "display_config_in_memory",
    "get_config_in_memory",
    "init_logging_in_memory",
    "load_mailgun_config_from_dict_in_memory",
]
