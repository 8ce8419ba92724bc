"""Application ports — callable Protocol definitions for adapter functions.

Each Protocol class defines a ``__call__`` method whose signature exactly
matches the corresponding adapter function.  Existing module-level functions
satisfy these protocols automatically via structural subtyping (PEP 544).

System Role:
    Sits between domain and adapters.  Infrastructure types (``Config``,
    ``MailgunConfig``, response models) are imported under ``TYPE_CHECKING``
    only so that import-linter layer contracts remain satisfied at runtime.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol

from ..domain.address import EmailAddress
from ..domain.enums import OutputFormat
from ..domain.message import Message

if TYPE_CHECKING:
    from lib_layered_config import Config

    from ..adapters.mailgun.config import MailgunConfig
    from ..adapters.mailgun.responses import DomainInfo, SendResponse, ValidationResponse


class GetConfig(Protocol):
    """Load layered configuration with application defaults."""

    def __call__(self, *, profile: str | None = ..., start_dir: str | None = ...) -> Config: ...


class DisplayConfig(Protocol):
    """Display the provided configuration in the requested format."""

    def __call__(
        self, config: Config, *, output_format: OutputFormat = ..., section: str | None = ..., profile: str | None = ...
    ) -> None: ...


class SendMessage(Protocol):
    """Send a message through the Mailgun messages endpoint."""

    def __call__(
        self,
        *,
        config: MailgunConfig,
        message: Message,
        sender: EmailAddress | None = ...,
    ) -> SendResponse: ...


class ValidateAddress(Protocol):
    """Validate one address with Mailgun's validation service."""

    def __call__(self, *, config: MailgunConfig, address: str) -> ValidationResponse: ...


class GetDomain(Protocol):
    """Fetch details of the configured sending domain."""

    def __call__(self, *, config: MailgunConfig) -> DomainInfo: ...


class LoadMailgunConfigFromDict(Protocol):
    """Load MailgunConfig from a configuration dictionary."""

    def __call__(self, config_dict: Mapping[str, Any]) -> MailgunConfig: ...


class InitLogging(Protocol):
    """Initialize lib_log_rich runtime with the provided configuration."""

    def __call__(self, config: Config) -> None: ...


__all__ = [
    "DisplayConfig",
    "GetConfig",
    "GetDomain",
    "InitLogging",
    "LoadMailgunConfigFromDict",
    "SendMessage",
    "ValidateAddress",
]
