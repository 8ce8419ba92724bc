"""Application layer - port definitions.

Contains the port protocols that define the interfaces for adapter
implementations.

Contents:
    * :mod:`.ports` - Callable Protocol definitions for adapter functions
"""

from __future__ import annotations

from .ports import (
    DisplayConfig,
    GetConfig,
    GetDomain,
    InitLogging,
    LoadMailgunConfigFromDict,
    SendMessage,
    ValidateAddress,
)

__all__ = [
    "DisplayConfig",
    "GetConfig",
    "GetDomain",
    "InitLogging",
    "LoadMailgunConfigFromDict",
    "SendMessage",
    "ValidateAddress",
]
