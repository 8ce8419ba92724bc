"""CLI command implementations registered on the root group.

Contents:
    * Info command from :mod:`.info`
    * Config command from :mod:`.config`
    * Mailgun API commands from :mod:`.messages` (subpackage)
"""

from __future__ import annotations

from .config import cli_config
from .info import cli_info
from .messages import cli_domain, cli_send, cli_validate

__all__ = [
    "cli_config",
    "cli_domain",
    "cli_info",
    "cli_send",
    "cli_validate",
]
