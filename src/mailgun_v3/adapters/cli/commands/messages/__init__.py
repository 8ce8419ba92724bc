"""Mailgun API commands.

Contents:
    * :func:`.send.cli_send` - Send a message.
    * :func:`.validate.cli_validate` - Validate an address.
    * :func:`.domain.cli_domain` - Show the sending domain.
"""

from __future__ import annotations

from ._common import filter_sentinels
from .domain import cli_domain
from .send import cli_send
from .validate import cli_validate

__all__ = ["cli_domain", "cli_send", "cli_validate", "filter_sentinels"]
