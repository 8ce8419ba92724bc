"""In-memory configuration adapters for testing.

Provides configuration and logging functions that satisfy the same Protocols as
production adapters but operate entirely in memory -- no filesystem,
no layered file discovery.
"""

from __future__ import annotations

from lib_layered_config import Config

from ...domain.enums import OutputFormat


def get_config_in_memory(
    *,
    profile: str | None = None,
    start_dir: str | None = None,
) -> Config:
    """Return an empty in-memory Config."""
    return Config({}, {})


def display_config_in_memory(
    config: Config,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    section: str | None = None,
    profile: str | None = None,
) -> None:
    """No-op display -- satisfies the DisplayConfig protocol."""


def init_logging_in_memory(config: Config) -> None:
    """Skip lib_log_rich entirely; tests read stdlib log records via caplog."""


__all__ = [
    "display_config_in_memory",
    "get_config_in_memory",
    "init_logging_in_memory",
]
