"""Per-invocation CLI state and traceback flag handling.

The root group loads configuration once and parks it, together with the
wired services, on ``ctx.obj`` as a :class:`CLIContext`. Subcommands read it
back with :func:`get_cli_context`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import lib_cli_exit_tools
import rich_click as click
from lib_layered_config import Config

if TYPE_CHECKING:
    from mailgun_v3.composition import AppServices

TracebackState = tuple[bool, bool]
"""Snapshot of ``lib_cli_exit_tools.config``: (traceback, traceback_force_color)."""


@dataclass(slots=True)
class CLIContext:
    """State shared by every subcommand of one invocation.

    Attributes:
        traceback: ``--traceback`` was given.
        config: Layered configuration with ``--set`` overrides applied.
        services: Port implementations from the composition root.
        profile: Root-level ``--profile``, if any.
        set_overrides: Raw ``--set`` strings, kept so a subcommand that reloads
            a different profile can reapply them.
    """

    traceback: bool
    config: Config
    services: AppServices
    profile: str | None = None
    set_overrides: tuple[str, ...] = ()


def store_cli_context(
    ctx: click.Context,
    *,
    traceback: bool,
    config: Config,
    services: AppServices,
    profile: str | None = None,
    set_overrides: tuple[str, ...] = (),
) -> None:
    """Replace ``ctx.obj`` (the services factory) with a populated CLIContext.

    Example:
        >>> from unittest.mock import MagicMock
        >>> from mailgun_v3.composition import build_testing
        >>> ctx = MagicMock()
        >>> store_cli_context(ctx, traceback=True, config=MagicMock(), services=build_testing(), profile="eu")
        >>> ctx.obj.profile
        'eu'
    """
    ctx.obj = CLIContext(
        traceback=traceback,
        config=config,
        services=services,
        profile=profile,
        set_overrides=set_overrides,
    )


def get_cli_context(ctx: click.Context) -> CLIContext:
    """Return the CLIContext stored by the root group.

    Raises:
        RuntimeError: When called outside a ``mailgun-v3`` invocation.

    Example:
        >>> from unittest.mock import MagicMock
        >>> ctx = MagicMock()
        >>> ctx.obj = CLIContext(traceback=False, config=MagicMock(), services=MagicMock())
        >>> get_cli_context(ctx).traceback
        False
    """
    if not isinstance(ctx.obj, CLIContext):
        raise RuntimeError("CLI context not initialized. Call store_cli_context first.")
    return ctx.obj


def apply_traceback_preferences(enabled: bool) -> None:
    """Mirror ``--traceback`` into lib_cli_exit_tools.

    Example:
        >>> apply_traceback_preferences(True)
        >>> bool(lib_cli_exit_tools.config.traceback_force_color)
        True
    """
    lib_cli_exit_tools.config.traceback = bool(enabled)
    lib_cli_exit_tools.config.traceback_force_color = bool(enabled)


def snapshot_traceback_state() -> TracebackState:
    """Capture the lib_cli_exit_tools traceback flags.

    Example:
        >>> len(snapshot_traceback_state())
        2
    """
    return (
        bool(getattr(lib_cli_exit_tools.config, "traceback", False)),
        bool(getattr(lib_cli_exit_tools.config, "traceback_force_color", False)),
    )


def restore_traceback_state(state: TracebackState) -> None:
    """Put back flags captured by :func:`snapshot_traceback_state`.

    Example:
        >>> before = snapshot_traceback_state()
        >>> apply_traceback_preferences(not before[0])
        >>> restore_traceback_state(before)
        >>> snapshot_traceback_state() == before
        True
    """
    traceback_enabled, force_color = state
    lib_cli_exit_tools.config.traceback = traceback_enabled
    lib_cli_exit_tools.config.traceback_force_color = force_color


__all__ = [
    "CLIContext",
    "TracebackState",
    "apply_traceback_preferences",
    "get_cli_context",
    "restore_traceback_state",
    "snapshot_traceback_state",
    "store_cli_context",
]
