"""Display configuration through lib_layered_config's Rich renderer.

The ``[mailgun]`` section carries the private API key, so the key is masked
before the configuration reaches the terminal.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

import lib_log_rich.runtime
from lib_layered_config import Config
from lib_layered_config import OutputFormat as LibOutputFormat
from lib_layered_config import display_config as _lib_display
from rich.console import Console

from mailgun_v3.domain.enums import OutputFormat

_MASK = "[REDACTED]"


def mask_secrets(config: Config) -> Config:
    """Return *config* with a non-empty ``mailgun.api_key`` replaced by a mask.

    Example:
        >>> cfg = Config({"mailgun": {"api_key": "key-secret", "domain": "mg.example.com"}}, {})
        >>> mask_secrets(cfg)["mailgun"]["api_key"]
        '[REDACTED]'
        >>> empty = Config({"mailgun": {"api_key": ""}}, {})
        >>> mask_secrets(empty) is empty
        True
    """
    section: Any = config.get("mailgun", default={})
    if not isinstance(section, Mapping) or not cast("Mapping[str, object]", section).get("api_key"):
        return config
    return config.with_overrides({"mailgun": {"api_key": _MASK}})


def display_config(
    config: Config,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    section: str | None = None,
    console: Console | None = None,
    profile: str | None = None,
) -> None:
    """Render *config* (or one *section*) as TOML-like text or JSON.

    Pending log output is flushed first so log lines do not interleave with
    the configuration dump.

    Args:
        config: Already-loaded layered configuration object to display.
        output_format: HUMAN or JSON.
        section: Optional section name, e.g. ``mailgun``.
        console: Optional Rich Console, mainly for tests.
        profile: Optional profile name included in provenance comments.

    Raises:
        ValueError: If the requested section does not exist.
    """
    if lib_log_rich.runtime.is_initialised():
        lib_log_rich.runtime.flush()

    lib_format = LibOutputFormat(output_format.value)
    _lib_display(mask_secrets(config), output_format=lib_format, section=section, profile=profile, console=console)


__all__ = ["display_config", "mask_secrets"]
