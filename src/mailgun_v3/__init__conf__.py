"""Static package metadata surfaced to CLI commands and documentation.

The values mirror ``[project]`` in ``pyproject.toml``; keep ``version`` in
step when releasing.
"""

from __future__ import annotations

name = "mailgun_v3"
title = "Mailgun v3 JSON API bindings and command line client"
version = "0.14.0"
homepage = "https://github.com/otterandrye/mailgun_v3"
author = "mailgun_v3 contributors"
author_email = "mailgun-v3@users.noreply.github.com"
shell_command = "mailgun-v3"

# lib_layered_config path components: <vendor>/<app> directories and the
# <SLUG>_ environment variable prefix.
LAYEREDCONF_VENDOR = "mailgun_v3"
LAYEREDCONF_APP = "mailgun-v3"
LAYEREDCONF_SLUG = "mailgun_v3"


def print_info() -> None:
    """Print the summarised metadata block used by ``mailgun-v3 info``.

    Example:
        >>> print_info()  # doctest: +ELLIPSIS
        Info for mailgun_v3:
        ...
    """
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    print("\n".join(lines))


__all__ = [
    "LAYEREDCONF_APP",
    "LAYEREDCONF_SLUG",
    "LAYEREDCONF_VENDOR",
    "author",
    "author_email",
    "homepage",
    "name",
    "print_info",
    "shell_command",
    "title",
    "version",
]
