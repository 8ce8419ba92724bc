"""Shared plumbing for the Mailgun CLI commands.

Configuration loading, connection override options, ``KEY=VALUE`` parsing,
output formatting and the error-to-exit-code mapping used by ``send``,
``validate`` and ``domain``.
"""

from __future__ import annotations

import functools
import logging
import os
from collections.abc import Callable
from typing import Any, NoReturn, TypeVar, cast

import orjson
import rich_click as click
from pydantic import BaseModel, ValidationError

from mailgun_v3 import __init__conf__
from mailgun_v3.adapters.mailgun.config import MailgunConfig
from mailgun_v3.adapters.mailgun.transport import sanitize_message
from mailgun_v3.domain.enums import OutputFormat, Region
from mailgun_v3.domain.errors import (
    ConfigurationError,
    InvalidCredentialsError,
    MailgunError,
    MailgunTimeoutError,
    PayloadError,
)

from ...context import CLIContext
from ...exit_codes import ExitCode

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


def filter_sentinels(**kwargs: Any) -> dict[str, Any]:
    """Drop options the user did not pass (``None`` or ``()``).

    Remaining tuples become lists so Pydantic accepts them.

    Example:
        >>> filter_sentinels(api_key=None, domain="mg.example.com", tags=())
        {'domain': 'mg.example.com'}
    """
    result: dict[str, Any] = {}
    for key, value in kwargs.items():
        if value is None or value == ():
            continue
        if isinstance(value, tuple):
            result[key] = list(cast(tuple[Any, ...], value))
        else:
            result[key] = value
    return result


def apply_validated_overrides(base_config: MailgunConfig, overrides: dict[str, Any]) -> MailgunConfig:
    """Merge *overrides* into *base_config* and validate the result again.

    ``model_copy(update=...)`` would skip the validators, so the merged dict
    goes through ``model_validate``.

    Raises:
        ValidationError: When an override is invalid.

    Example:
        >>> apply_validated_overrides(MailgunConfig(), {"region": "EU"}).region
        <Region.EU: 'eu'>
    """
    if not overrides:
        return base_config
    return MailgunConfig.model_validate({**base_config.model_dump(), **overrides})


def mailgun_config_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add ``--api-key``, ``--domain``, ``--api-base``, ``--region`` and ``--timeout``."""
    options = [
        click.option("--api-key", default=None, help="Override mailgun.api_key"),
        click.option("--domain", default=None, help="Override the sending domain (mailgun.domain)"),
        click.option("--api-base", default=None, help="Override the API base URL (e.g. a local mock server)"),
        click.option(
            "--region",
            type=click.Choice([r.value for r in Region], case_sensitive=False),
            default=None,
            help="Override the hosting region",
        ),
        click.option("--timeout", "timeout", type=float, default=None, help="Override request timeout in seconds"),
    ]
    return functools.reduce(lambda f, opt: opt(f), reversed(options), func)


def output_format_option(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add ``--format human|json``."""
    return click.option(
        "--format",
        "output_format",
        type=click.Choice([f.value for f in OutputFormat], case_sensitive=False),
        default=OutputFormat.HUMAN.value,
        help="Output format (human-readable or JSON)",
    )(func)


def parse_key_value_pairs(pairs: tuple[str, ...], *, option_name: str) -> dict[str, str]:
    """Split repeated ``KEY=VALUE`` options into a dict.

    Raises:
        click.BadParameter: When an entry lacks ``=`` or has an empty key.

    Example:
        >>> parse_key_value_pairs(("X-Campaign=spring", "X-Empty="), option_name="--header")
        {'X-Campaign': 'spring', 'X-Empty': ''}
    """
    parsed: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise click.BadParameter(f"expected KEY=VALUE, got {pair!r}", param_hint=option_name)
        parsed[key.strip()] = value
    return parsed


def resolve_mailgun_config(cli_ctx: CLIContext, overrides: dict[str, Any]) -> MailgunConfig:
    """Build the effective MailgunConfig for one command.

    Reads ``[mailgun]`` through the wired loader, applies command line
    overrides, then insists on an API key and a sending domain.

    Raises:
        SystemExit: CONFIG_ERROR (78) when the configuration is invalid or
            incomplete; INVALID_ARGUMENT (22) when an override is invalid.
    """
    try:
        mailgun_config = cli_ctx.services.load_mailgun_config_from_dict(cli_ctx.config.as_dict())
    except ValidationError as exc:
        _fail(exc, "Invalid [mailgun] configuration", "Invalid [mailgun] configuration", ExitCode.CONFIG_ERROR)
    try:
        mailgun_config = apply_validated_overrides(mailgun_config, overrides)
    except ValidationError as exc:
        _fail(exc, "Invalid command line override", "Invalid option value", ExitCode.INVALID_ARGUMENT)

    missing = [f"mailgun.{name}" for name in ("api_key", "domain") if getattr(mailgun_config, name) is None]
    if missing:
        logger.error("Mailgun connection settings missing", extra={"missing": missing})
        listed = ", ".join(missing)
        click.echo(f"\nError: Mailgun is not configured; missing {listed}.", err=True)
        click.echo(
            f"Set them in your user config, export {__init__conf__.LAYEREDCONF_SLUG.upper()}___MAILGUN__API_KEY, "
            "or pass --api-key/--domain.",
            err=True,
        )
        raise SystemExit(ExitCode.CONFIG_ERROR)
    return mailgun_config


def execute_with_mailgun_error_handling(*, operation: Callable[[], _T], action: str) -> _T:
    """Run *operation* and translate failures into exit codes.

    Args:
        operation: Zero-argument callable doing the actual work.
        action: Short description for messages, e.g. ``"send message"``.

    Returns:
        Whatever *operation* returned.

    Raises:
        SystemExit: On any handled error.
        Exception: Unexpected errors are re-raised when ``DEVELOPMENT_MODE``
            is set in the environment.

    Handlers run most specific first:

    1. ConfigurationError, InvalidCredentialsError -> CONFIG_ERROR (78)
    2. FileNotFoundError -> FILE_NOT_FOUND (2)
    3. ValueError (bad address, bad message) -> INVALID_ARGUMENT (22)
    4. MailgunTimeoutError -> TIMEOUT (110)
    5. PayloadError -> DATA_ERROR (65)
    6. MailgunError (HTTP status, network) -> API_FAILURE (69)
    7. Exception -> GENERAL_ERROR (1), logged with traceback
    """
    try:
        return operation()
    except (ConfigurationError, InvalidCredentialsError) as exc:
        _fail(exc, "Mailgun configuration error", "Configuration error", ExitCode.CONFIG_ERROR)
    except FileNotFoundError as exc:
        _fail(exc, "Attachment file not found", "Attachment file not found", ExitCode.FILE_NOT_FOUND)
    except ValueError as exc:
        _fail(exc, f"Invalid arguments to {action}", "Invalid argument", ExitCode.INVALID_ARGUMENT)
    except MailgunTimeoutError as exc:
        _fail(exc, "Mailgun request timed out", f"Could not {action}", ExitCode.TIMEOUT)
    except PayloadError as exc:
        _fail(exc, "Unexpected Mailgun response", f"Could not {action}", ExitCode.DATA_ERROR)
    except MailgunError as exc:
        _fail(exc, "Mailgun request failed", f"Could not {action}", ExitCode.API_FAILURE)
    except Exception as exc:
        if os.environ.get("DEVELOPMENT_MODE"):
            raise
        _fail(exc, f"Unexpected error during {action}", "Unexpected error", ExitCode.GENERAL_ERROR, log_traceback=True)


def echo_model(model: BaseModel, output_format: OutputFormat, render_human: Callable[[], None]) -> None:
    """Print *model* as indented JSON, or delegate to *render_human*."""
    if output_format is OutputFormat.JSON:
        click.echo(orjson.dumps(model.model_dump(mode="json"), option=orjson.OPT_INDENT_2).decode())
    else:
        render_human()


def describe_error(exc: Exception) -> str:
    """Render *exc* for logs and the terminal.

    Pydantic errors are rebuilt from their ``loc`` and ``msg`` parts only; the
    default rendering embeds the rejected input, which for a model-level
    check is the whole ``[mailgun]`` section including ``api_key``.

    Example:
        >>> try:
        ...     MailgunConfig(api_key="key-" + "s" * 32, timeout=0)
        ... except ValidationError as exc:
        ...     text = describe_error(exc)
        >>> "sss" in text, "timeout must be positive" in text
        (False, True)
    """
    if not isinstance(exc, ValidationError):
        return str(exc)
    parts: list[str] = []
    for error in exc.errors(include_url=False, include_context=False, include_input=False):
        location = ".".join(str(item) for item in error["loc"])
        parts.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(parts)


def _fail(
    exc: Exception,
    log_message: str,
    user_message: str,
    exit_code: ExitCode,
    *,
    log_traceback: bool = False,
) -> NoReturn:
    """Log *exc*, print a sanitized message and exit with *exit_code*."""
    detail = describe_error(exc)
    logger.error(
        log_message,
        extra={"error": detail, "error_type": type(exc).__name__},
        exc_info=log_traceback,
    )
    click.echo(f"\nError: {user_message} - {sanitize_message(detail)}", err=True)
    raise SystemExit(exit_code) from exc


__all__ = [
    "apply_validated_overrides",
    "describe_error",
    "echo_model",
    "execute_with_mailgun_error_handling",
    "filter_sentinels",
    "mailgun_config_options",
    "output_format_option",
    "parse_key_value_pairs",
    "resolve_mailgun_config",
]
