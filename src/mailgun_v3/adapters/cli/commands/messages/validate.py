"""``mailgun-v3 validate``: check one address with Mailgun's validation service."""

from __future__ import annotations

import functools
import logging

import lib_log_rich.runtime
import rich_click as click

from mailgun_v3.adapters.mailgun.responses import ValidationResponse
from mailgun_v3.domain.enums import OutputFormat

from ...constants import CLICK_CONTEXT_SETTINGS
from ...context import get_cli_context
from ._common import (
    echo_model,
    execute_with_mailgun_error_handling,
    filter_sentinels,
    mailgun_config_options,
    output_format_option,
    resolve_mailgun_config,
)

logger = logging.getLogger(__name__)


def _render_validation(result: ValidationResponse) -> None:
    click.echo(f"\nAddress:     {result.address}")
    click.echo(f"Result:      {result.result}")
    click.echo(f"Risk:        {result.risk}")
    if result.reason:
        click.echo(f"Reason:      {', '.join(result.reason)}")
    if result.did_you_mean:
        click.echo(f"Did you mean {result.did_you_mean}?")
    flags = [
        label
        for label, on in (("disposable", result.is_disposable_address), ("role", result.is_role_address))
        if on
    ]
    if flags:
        click.echo(f"Flags:       {', '.join(flags)}")


@click.command("validate", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("address")
@output_format_option
@mailgun_config_options
@click.pass_context
def cli_validate(
    ctx: click.Context,
    address: str,
    output_format: str,
    api_key: str | None,
    domain: str | None,
    api_base: str | None,
    region: str | None,
    timeout: float | None,
) -> None:
    """Ask Mailgun whether ADDRESS is deliverable.

    The exit code reflects whether the lookup worked, not the verdict.
    """
    cli_ctx = get_cli_context(ctx)
    fmt = OutputFormat(output_format.lower())

    with lib_log_rich.runtime.bind(job_id="cli-validate", extra={"command": "validate", "format": fmt.value}):
        overrides = filter_sentinels(api_key=api_key, domain=domain, api_base=api_base, region=region, timeout=timeout)
        mailgun_config = resolve_mailgun_config(cli_ctx, overrides)
        result = execute_with_mailgun_error_handling(
            operation=functools.partial(cli_ctx.services.validate_address, config=mailgun_config, address=address),
            action="validate address",
        )
        logger.info("Address validated via CLI", extra={"result": result.result, "risk": result.risk})
        echo_model(result, fmt, functools.partial(_render_validation, result))


__all__ = ["cli_validate"]
