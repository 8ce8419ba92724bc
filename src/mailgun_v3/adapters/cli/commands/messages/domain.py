"""``mailgun-v3 domain``: show state and DNS records of the sending domain."""

from __future__ import annotations

import functools
import logging

import lib_log_rich.runtime
import rich_click as click
from rich.console import Console
from rich.table import Table

from mailgun_v3.adapters.mailgun.responses import DnsRecord, DomainInfo
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


def _record_table(title: str, records: list[DnsRecord]) -> Table:
    table = Table(title=title, title_justify="left")
    for column in ("Type", "Name", "Value", "Valid"):
        table.add_column(column)
    for record in records:
        table.add_row(record.record_type, record.name or "", record.value, record.valid or "")
    return table


def _render_domain(info: DomainInfo, console: Console | None = None) -> None:
    out = console if console is not None else Console()
    out.print(f"\n[bold]{info.name}[/bold]  state={info.state}  type={info.type or '-'}")
    out.print(f"Created:     {info.created_at.isoformat()}")
    if info.smtp_login:
        out.print(f"SMTP login:  {info.smtp_login}")
    if info.spam_action:
        out.print(f"Spam action: {info.spam_action}")
    if info.sending_dns_records:
        out.print(_record_table("Sending DNS records", info.sending_dns_records))
    if info.receiving_dns_records:
        out.print(_record_table("Receiving DNS records", info.receiving_dns_records))


@click.command("domain", context_settings=CLICK_CONTEXT_SETTINGS)
@output_format_option
@mailgun_config_options
@click.pass_context
def cli_domain(
    ctx: click.Context,
    output_format: str,
    api_key: str | None,
    domain: str | None,
    api_base: str | None,
    region: str | None,
    timeout: float | None,
) -> None:
    """Fetch the configured sending domain from Mailgun."""
    cli_ctx = get_cli_context(ctx)
    fmt = OutputFormat(output_format.lower())

    with lib_log_rich.runtime.bind(job_id="cli-domain", extra={"command": "domain", "format": fmt.value}):
        overrides = filter_sentinels(api_key=api_key, domain=domain, api_base=api_base, region=region, timeout=timeout)
        mailgun_config = resolve_mailgun_config(cli_ctx, overrides)
        info = execute_with_mailgun_error_handling(
            operation=functools.partial(cli_ctx.services.get_domain, config=mailgun_config),
            action="fetch domain",
        )
        logger.info("Domain fetched via CLI", extra={"domain": info.name, "state": info.state})
        echo_model(info, fmt, functools.partial(_render_domain, info))


__all__ = ["cli_domain"]
