"""``mailgun-v3 send``: send one message through the messages endpoint."""

from __future__ import annotations

import functools
import logging
from datetime import datetime
from pathlib import Path

import lib_log_rich.runtime
import rich_click as click

from mailgun_v3.adapters.mailgun.config import MailgunConfig
from mailgun_v3.adapters.mailgun.payload import attachment_from_path
from mailgun_v3.adapters.mailgun.responses import SendResponse
from mailgun_v3.application.ports import SendMessage
from mailgun_v3.domain.address import EmailAddress, parse_address
from mailgun_v3.domain.message import Message, MessageBody, SendOptions, Template

from ...constants import CLICK_CONTEXT_SETTINGS
from ...context import get_cli_context
from ._common import (
    execute_with_mailgun_error_handling,
    filter_sentinels,
    mailgun_config_options,
    parse_key_value_pairs,
    resolve_mailgun_config,
)

logger = logging.getLogger(__name__)


def parse_delivery_time(value: str) -> datetime:
    """Parse ``--deliver-at`` as ISO 8601; naive values are taken as local time.

    Raises:
        ValueError: When *value* is not an ISO 8601 timestamp.

    Example:
        >>> parse_delivery_time("2030-05-01T09:30:00+02:00").isoformat()
        '2030-05-01T09:30:00+02:00'
        >>> parse_delivery_time("2030-05-01T09:30:00").tzinfo is not None
        True
    """
    moment = datetime.fromisoformat(value)
    return moment if moment.tzinfo is not None else moment.astimezone()


def _addresses(values: tuple[str, ...]) -> tuple[EmailAddress, ...]:
    return tuple(parse_address(value) for value in values)


def build_cli_message(
    *,
    to: tuple[str, ...],
    cc: tuple[str, ...],
    bcc: tuple[str, ...],
    subject: str,
    text: str | None,
    html: str | None,
    attachments: tuple[str, ...],
    inlines: tuple[str, ...],
    tags: tuple[str, ...],
    headers: dict[str, str],
    variables: dict[str, str],
    template: str | None,
    template_version: str | None,
    template_variables: dict[str, str],
    deliver_at: str | None,
    test_mode: bool | None,
    reply_to: str | None,
) -> Message:
    """Assemble a :class:`Message` from raw command line values.

    Raises:
        InvalidAddressError: A recipient or reply-to address is malformed.
        InvalidMessageError: The message breaks a structural rule.
        FileNotFoundError: An attachment path does not exist.
        ValueError: ``--deliver-at`` is not ISO 8601.
    """
    body = MessageBody(text=text, html=html) if (text or html) else None
    files = tuple(attachment_from_path(Path(p)) for p in attachments) + tuple(
        attachment_from_path(Path(p), inline=True) for p in inlines
    )
    options = SendOptions(
        tags=tags,
        headers=headers,
        variables=variables,
        delivery_time=parse_delivery_time(deliver_at) if deliver_at else None,
        test_mode=test_mode,
        reply_to=parse_address(reply_to) if reply_to else None,
    )
    return Message(
        to=_addresses(to),
        cc=_addresses(cc),
        bcc=_addresses(bcc),
        subject=subject,
        body=body,
        attachments=files,
        template=Template(name=template, version=template_version, variables=template_variables) if template else None,
        options=options,
    )


def _send(
    send_message: SendMessage,
    config: MailgunConfig,
    from_address: str | None,
    build: functools.partial[Message],
) -> SendResponse:
    message = build()
    sender = parse_address(from_address) if from_address else None
    logger.info(
        "Sending message via CLI",
        extra={
            "recipient_count": len(message.recipients),
            "attachment_count": len(message.attachments),
            "has_template": message.template is not None,
        },
    )
    return send_message(config=config, message=message, sender=sender)


@click.command("send", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--to", "to", multiple=True, required=True, help="Recipient, 'Name <addr>' or 'addr' (repeatable)")
@click.option("--cc", "cc", multiple=True, help="Carbon copy recipient (repeatable)")
@click.option("--bcc", "bcc", multiple=True, help="Blind carbon copy recipient (repeatable)")
@click.option("--from", "from_address", default=None, help="Sender; defaults to mailgun.from_address")
@click.option("--reply-to", default=None, help="Reply-To address")
@click.option("--subject", required=True, help="Subject line")
@click.option("--text", default=None, help="Plain-text body")
@click.option("--html", default=None, help="HTML body")
@click.option("--attachment", "attachments", multiple=True, type=click.Path(path_type=str), help="File to attach")
@click.option("--inline", "inlines", multiple=True, type=click.Path(path_type=str), help="Inline file (cid:)")
@click.option("--tag", "tags", multiple=True, help="Message tag, at most 3 (repeatable)")
@click.option("--header", "headers", multiple=True, metavar="NAME=VALUE", help="Custom MIME header (repeatable)")
@click.option("--var", "variables", multiple=True, metavar="KEY=VALUE", help="Custom v: variable (repeatable)")
@click.option("--template", default=None, help="Name of a stored Mailgun template")
@click.option("--template-version", default=None, help="Template version tag")
@click.option(
    "--template-var", "template_variables", multiple=True, metavar="KEY=VALUE", help="Template variable (repeatable)"
)
@click.option("--deliver-at", default=None, metavar="ISO8601", help="Schedule delivery, e.g. 2030-05-01T09:30+02:00")
@click.option("--test-mode/--no-test-mode", default=None, help="Accept but do not deliver (o:testmode)")
@mailgun_config_options
@click.pass_context
def cli_send(
    ctx: click.Context,
    to: tuple[str, ...],
    cc: tuple[str, ...],
    bcc: tuple[str, ...],
    from_address: str | None,
    reply_to: str | None,
    subject: str,
    text: str | None,
    html: str | None,
    attachments: tuple[str, ...],
    inlines: tuple[str, ...],
    tags: tuple[str, ...],
    headers: tuple[str, ...],
    variables: tuple[str, ...],
    template: str | None,
    template_version: str | None,
    template_variables: tuple[str, ...],
    deliver_at: str | None,
    test_mode: bool | None,
    api_key: str | None,
    domain: str | None,
    api_base: str | None,
    region: str | None,
    timeout: float | None,
) -> None:
    """Send a message and print the id Mailgun assigned to it.

    Needs ``--text``, ``--html`` or ``--template``.
    """
    cli_ctx = get_cli_context(ctx)
    extra = {"command": "send", "recipient_count": len(to) + len(cc) + len(bcc), "subject": subject}

    with lib_log_rich.runtime.bind(job_id="cli-send", extra=extra):
        overrides = filter_sentinels(api_key=api_key, domain=domain, api_base=api_base, region=region, timeout=timeout)
        mailgun_config = resolve_mailgun_config(cli_ctx, overrides)
        build = functools.partial(
            build_cli_message,
            to=to,
            cc=cc,
            bcc=bcc,
            subject=subject,
            text=text,
            html=html,
            attachments=attachments,
            inlines=inlines,
            tags=tags,
            headers=parse_key_value_pairs(headers, option_name="--header"),
            variables=parse_key_value_pairs(variables, option_name="--var"),
            template=template,
            template_version=template_version,
            template_variables=parse_key_value_pairs(template_variables, option_name="--template-var"),
            deliver_at=deliver_at,
            test_mode=test_mode,
            reply_to=reply_to,
        )
        result = execute_with_mailgun_error_handling(
            operation=functools.partial(_send, cli_ctx.services.send_message, mailgun_config, from_address, build),
            action="send message",
        )
        logger.info("Message sent via CLI", extra={"message_id": result.id})
        click.echo(f"\n{result.message}")
        click.echo(f"Message id: {result.id}")


__all__ = ["build_cli_message", "cli_send", "parse_delivery_time"]
