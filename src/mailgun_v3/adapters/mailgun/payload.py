"""Map a :class:`~mailgun_v3.domain.message.Message` onto messages-endpoint form fields.

Pure translation, no I/O apart from :func:`attachment_from_path`. The result
is handed to ``httpx`` as ``data=`` and ``files=``; httpx switches to
``multipart/form-data`` when files are present and to urlencoded otherwise.

Contents:
    * :class:`MessagePayload` - Ordered form fields plus file parts.
    * :func:`build_message_payload` - The mapper.
    * :func:`attachment_from_path` - Read a file into an :class:`Attachment`.
"""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass, field
from datetime import datetime
from email.utils import format_datetime
from pathlib import Path
from typing import Any

import orjson

from mailgun_v3.domain.address import EmailAddress
from mailgun_v3.domain.message import Attachment, Message, SendOptions, Template

FilePart = tuple[str, tuple[str, bytes, str]]
"""``(field_name, (filename, content, content_type))`` as accepted by httpx ``files=``."""

_DEFAULT_CONTENT_TYPE = "application/octet-stream"


def _empty_fields() -> dict[str, list[str]]:
    return {}


def _empty_files() -> list[FilePart]:
    return []


@dataclass(slots=True)
class MessagePayload:
    """Form fields and file parts for one messages-endpoint request.

    Attributes:
        fields: Field name to values; repeated fields (``to``, ``o:tag``) hold
            several values. Insertion order follows the Mailgun docs.
        files: File parts for ``attachment`` and ``inline``.
    """

    fields: dict[str, list[str]] = field(default_factory=_empty_fields)
    files: list[FilePart] = field(default_factory=_empty_files)

    def add(self, name: str, value: str) -> None:
        self.fields.setdefault(name, []).append(value)

    def first(self, name: str) -> str | None:
        """Return the first value of *name*, or None when absent.

        Example:
            >>> payload = MessagePayload()
            >>> payload.add("to", "a@example.com")
            >>> payload.first("to")
            'a@example.com'
            >>> payload.first("cc") is None
            True
        """
        values = self.fields.get(name)
        return values[0] if values else None

    def as_form_data(self) -> dict[str, str | list[str]]:
        """Collapse single-valued fields to plain strings for httpx ``data=``."""
        return {name: values[0] if len(values) == 1 else list(values) for name, values in self.fields.items()}


def _yes_no(flag: bool) -> str:
    return "yes" if flag else "no"


def _json_text(value: Any) -> str:
    return orjson.dumps(value).decode("utf-8")


def format_delivery_time(moment: datetime) -> str:
    """Render *moment* as the RFC 2822 date Mailgun expects for ``o:deliverytime``.

    Example:
        >>> from datetime import timezone
        >>> format_delivery_time(datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc))
        'Tue, 02 Jan 2024 03:04:05 +0000'
    """
    return format_datetime(moment)


def _add_recipients(payload: MessagePayload, name: str, addresses: tuple[EmailAddress, ...]) -> None:
    for address in addresses:
        payload.add(name, str(address))


def _add_template(payload: MessagePayload, template: Template) -> None:
    payload.add("template", template.name)
    if template.version is not None:
        payload.add("t:version", template.version)
    if template.render_text:
        payload.add("t:text", "yes")
    if template.variables:
        payload.add("t:variables", _json_text(dict(template.variables)))


def _add_options(payload: MessagePayload, options: SendOptions) -> None:
    for tag in options.tags:
        payload.add("o:tag", tag)
    if options.delivery_time is not None:
        payload.add("o:deliverytime", format_delivery_time(options.delivery_time))

    flags = (
        ("o:testmode", options.test_mode),
        ("o:tracking", options.tracking),
        ("o:tracking-opens", options.tracking_opens),
        ("o:require-tls", options.require_tls),
        ("o:skip-verification", options.skip_verification),
        ("o:dkim", options.dkim),
    )
    for name, flag in flags:
        if flag is not None:
            payload.add(name, _yes_no(flag))
    if options.tracking_clicks is not None:
        payload.add("o:tracking-clicks", options.tracking_clicks.value)

    if options.reply_to is not None:
        payload.add("h:Reply-To", str(options.reply_to))
    for header, value in options.headers.items():
        payload.add(f"h:{header}", value)

    for key, value in options.variables.items():
        payload.add(f"v:{key}", value if isinstance(value, str) else _json_text(value))
    if options.recipient_variables:
        payload.add("recipient-variables", _json_text({k: dict(v) for k, v in options.recipient_variables.items()}))


def _file_part(attachment: Attachment) -> FilePart:
    field_name = "inline" if attachment.inline else "attachment"
    content_type = attachment.content_type or _DEFAULT_CONTENT_TYPE
    return (field_name, (attachment.filename, attachment.content, content_type))


def build_message_payload(sender: EmailAddress, message: Message) -> MessagePayload:
    """Translate *message* from *sender* into messages-endpoint form data.

    Args:
        sender: Value for the ``from`` field.
        message: Structurally valid message.

    Returns:
        Payload ready for ``httpx.Client.post(data=..., files=...)``.

    Example:
        >>> from mailgun_v3.domain.message import MessageBody
        >>> msg = Message(
        ...     to=(EmailAddress.address_only("bob@example.com"),),
        ...     subject="Hi",
        ...     body=MessageBody(text="Hello"),
        ... )
        >>> payload = build_message_payload(EmailAddress.named("Ann", "ann@example.com"), msg)
        >>> payload.fields["from"], payload.fields["to"], payload.fields["text"]
        (['Ann <ann@example.com>'], ['bob@example.com'], ['Hello'])
    """
    payload = MessagePayload()
    payload.add("from", str(sender))
    _add_recipients(payload, "to", message.to)
    _add_recipients(payload, "cc", message.cc)
    _add_recipients(payload, "bcc", message.bcc)
    payload.add("subject", message.subject)

    if message.body is not None:
        if message.body.text is not None:
            payload.add("text", message.body.text)
        if message.body.html is not None:
            payload.add("html", message.body.html)
    if message.template is not None:
        _add_template(payload, message.template)

    _add_options(payload, message.options)
    payload.files.extend(_file_part(attachment) for attachment in message.attachments)
    return payload


def attachment_from_path(path: Path, *, inline: bool = False) -> Attachment:
    """Read *path* into an :class:`Attachment`, guessing its content type.

    Raises:
        FileNotFoundError: When *path* does not exist.
    """
    content_type, _encoding = mimetypes.guess_type(path.name)
    return Attachment(
        filename=path.name,
        content=path.read_bytes(),
        content_type=content_type or _DEFAULT_CONTENT_TYPE,
        inline=inline,
    )


__all__ = [
    "FilePart",
    "MessagePayload",
    "attachment_from_path",
    "build_message_payload",
    "format_delivery_time",
]
