"""Outbound message model: recipients, body, attachments, template, options.

All types are immutable. Construction runs the structural checks Mailgun
would otherwise reject with an HTTP 400, so a ``Message`` that exists is one
the API will accept as far as shape goes.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .address import EmailAddress
from .enums import ClickTracking
from .errors import InvalidMessageError

#: Mailgun accepts at most three ``o:tag`` values per message.
MAX_TAGS = 3


def _empty_mapping() -> dict[str, Any]:
    return {}


@dataclass(frozen=True, slots=True)
class MessageBody:
    """Plain-text part, HTML part, or both.

    Example:
        >>> MessageBody(text="Hello").html is None
        True
        >>> MessageBody()  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        InvalidMessageError: message body needs text, html, or both
    """

    text: str | None = None
    html: str | None = None

    def __post_init__(self) -> None:
        if self.text is None and self.html is None:
            raise InvalidMessageError("message body needs text, html, or both")


@dataclass(frozen=True, slots=True)
class Attachment:
    """A file part sent as ``attachment`` or, when *inline*, as ``inline``.

    Inline parts are referenced from the HTML body via ``cid:<filename>``.
    """

    filename: str
    content: bytes
    content_type: str | None = None
    inline: bool = False

    def __post_init__(self) -> None:
        if not self.filename:
            raise InvalidMessageError("attachment filename must not be empty")


@dataclass(frozen=True, slots=True)
class Template:
    """A stored Mailgun template rendered server side."""

    name: str
    version: str | None = None
    variables: Mapping[str, Any] = field(default_factory=_empty_mapping)
    render_text: bool = False


@dataclass(frozen=True, slots=True)
class SendOptions:
    """Per-message ``o:``, ``h:`` and ``v:`` options.

    ``None`` on a boolean option means "use the domain setting".
    """

    tags: tuple[str, ...] = ()
    headers: Mapping[str, str] = field(default_factory=_empty_mapping)
    variables: Mapping[str, Any] = field(default_factory=_empty_mapping)
    recipient_variables: Mapping[str, Mapping[str, Any]] = field(default_factory=_empty_mapping)
    delivery_time: datetime | None = None
    test_mode: bool | None = None
    tracking: bool | None = None
    tracking_clicks: ClickTracking | None = None
    tracking_opens: bool | None = None
    require_tls: bool | None = None
    skip_verification: bool | None = None
    dkim: bool | None = None
    reply_to: EmailAddress | None = None

    def __post_init__(self) -> None:
        if len(self.tags) > MAX_TAGS:
            raise InvalidMessageError(f"at most {MAX_TAGS} tags per message, got {len(self.tags)}")
        for name in self.headers:
            if not name or ":" in name:
                raise InvalidMessageError(f"invalid header name: {name!r}")
            if self.reply_to is not None and name.lower() == "reply-to":
                raise InvalidMessageError("set reply_to or a Reply-To header, not both")
        if self.delivery_time is not None and self.delivery_time.tzinfo is None:
            raise InvalidMessageError("delivery_time must be timezone-aware")


@dataclass(frozen=True, slots=True)
class Message:
    """An email ready to be handed to the messages endpoint.

    Example:
        >>> msg = Message(
        ...     to=(EmailAddress.address_only("bob@example.com"),),
        ...     subject="Hi",
        ...     body=MessageBody(text="Hello Bob"),
        ... )
        >>> len(msg.recipients)
        1
    """

    to: tuple[EmailAddress, ...]
    subject: str
    body: MessageBody | None = None
    cc: tuple[EmailAddress, ...] = ()
    bcc: tuple[EmailAddress, ...] = ()
    attachments: tuple[Attachment, ...] = ()
    template: Template | None = None
    options: SendOptions = field(default_factory=SendOptions)

    def __post_init__(self) -> None:
        if not self.to:
            raise InvalidMessageError("message needs at least one 'to' recipient")
        if self.body is None and self.template is None:
            raise InvalidMessageError("message needs a body or a template")

    @property
    def recipients(self) -> tuple[EmailAddress, ...]:
        """Every address the message is delivered to (to, cc, bcc)."""
        return self.to + self.cc + self.bcc


__all__ = [
    "MAX_TAGS",
    "Attachment",
    "Message",
    "MessageBody",
    "SendOptions",
    "Template",
]
