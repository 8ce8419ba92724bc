"""Typed Mailgun response bodies and the JSON-to-model boundary.

Response bodies are decoded with orjson and validated with Pydantic in a
single step. Anything that does not fit the model surfaces as
:class:`~mailgun_v3.domain.errors.PayloadError`; callers never see
``orjson.JSONDecodeError`` or ``pydantic.ValidationError``.
"""

from __future__ import annotations

from datetime import datetime
from email.utils import parsedate_to_datetime
from typing import Any, TypeVar

import orjson
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from mailgun_v3.domain.errors import PayloadError

_ModelT = TypeVar("_ModelT", bound=BaseModel)


class SendResponse(BaseModel):
    """Result of a successful messages-endpoint call.

    Example:
        >>> resp = SendResponse.model_validate({"id": "<1@mg.example.com>", "message": "Queued. Thank you."})
        >>> resp.id
        '<1@mg.example.com>'
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    message: str


class ValidationResponse(BaseModel):
    """Result of the v4 single address validation endpoint."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    address: str
    is_disposable_address: bool = False
    is_role_address: bool = False
    reason: list[str] = Field(default_factory=list)
    result: str
    risk: str
    did_you_mean: str | None = None

    @property
    def is_deliverable(self) -> bool:
        return self.result == "deliverable"


class DnsRecord(BaseModel):
    """A DNS record Mailgun wants to see for a domain."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    record_type: str
    name: str | None = None
    value: str
    valid: str | None = None
    priority: str | int | None = None


class DomainInfo(BaseModel):
    """Sending domain details, flattened from the ``domain`` object plus DNS records."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    state: str
    type: str | None = None
    created_at: datetime
    smtp_login: str | None = None
    spam_action: str | None = None
    wildcard: bool = False
    sending_dns_records: list[DnsRecord] = Field(default_factory=list)
    receiving_dns_records: list[DnsRecord] = Field(default_factory=list)

    @field_validator("created_at", mode="before")
    @classmethod
    def _parse_rfc2822(cls, v: Any) -> Any:
        """Mailgun reports dates as RFC 2822 strings, e.g. ``Thu, 13 Oct 2011 18:02:00 GMT``.

        Example:
            >>> DomainInfo._parse_rfc2822("Thu, 13 Oct 2011 18:02:00 GMT").year
            2011
        """
        if isinstance(v, str):
            try:
                return parsedate_to_datetime(v)
            except (TypeError, ValueError):
                return v
        return v


def decode_json(content: bytes) -> Any:
    """Decode a response body, raising PayloadError on malformed JSON.

    Example:
        >>> decode_json(b'{"message": "ok"}')
        {'message': 'ok'}
    """
    try:
        return orjson.loads(content)
    except orjson.JSONDecodeError as exc:
        raise PayloadError(f"Mailgun returned malformed JSON: {exc}") from exc


def _validate(model: type[_ModelT], data: Any) -> _ModelT:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise PayloadError(f"Unexpected {model.__name__} payload: {exc.error_count()} validation error(s)") from exc


def parse_send_response(content: bytes) -> SendResponse:
    """Parse a messages-endpoint response body."""
    return _validate(SendResponse, decode_json(content))


def parse_validation_response(content: bytes) -> ValidationResponse:
    """Parse an address validation response body."""
    return _validate(ValidationResponse, decode_json(content))


def _dns_records(raw: Any) -> list[dict[str, Any]]:
    if not isinstance(raw, list):
        return []
    return [record for record in raw if isinstance(record, dict)]  # pyright: ignore[reportUnknownVariableType]


def parse_domain_response(content: bytes) -> DomainInfo:
    """Parse a ``GET /domains/<domain>`` response body.

    The API nests the domain under ``domain`` and lists DNS records beside
    it; the model flattens both.
    """
    data = decode_json(content)
    if not isinstance(data, dict) or not isinstance(data.get("domain"), dict):
        raise PayloadError("Unexpected DomainInfo payload: missing 'domain' object")
    flattened: dict[str, Any] = dict(data["domain"])
    flattened["sending_dns_records"] = _dns_records(data.get("sending_dns_records"))
    flattened["receiving_dns_records"] = _dns_records(data.get("receiving_dns_records"))
    return _validate(DomainInfo, flattened)


def extract_error_message(content: bytes, fallback: str) -> str:
    """Pull the ``message`` text out of an error body, else return *fallback*.

    Examples:
        >>> extract_error_message(b'{"message": "Invalid private key"}', "Unauthorized")
        'Invalid private key'
        >>> extract_error_message(b"Forbidden", "Forbidden")
        'Forbidden'
    """
    try:
        data = orjson.loads(content)
    except orjson.JSONDecodeError:
        text = content.decode("utf-8", errors="replace").strip()
        return text or fallback
    if isinstance(data, dict):
        message = data.get("message")  # pyright: ignore[reportUnknownMemberType]
        if isinstance(message, str) and message:
            return message
    return fallback


__all__ = [
    "DnsRecord",
    "DomainInfo",
    "SendResponse",
    "ValidationResponse",
    "decode_json",
    "extract_error_message",
    "parse_domain_response",
    "parse_send_response",
    "parse_validation_response",
]
