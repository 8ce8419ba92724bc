"""Blocking Mailgun API client built on httpx.

One :class:`MailgunClient` owns one ``httpx.Client`` configured with HTTP
basic auth (user ``api``, password = API key). Every call is a single
synchronous request; retries and pooling are whatever httpx provides.

Error mapping:
    * ``httpx.TimeoutException`` -> :class:`MailgunTimeoutError`
    * other ``httpx.TransportError`` -> :class:`TransportError`
    * non-2xx status -> :class:`ApiError`
    * malformed or unexpected JSON -> :class:`PayloadError`
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any

import httpx

from mailgun_v3 import __init__conf__
from mailgun_v3.domain.address import EmailAddress
from mailgun_v3.domain.credentials import Credentials
from mailgun_v3.domain.errors import ApiError, MailgunTimeoutError, TransportError
from mailgun_v3.domain.message import Message

from .payload import build_message_payload
from .responses import (
    DomainInfo,
    SendResponse,
    ValidationResponse,
    extract_error_message,
    parse_domain_response,
    parse_send_response,
    parse_validation_response,
)

logger = logging.getLogger(__name__)

MESSAGES_ENDPOINT = "messages"
DEFAULT_TIMEOUT = 30.0


def validation_base(api_base: str) -> str:
    """Return the v4 base used by address validation.

    Validation lives under ``/v4`` while everything else is ``/v3``; a base
    without a ``/v3`` suffix (mock servers, proxies) is used unchanged.

    Examples:
        >>> validation_base("https://api.mailgun.net/v3")
        'https://api.mailgun.net/v4'
        >>> validation_base("http://mailgun.test")
        'http://mailgun.test'
    """
    base = api_base.rstrip("/")
    if base.endswith("/v3"):
        return base[: -len("/v3")] + "/v4"
    return base


class MailgunClient:
    """Typed calls against one Mailgun sending domain.

    Args:
        credentials: API base, key, and sending domain.
        timeout: Per-request timeout in seconds.
        transport: Optional httpx transport; tests pass ``httpx.MockTransport``.

    Example:
        >>> creds = Credentials.with_base("http://mailgun.test/v3", "key-" + "0" * 32, "mg.example.com")
        >>> with MailgunClient(creds) as client:
        ...     client.messages_url
        'http://mailgun.test/v3/mg.example.com/messages'
    """

    def __init__(
        self,
        credentials: Credentials,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._credentials = credentials
        self._http = httpx.Client(
            auth=("api", credentials.api_key),
            timeout=timeout,
            transport=transport,
            headers={"User-Agent": f"{__init__conf__.name}/{__init__conf__.version}"},
        )

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    @property
    def messages_url(self) -> str:
        return f"{self._credentials.api_base}/{self._credentials.domain}/{MESSAGES_ENDPOINT}"

    @property
    def domain_url(self) -> str:
        return f"{self._credentials.api_base}/domains/{self._credentials.domain}"

    @property
    def validation_url(self) -> str:
        return f"{validation_base(self._credentials.api_base)}/address/validate"

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> MailgunClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Issue one request and translate httpx failures into domain errors."""
        try:
            response = self._http.request(method, url, **kwargs)
        except httpx.TimeoutException as exc:
            logger.error("Mailgun request timed out", extra={"method": method, "url": url})
            raise MailgunTimeoutError(f"{method} {url} timed out") from exc
        except httpx.TransportError as exc:
            logger.error("Mailgun request failed", extra={"method": method, "url": url, "error": str(exc)})
            raise TransportError(f"{method} {url} failed: {exc}") from exc

        if not response.is_success:
            message = extract_error_message(response.content, response.reason_phrase)
            logger.error(
                "Mailgun API returned an error",
                extra={"method": method, "url": url, "status_code": response.status_code, "error": message},
            )
            raise ApiError(response.status_code, message)
        return response

    def send_message(self, sender: EmailAddress, message: Message) -> SendResponse:
        """Send *message* from *sender* through the messages endpoint.

        Raises:
            ApiError: Mailgun rejected the request.
            TransportError: The request did not complete.
            PayloadError: The response body was not the expected JSON.
        """
        payload = build_message_payload(sender, message)
        logger.info(
            "Sending message",
            extra={
                "domain": self._credentials.domain,
                "sender": sender.email,
                "recipient_count": len(message.recipients),
                "subject": message.subject,
                "attachment_count": len(message.attachments),
            },
        )
        response = self._request(
            "POST",
            self.messages_url,
            data=payload.as_form_data(),
            files=payload.files or None,
        )
        result = parse_send_response(response.content)
        logger.info("Message queued", extra={"domain": self._credentials.domain, "message_id": result.id})
        return result

    def validate_address(self, address: str) -> ValidationResponse:
        """Run Mailgun's single address validation for *address*."""
        logger.info("Validating address", extra={"address": address})
        response = self._request("GET", self.validation_url, params={"address": address})
        return parse_validation_response(response.content)

    def get_domain(self) -> DomainInfo:
        """Fetch state and DNS records of the configured sending domain."""
        logger.info("Fetching domain", extra={"domain": self._credentials.domain})
        response = self._request("GET", self.domain_url)
        return parse_domain_response(response.content)


__all__ = [
    "DEFAULT_TIMEOUT",
    "MESSAGES_ENDPOINT",
    "MailgunClient",
    "validation_base",
]
