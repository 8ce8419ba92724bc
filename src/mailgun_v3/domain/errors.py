"""Domain-specific exceptions for typed error handling at boundaries."""

from __future__ import annotations


class ConfigurationError(Exception):
    """Missing, invalid, or incomplete configuration.

    Raised when required configuration values (API key, sending domain,
    sender address) are absent or logically inconsistent. Typically caught at
    CLI boundaries to provide user-friendly error messages.

    Example:
        >>> from mailgun_v3.domain.errors import ConfigurationError
        >>> err = ConfigurationError("No Mailgun API key configured")
        >>> str(err)
        'No Mailgun API key configured'
    """


class MailgunError(Exception):
    """Base class for failures talking to the Mailgun API."""


class TransportError(MailgunError):
    """The request never produced an HTTP response (DNS, connect, TLS, read).

    Example:
        >>> err = TransportError("Connection refused by api.mailgun.net")
        >>> isinstance(err, MailgunError)
        True
    """


class MailgunTimeoutError(TransportError):
    """The request timed out before Mailgun answered."""


class ApiError(MailgunError):
    """Mailgun answered with a non-2xx status.

    Attributes:
        status_code: HTTP status returned by Mailgun.
        message: Error text from the JSON ``message`` key, or the raw body.

    Example:
        >>> err = ApiError(401, "Forbidden")
        >>> err.status_code
        401
        >>> str(err)
        'Mailgun API returned HTTP 401: Forbidden'
    """

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"Mailgun API returned HTTP {status_code}: {message}")
        self.status_code = status_code
        self.message = message


class PayloadError(MailgunError):
    """A 2xx response body was not the JSON document we expected."""


class InvalidAddressError(ValueError):
    """Email address or display name failed structural validation.

    Inherits from ValueError so callers treating bad input generically
    keep working.

    Example:
        >>> err = InvalidAddressError("Invalid email address")
        >>> isinstance(err, ValueError)
        True
    """


class InvalidCredentialsError(ValueError):
    """API base, key, or domain failed the basic shape checks."""


class InvalidMessageError(ValueError):
    """Message is structurally unsendable (no recipients, no body, too many tags)."""


__all__ = [
    "ApiError",
    "ConfigurationError",
    "InvalidAddressError",
    "InvalidCredentialsError",
    "InvalidMessageError",
    "MailgunError",
    "MailgunTimeoutError",
    "PayloadError",
    "TransportError",
]
