"""Domain error types: hierarchy and message preservation."""

from __future__ import annotations

import pytest

from mailgun_v3.domain.errors import (
    ApiError,
    ConfigurationError,
    InvalidAddressError,
    InvalidCredentialsError,
    InvalidMessageError,
    MailgunError,
    MailgunTimeoutError,
    PayloadError,
    TransportError,
)


@pytest.mark.os_agnostic
def test_api_error_carries_status_and_message() -> None:
    """Both parts are kept and rendered."""
    exc = ApiError(401, "Invalid private key")

    assert exc.status_code == 401
    assert exc.message == "Invalid private key"
    assert str(exc) == "Mailgun API returned HTTP 401: Invalid private key"


@pytest.mark.os_agnostic
@pytest.mark.parametrize("error_type", [TransportError, MailgunTimeoutError, PayloadError])
def test_mailgun_failures_preserve_their_message(error_type: type[MailgunError]) -> None:
    """The detail text is what the user sees."""
    assert str(error_type("connection reset")) == "connection reset"


@pytest.mark.os_agnostic
@pytest.mark.parametrize("error_type", [ApiError, TransportError, MailgunTimeoutError, PayloadError])
def test_every_api_failure_is_a_mailgun_error(error_type: type[Exception]) -> None:
    """One except clause catches every remote failure."""
    assert issubclass(error_type, MailgunError)


@pytest.mark.os_agnostic
@pytest.mark.parametrize("error_type", [InvalidAddressError, InvalidCredentialsError, InvalidMessageError])
def test_input_errors_are_value_errors(error_type: type[Exception]) -> None:
    """Bad input is a ValueError, not a Mailgun failure."""
    assert issubclass(error_type, ValueError)
    assert not issubclass(error_type, MailgunError)


@pytest.mark.os_agnostic
def test_configuration_error_stands_alone() -> None:
    """Missing settings are neither bad input nor a remote failure."""
    exc = ConfigurationError("No Mailgun API key configured")

    assert str(exc) == "No Mailgun API key configured"
    assert not isinstance(exc, (ValueError, MailgunError))
