"""Shared pytest fixtures for library, CLI and module-entry tests.

Two seams are replaced in tests:
- the HTTP boundary, through ``httpx.MockTransport`` (``mock_mailgun``)
- the application ports, through ``AppServices`` built around a ``MailgunSpy``
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass, fields
from pathlib import Path
from typing import TYPE_CHECKING, Any

import httpx
import lib_cli_exit_tools
import pytest
from click.testing import CliRunner
from lib_layered_config import Config
from lib_layered_config.domain.config import SourceInfo

from mailgun_v3.domain.address import EmailAddress
from mailgun_v3.domain.credentials import Credentials
from mailgun_v3.domain.message import Message, MessageBody

if TYPE_CHECKING:
    from mailgun_v3.adapters.memory.mailgun import MailgunSpy
    from mailgun_v3.composition import AppServices


def _load_dotenv() -> None:
    """Load a local .env so the live Mailgun tests can find credentials."""
    from dotenv import load_dotenv

    env_file = Path(__file__).parent.parent / ".env"
    if env_file.exists():
        load_dotenv(env_file)


_load_dotenv()

ANSI_ESCAPE_PATTERN = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")
CONFIG_FIELDS: tuple[str, ...] = tuple(field.name for field in fields(type(lib_cli_exit_tools.config)))

#: 36 characters, long enough for the key length check.
TEST_API_KEY = "key-0123456789abcdef0123456789abcdef"
TEST_DOMAIN = "mg.example.com"


def _remove_ansi_codes(text: str) -> str:
    """Return *text* stripped of ANSI escape sequences."""
    return ANSI_ESCAPE_PATTERN.sub("", text)


def _snapshot_cli_config() -> dict[str, object]:
    """Capture every attribute from ``lib_cli_exit_tools.config``."""
    return {name: getattr(lib_cli_exit_tools.config, name) for name in CONFIG_FIELDS}


def _restore_cli_config(snapshot: dict[str, object]) -> None:
    """Reapply a configuration snapshot captured by ``_snapshot_cli_config``."""
    for name, value in snapshot.items():
        setattr(lib_cli_exit_tools.config, name, value)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a fresh CliRunner per test."""
    return CliRunner()


@pytest.fixture
def production_factory() -> Callable[[], AppServices]:
    """Provide the production services factory for commands that touch no network."""
    from mailgun_v3.composition import build_production

    return build_production


@pytest.fixture
def strip_ansi() -> Callable[[str], str]:
    """Return a helper that strips ANSI escape sequences from a string."""

    def _strip(value: str) -> str:
        return _remove_ansi_codes(value)

    return _strip


@pytest.fixture
def managed_traceback_state() -> Iterator[None]:
    """Reset traceback flags to a known baseline and restore them after the test."""
    lib_cli_exit_tools.reset_config()
    lib_cli_exit_tools.config.traceback = False
    lib_cli_exit_tools.config.traceback_force_color = False
    snapshot = _snapshot_cli_config()
    try:
        yield
    finally:
        _restore_cli_config(snapshot)


@pytest.fixture
def clear_config_cache() -> Iterator[None]:
    """Clear the get_config lru_cache before the test.

    Only clears before, not after: a test may monkeypatch ``get_config`` and
    lose ``cache_clear`` on the way.
    """
    from mailgun_v3.adapters.config import loader as config_mod

    config_mod.get_config.cache_clear()
    yield


@pytest.fixture
def config_factory() -> Callable[[dict[str, Any]], Config]:
    """Create real Config instances from plain dicts, without provenance."""

    def _factory(data: dict[str, Any]) -> Config:
        return Config(data, {})

    return _factory


@pytest.fixture
def source_info_factory() -> Callable[[str, str, str | None], SourceInfo]:
    """Create SourceInfo dicts for provenance tests."""

    def _factory(key: str, layer: str, path: str | None = None) -> SourceInfo:
        return {"layer": layer, "path": path, "key": key}

    return _factory


@pytest.fixture
def credentials() -> Credentials:
    """Credentials for the default US API host."""
    return Credentials.create(TEST_API_KEY, TEST_DOMAIN)


@pytest.fixture
def sender() -> EmailAddress:
    """A named sender address."""
    return EmailAddress.named("Ann Sender", "ann@example.com")


@pytest.fixture
def simple_message() -> Message:
    """A plain-text message with one recipient."""
    return Message(
        to=(EmailAddress.address_only("bob@example.com"),),
        subject="Hello",
        body=MessageBody(text="Hi Bob"),
    )


@pytest.fixture
def mailgun_settings() -> dict[str, Any]:
    """A complete ``[mailgun]`` section."""
    return {
        "api_key": TEST_API_KEY,
        "domain": TEST_DOMAIN,
        "region": "us",
        "from_address": "Ann Sender <ann@example.com>",
        "timeout": 5.0,
    }


@dataclass
class RecordedExchange:
    """Requests seen by a mocked Mailgun and the handler answering them."""

    requests: list[httpx.Request]
    transport: httpx.MockTransport


@pytest.fixture
def mock_mailgun() -> Callable[[Callable[[httpx.Request], httpx.Response]], RecordedExchange]:
    """Wrap a request handler in an ``httpx.MockTransport`` that records requests.

    Example:
        def test_send(mock_mailgun) -> None:
            exchange = mock_mailgun(lambda request: httpx.Response(200, json={...}))
            client = MailgunClient(credentials, transport=exchange.transport)
    """

    def _create(handler: Callable[[httpx.Request], httpx.Response]) -> RecordedExchange:
        requests: list[httpx.Request] = []

        def _recording(request: httpx.Request) -> httpx.Response:
            request.read()
            requests.append(request)
            return handler(request)

        return RecordedExchange(requests=requests, transport=httpx.MockTransport(_recording))

    return _create


def _testing_services(spy: MailgunSpy | None = None) -> AppServices:
    """In-memory adapters plus the production lib_log_rich initialiser.

    Commands run inside ``lib_log_rich.runtime.bind``, which needs a live
    runtime; the in-memory ``init_logging`` never starts one.
    """
    from mailgun_v3.composition import AppServices, build_production, build_testing

    base = build_testing(spy=spy)
    return AppServices(
        get_config=base.get_config,
        display_config=base.display_config,
        send_message=base.send_message,
        validate_address=base.validate_address,
        get_domain=base.get_domain,
        load_mailgun_config_from_dict=base.load_mailgun_config_from_dict,
        init_logging=build_production().init_logging,
    )


@pytest.fixture
def inject_test_services() -> Callable[[], Callable[[], AppServices]]:
    """Return a factory of in-memory services with a running logging runtime."""

    def _inject() -> Callable[[], AppServices]:
        return _testing_services

    return _inject


@pytest.fixture
def config_cli_context(
    clear_config_cache: None,
) -> Callable[[dict[str, Any]], Callable[[], AppServices]]:
    """Return a factory wiring production services around an injected Config."""
    from mailgun_v3.composition import AppServices, build_production

    def _create(config_data: dict[str, Any]) -> Callable[[], AppServices]:
        config = Config(config_data, {})
        prod = build_production()

        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        test_services = AppServices(
            get_config=_fake_get_config,
            display_config=prod.display_config,
            send_message=prod.send_message,
            validate_address=prod.validate_address,
            get_domain=prod.get_domain,
            load_mailgun_config_from_dict=prod.load_mailgun_config_from_dict,
            init_logging=prod.init_logging,
        )
        return lambda: test_services

    return _create


@pytest.fixture
def inject_config_with_profile_capture(
    clear_config_cache: None,
) -> Callable[[Config, list[str | None]], Callable[[], AppServices]]:
    """Return a factory whose get_config records the profiles it was asked for."""
    from mailgun_v3.composition import AppServices

    def _inject(config: Config, captured_profiles: list[str | None]) -> Callable[[], AppServices]:
        def _capturing_get_config(*, profile: str | None = None, **_kwargs: Any) -> Config:
            captured_profiles.append(profile)
            return config

        base = _testing_services()
        test_services = AppServices(
            get_config=_capturing_get_config,
            display_config=base.display_config,
            send_message=base.send_message,
            validate_address=base.validate_address,
            get_domain=base.get_domain,
            load_mailgun_config_from_dict=base.load_mailgun_config_from_dict,
            init_logging=base.init_logging,
        )
        return lambda: test_services

    return _inject


@dataclass
class MailgunCliContext:
    """Services factory and spy for Mailgun CLI tests.

    Attributes:
        factory: Callable returning wired AppServices for CLI invocation.
        spy: MailgunSpy recording every Mailgun call.
    """

    factory: Callable[[], Any]
    spy: MailgunSpy


@pytest.fixture
def mailgun_cli_context(
    clear_config_cache: None,
) -> Callable[[dict[str, Any]], MailgunCliContext]:
    """Create a CLI context whose ``[mailgun]`` section is *mailgun_data*.

    Mailgun calls land on a fresh MailgunSpy; configuration comes from the
    given dict; logging runs on the production lib_log_rich runtime.

    Example:
        def test_send(cli_runner, mailgun_cli_context, mailgun_settings) -> None:
            ctx = mailgun_cli_context(mailgun_settings)
            result = cli_runner.invoke(cli, ["send", "--to", "a@b.com", ...], obj=ctx.factory)
            assert ctx.spy.sent_messages
    """
    from mailgun_v3.adapters.memory import MailgunSpy as MailgunSpyImpl
    from mailgun_v3.composition import AppServices

    def _create(mailgun_data: dict[str, Any]) -> MailgunCliContext:
        spy = MailgunSpyImpl()
        config = Config({"mailgun": mailgun_data}, {})
        base = _testing_services(spy)

        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        test_services = AppServices(
            get_config=_fake_get_config,
            display_config=base.display_config,
            send_message=base.send_message,
            validate_address=base.validate_address,
            get_domain=base.get_domain,
            load_mailgun_config_from_dict=base.load_mailgun_config_from_dict,
            init_logging=base.init_logging,
        )
        return MailgunCliContext(factory=lambda: test_services, spy=spy)

    return _create
