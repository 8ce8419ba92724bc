"""Logging configuration model and RuntimeConfig translation.

init_logging itself starts the lib_log_rich runtime and is exercised through
the CLI tests with the in-memory no-op.
"""

from __future__ import annotations

import pytest
from lib_layered_config import Config

from mailgun_v3.adapters.logging.setup import (
    LoggingConfigModel,
    _runtime_config_from,  # pyright: ignore[reportPrivateUsage]
)


@pytest.mark.os_agnostic
def test_unknown_keys_pass_through() -> None:
    """Extra keys are kept for RuntimeConfig."""
    parsed = LoggingConfigModel.model_validate({"service": "relay", "environment": "dev", "console_level": "DEBUG"})

    assert parsed.service == "relay"
    assert parsed.environment == "dev"
    assert parsed.model_dump(exclude={"service", "environment"}, exclude_none=True) == {"console_level": "DEBUG"}


@pytest.mark.os_agnostic
def test_defaults() -> None:
    """An empty section means production and no explicit service."""
    parsed = LoggingConfigModel.model_validate({})

    assert parsed.service is None
    assert parsed.environment == "prod"


@pytest.mark.os_agnostic
@pytest.mark.parametrize("blank", ["", "  "])
def test_blank_service_is_unset(blank: str) -> None:
    """Empty strings from config files do not become a service name."""
    assert LoggingConfigModel(service=blank).service is None


@pytest.mark.os_agnostic
def test_runtime_config_falls_back_to_the_package_name() -> None:
    """Without a configured service the package name is used."""
    runtime = _runtime_config_from(Config({}, {}))

    assert runtime.service == "mailgun_v3"
    assert runtime.environment == "prod"


@pytest.mark.os_agnostic
def test_runtime_config_uses_the_configured_values() -> None:
    """Configured service and environment win."""
    runtime = _runtime_config_from(Config({"lib_log_rich": {"service": "relay", "environment": "staging"}}, {}))

    assert runtime.service == "relay"
    assert runtime.environment == "staging"
