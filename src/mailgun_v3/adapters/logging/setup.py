"""lib_log_rich runtime bootstrap shared by the console script and ``python -m``.

Contents:
    * :class:`LoggingConfigModel` - validates the ``[lib_log_rich]`` section.
    * :func:`init_logging` - idempotent runtime initialisation.

The Mailgun client logs through the standard :mod:`logging` module; once
:func:`init_logging` has run those records are bridged into lib_log_rich so
request context bound by the CLI (``job_id``, recipient counts, domain) is
rendered alongside them.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import cast

import lib_log_rich.config
import lib_log_rich.runtime
from lib_layered_config import Config
from pydantic import BaseModel, ConfigDict, field_validator

from mailgun_v3 import __init__conf__


class LoggingConfigModel(BaseModel):
    """Typed view of ``[lib_log_rich]``.

    Only ``service`` and ``environment`` are interpreted here; every other key
    passes through untouched to :class:`lib_log_rich.runtime.RuntimeConfig`.

    Example:
        >>> LoggingConfigModel(environment="staging").environment
        'staging'
        >>> LoggingConfigModel(service="").service is None
        True
        >>> LoggingConfigModel(console_level="DEBUG").model_dump()["console_level"]
        'DEBUG'
    """

    model_config = ConfigDict(extra="allow")

    service: str | None = None
    environment: str = "prod"

    @field_validator("service", mode="before")
    @classmethod
    def _blank_service_is_unset(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value


def _runtime_config_from(config: Config) -> lib_log_rich.runtime.RuntimeConfig:
    """Translate the ``[lib_log_rich]`` section into a RuntimeConfig.

    An empty ``service`` falls back to the package name so log records from
    different deployments stay attributable to ``mailgun_v3``.
    """
    section: object = config.get("lib_log_rich", default={})
    raw = dict(cast("Mapping[str, object]", section)) if isinstance(section, Mapping) else {}
    parsed = LoggingConfigModel.model_validate(raw)
    passthrough = parsed.model_dump(exclude={"service", "environment"}, exclude_none=True)
    return lib_log_rich.runtime.RuntimeConfig(
        service=parsed.service or __init__conf__.name,
        environment=parsed.environment,
        **passthrough,
    )


def init_logging(config: Config) -> None:
    """Initialise lib_log_rich once per process and bridge stdlib logging.

    ``.env`` files are loaded first so ``LOG_*`` variables found next to the
    project participate in the runtime configuration. Calling this again after
    the runtime is up is a no-op.

    Args:
        config: Layered configuration carrying an optional ``[lib_log_rich]``
            section.

    Example:
        >>> init_logging(Config({"lib_log_rich": {"environment": "test"}}, {}))  # doctest: +SKIP
    """
    if lib_log_rich.runtime.is_initialised():
        return
    lib_log_rich.config.enable_dotenv()
    lib_log_rich.runtime.init(_runtime_config_from(config))
    lib_log_rich.runtime.attach_std_logging()


__all__ = [
    "LoggingConfigModel",
    "init_logging",
]
