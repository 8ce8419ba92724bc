"""Mailgun configuration model and loader.

Provides the MailgunConfig Pydantic model for validated, immutable connection
settings and the loader function to create it from configuration dictionaries.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from mailgun_v3.domain.address import EmailAddress, parse_address
from mailgun_v3.domain.credentials import Credentials
from mailgun_v3.domain.enums import Region
from mailgun_v3.domain.errors import ConfigurationError


class MailgunConfig(BaseModel):
    """Validated, immutable Mailgun configuration.

    Example:
        >>> config = MailgunConfig(domain="mg.example.com", region="eu")
        >>> config.resolved_api_base
        'https://api.eu.mailgun.net/v3'
    """

    model_config = ConfigDict(frozen=True)

    api_key: str | None = Field(default=None, repr=False)
    domain: str | None = None
    region: Region = Region.US
    api_base: str | None = None
    from_address: str | None = None
    timeout: float = 30.0
    test_mode: bool = False

    @field_validator("api_key", "domain", "api_base", "from_address", mode="before")
    @classmethod
    def _coerce_empty_string_to_none(cls, v: str | None) -> str | None:
        """Coerce empty or whitespace-only strings to None.

        Config files and environment variables use empty strings for
        "not configured"; treating them as None keeps a blank api_key from
        turning into an authentication attempt.
        """
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("region", mode="before")
    @classmethod
    def _coerce_region_case(cls, v: Any) -> Any:
        """Accept ``EU``/``Eu`` as well as ``eu``.

        Example:
            >>> MailgunConfig._coerce_region_case("EU")
            'eu'
        """
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @model_validator(mode="after")
    def _validate_config(self) -> MailgunConfig:
        """Validate configuration values.

        Raises:
            ValueError: When configuration values are invalid.

        Example:
            >>> MailgunConfig(timeout=0)  # doctest: +IGNORE_EXCEPTION_DETAIL
            Traceback (most recent call last):
            ...
            ValidationError: ...
        """
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.from_address is not None:
            parse_address(self.from_address)
        if self.api_base is not None and not self.api_base.startswith("http"):
            raise ValueError(f"api_base must be an http(s) URL, got {self.api_base!r}")
        return self

    @property
    def resolved_api_base(self) -> str:
        """Explicit ``api_base`` when set, else the region's public host."""
        return self.api_base if self.api_base is not None else self.region.api_base

    @property
    def sender(self) -> EmailAddress | None:
        """The configured default sender, parsed."""
        return parse_address(self.from_address) if self.from_address is not None else None

    def __repr__(self) -> str:
        """Return string representation with api_key redacted.

        Example:
            >>> config = MailgunConfig(api_key="key-" + "s" * 32)
            >>> "sss" in repr(config)
            False
            >>> "[REDACTED]" in repr(config)
            True
        """
        fields: list[str] = []
        for name, value in self:
            if name == "api_key" and value is not None:
                fields.append(f"{name}='[REDACTED]'")
            else:
                fields.append(f"{name}={value!r}")
        return f"MailgunConfig({', '.join(fields)})"

    def to_credentials(self) -> Credentials:
        """Build domain Credentials from this configuration.

        Returns:
            Credentials for the configured API base, key, and domain.

        Raises:
            ConfigurationError: When the API key or domain is not configured.
            InvalidCredentialsError: When the configured values fail the
                shape checks (key too short, domain without dots).
        """
        if self.api_key is None:
            raise ConfigurationError("No Mailgun API key configured (mailgun.api_key is empty)")
        if self.domain is None:
            raise ConfigurationError("No Mailgun sending domain configured (mailgun.domain is empty)")
        return Credentials.with_base(self.resolved_api_base, self.api_key, self.domain)


def load_mailgun_config_from_dict(config_dict: Mapping[str, Any]) -> MailgunConfig:
    """Load MailgunConfig from a configuration dictionary.

    Bridges lib_layered_config's dictionary output with the typed
    MailgunConfig Pydantic model.

    Args:
        config_dict: Configuration dictionary typically from lib_layered_config.
            Expected to have a 'mailgun' section.

    Returns:
        Configured Mailgun settings with defaults for missing values.

    Example:
        >>> config = load_mailgun_config_from_dict({"mailgun": {"domain": "mg.example.com", "timeout": 5}})
        >>> config.domain, config.timeout
        ('mg.example.com', 5.0)
        >>> load_mailgun_config_from_dict({}).region
        <Region.US: 'us'>
    """
    section: Any = config_dict.get("mailgun", {})

    if not isinstance(section, Mapping):
        return MailgunConfig.model_validate(section)

    raw: dict[str, Any] = dict(cast(Mapping[str, Any], section))
    return MailgunConfig.model_validate(raw)


__all__ = [
    "MailgunConfig",
    "load_mailgun_config_from_dict",
]
