"""Type-safe domain enums for output formats, API regions, and click tracking."""

from __future__ import annotations

from enum import Enum


class OutputFormat(str, Enum):
    """Output format options for configuration and result display.

    Inherits from str to allow direct string comparison and Click integration.

    Attributes:
        HUMAN: Human-readable output.
        JSON: Machine-readable JSON output.

    Example:
        >>> OutputFormat.HUMAN.value
        'human'
        >>> OutputFormat.JSON == "json"
        True
    """

    HUMAN = "human"
    JSON = "json"


class Region(str, Enum):
    """Mailgun hosting region; each region has its own API host.

    Example:
        >>> Region.EU.api_base
        'https://api.eu.mailgun.net/v3'
        >>> Region("us") is Region.US
        True
    """

    US = "us"
    EU = "eu"

    @property
    def api_base(self) -> str:
        return _REGION_API_BASES[self]


_REGION_API_BASES: dict[Region, str] = {
    Region.US: "https://api.mailgun.net/v3",
    Region.EU: "https://api.eu.mailgun.net/v3",
}


class ClickTracking(str, Enum):
    """Values accepted by the ``o:tracking-clicks`` message option."""

    YES = "yes"
    NO = "no"
    HTML_ONLY = "htmlonly"


__all__ = [
    "ClickTracking",
    "OutputFormat",
    "Region",
]
