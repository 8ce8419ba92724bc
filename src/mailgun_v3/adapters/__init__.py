"""Adapters layer - infrastructure and framework integrations.

Contents:
    * :mod:`.config` - Layered configuration loading, overrides and display
    * :mod:`.mailgun` - Mailgun v3 HTTP API client over httpx
    * :mod:`.memory` - In-memory doubles for tests
    * :mod:`.logging` - lib_log_rich runtime setup
    * :mod:`.cli` - rich-click command line interface
"""

from __future__ import annotations

__all__: list[str] = []
