"""``python -m mailgun_v3``: same CLI as the ``mailgun-v3`` console script."""

from __future__ import annotations

from .adapters.cli.main import main
from .composition import build_production

if __name__ == "__main__":
    raise SystemExit(main(services_factory=build_production))
