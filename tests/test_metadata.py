"""Package metadata, pyproject consistency and the PEP 561 marker."""

from __future__ import annotations

from pathlib import Path
from typing import Any, cast

import pytest
import rtoml

PROJECT_ROOT = Path(__file__).resolve().parent.parent
PYPROJECT_PATH = PROJECT_ROOT / "pyproject.toml"
PACKAGE_DIR = PROJECT_ROOT / "src" / "mailgun_v3"


def _pyproject() -> dict[str, Any]:
    return rtoml.load(PYPROJECT_PATH)


def _wheel_table() -> dict[str, Any]:
    tool = cast(dict[str, Any], _pyproject().get("tool", {}))
    targets = cast(dict[str, Any], tool.get("hatch", {}).get("build", {}).get("targets", {}))
    return cast(dict[str, Any], targets.get("wheel", {}))


@pytest.mark.os_agnostic
def test_print_info_lists_the_metadata(capsys: pytest.CaptureFixture[str]) -> None:
    """print_info starts with a header and lists the version."""
    from mailgun_v3 import print_info

    print_info()

    output = capsys.readouterr().out
    assert output.startswith("Info for mailgun_v3:")
    assert "version" in output


@pytest.mark.os_agnostic
def test_static_metadata_matches_pyproject() -> None:
    """__init__conf__ mirrors [project]."""
    from mailgun_v3 import __init__conf__

    project = cast(dict[str, Any], _pyproject()["project"])
    assert __init__conf__.name == project["name"]
    assert __init__conf__.version == project["version"]
    assert __init__conf__.shell_command in project["scripts"]


@pytest.mark.os_agnostic
def test_py_typed_marker_exists() -> None:
    """The PEP 561 marker ships in the package."""
    assert (PACKAGE_DIR / "py.typed").is_file()


@pytest.mark.os_agnostic
def test_wheel_includes_the_marker_and_default_config() -> None:
    """py.typed and defaultconfig.toml are part of the wheel."""
    includes = cast(list[str], _wheel_table().get("include", []))

    assert any(entry.endswith("py.typed") for entry in includes)
    assert any(entry.endswith("defaultconfig.toml") for entry in includes)


@pytest.mark.os_agnostic
def test_default_config_has_a_mailgun_section() -> None:
    """The bundled defaults declare every [mailgun] key."""
    defaults = rtoml.load(PACKAGE_DIR / "adapters" / "config" / "defaultconfig.toml")

    assert {"api_key", "domain", "region", "from_address", "timeout", "test_mode"} <= set(defaults["mailgun"])
