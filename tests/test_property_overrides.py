"""Property-based checks for ``parse_override`` and ``coerce_value``."""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from mailgun_v3.adapters.config.overrides import coerce_value, parse_override

_identifier = st.from_regex(r"[A-Za-z_][A-Za-z0-9_]*", fullmatch=True)
_COERCED_TYPES = (str, int, float, bool, list, dict)


@pytest.mark.os_agnostic
@given(raw=st.text())
@settings(max_examples=200)
def test_coerce_value_never_raises(raw: str) -> None:
    """Any text coerces to a JSON-compatible Python value."""
    result = coerce_value(raw)

    assert result is None or isinstance(result, _COERCED_TYPES)


@pytest.mark.os_agnostic
@given(value=st.integers(min_value=-(2**53), max_value=2**53))
def test_integers_survive_coercion(value: int) -> None:
    """Integer text becomes the integer."""
    assert coerce_value(str(value)) == value


@pytest.mark.os_agnostic
@given(raw=_identifier)
@settings(max_examples=200)
def test_identifiers_stay_strings(raw: str) -> None:
    """Bare words other than JSON literals are kept verbatim."""
    if raw in {"true", "false", "null"}:
        return

    assert coerce_value(raw) == raw


@pytest.mark.os_agnostic
@given(section=_identifier, key=_identifier, value=st.text(max_size=50))
@settings(max_examples=200)
def test_parse_override_splits_any_well_formed_input(section: str, key: str, value: str) -> None:
    """SECTION.KEY=VALUE always yields that section and key."""
    override = parse_override(f"{section}.{key}={value}")

    assert override.section == section
    assert override.key_path == (key,)
    assert override.value == coerce_value(value)


@pytest.mark.os_agnostic
@given(raw=st.text().filter(lambda text: "=" not in text))
def test_parse_override_without_equals_always_fails(raw: str) -> None:
    """No '=' means no value, whatever else the text holds."""
    with pytest.raises(ValueError, match="must contain '='"):
        parse_override(raw)
