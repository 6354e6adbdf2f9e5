from __future__ import annotations

import pytest

from extcat.config import env_flag, optional_env_var


def test_optional_env_var_strips_value(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "  value ")

    assert optional_env_var("EXAMPLE_VAR") == "value"


def test_optional_env_var_treats_blank_as_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "   ")

    assert optional_env_var("EXAMPLE_VAR") is None


@pytest.mark.parametrize(
    ("value", "expected"),
    [("1", True), ("TRUE", True), ("on", True), ("0", False), ("nope", False)],
)
def test_env_flag(monkeypatch: pytest.MonkeyPatch, value: str, expected: bool) -> None:
    monkeypatch.setenv("EXAMPLE_FLAG", value)

    assert env_flag("EXAMPLE_FLAG") is expected


def test_env_flag_defaults_to_false(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("EXAMPLE_FLAG", raising=False)

    assert env_flag("EXAMPLE_FLAG") is False
