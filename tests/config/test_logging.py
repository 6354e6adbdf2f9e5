from __future__ import annotations

import logging
import sys
from collections.abc import Iterator  # noqa: TC003

import pytest

from extcat.config import configure_logging
from extcat.config.logging import HTTP_LOGGERS


@pytest.fixture
def basic_config_calls(monkeypatch: pytest.MonkeyPatch) -> Iterator[list[dict[str, object]]]:
    calls: list[dict[str, object]] = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    levels = {name: logging.getLogger(name).level for name in HTTP_LOGGERS}
    yield calls
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)


def test_logs_go_to_stderr(basic_config_calls: list[dict[str, object]]) -> None:
    configure_logging()

    (call,) = basic_config_calls
    assert call["stream"] is sys.stderr
    assert call["level"] == logging.INFO
    assert call["force"] is False


def test_http_libraries_are_quiet_unless_debugging(
    basic_config_calls: list[dict[str, object]],
) -> None:
    configure_logging(level=logging.INFO)
    assert all(logging.getLogger(name).level == logging.WARNING for name in HTTP_LOGGERS)

    configure_logging(level=logging.DEBUG, force=True)
    assert all(logging.getLogger(name).level == logging.DEBUG for name in HTTP_LOGGERS)
    assert basic_config_calls[-1]["force"] is True
