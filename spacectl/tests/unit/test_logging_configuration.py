from __future__ import annotations

import logging

import pytest

from spacectl.utils.logging import configure_root


@pytest.fixture(autouse=True)
def _restore_levels(monkeypatch):
    root = logging.getLogger()
    ws = logging.getLogger("websockets")
    saved = (root.level, ws.level)
    monkeypatch.delenv("SPACECTL_LOG_LEVEL", raising=False)
    monkeypatch.delenv("SPACECTL_DEBUG", raising=False)
    yield
    root.setLevel(saved[0])
    ws.setLevel(saved[1])


def test_default_level_is_info() -> None:
    assert configure_root() == logging.INFO


def test_debug_flag_wins_over_environment(monkeypatch) -> None:
    monkeypatch.setenv("SPACECTL_LOG_LEVEL", "ERROR")

    assert configure_root(debug=True) == logging.DEBUG
    assert logging.getLogger("websockets").level == logging.INFO


def test_environment_level_and_debug_toggle(monkeypatch) -> None:
    monkeypatch.setenv("SPACECTL_LOG_LEVEL", "warning")
    assert configure_root() == logging.WARNING

    monkeypatch.delenv("SPACECTL_LOG_LEVEL")
    monkeypatch.setenv("SPACECTL_DEBUG", "yes")
    assert configure_root() == logging.DEBUG
