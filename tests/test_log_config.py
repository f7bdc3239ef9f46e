from __future__ import annotations

import logging

import pytest

from shop_engine.log_config import resolve_log_level


def test_explicit_level_wins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TOYSHOP_LOG_LEVEL", "ERROR")

    assert resolve_log_level("debug") == logging.DEBUG


def test_environment_level_then_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TOYSHOP_LOG_LEVEL", "info")
    assert resolve_log_level() == logging.INFO

    monkeypatch.delenv("TOYSHOP_LOG_LEVEL")
    assert resolve_log_level() == logging.WARNING


def test_unknown_level_is_rejected() -> None:
    with pytest.raises(ValueError):
        resolve_log_level("chatty")
