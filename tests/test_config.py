import logging

import pytest

from korisp import config


def test_log_level_default(monkeypatch):
    monkeypatch.delenv("KORISP_LOG_LEVEL", raising=False)
    assert config.get_log_level() == logging.WARNING


@pytest.mark.parametrize("raw, level", [("debug", logging.DEBUG), ("INFO", logging.INFO), ("loud", logging.WARNING)])
def test_log_level_from_environment(monkeypatch, raw, level):
    monkeypatch.setenv("KORISP_LOG_LEVEL", raw)
    assert config.get_log_level() == level


@pytest.mark.parametrize("raw, expected", [("1", True), ("yes", True), ("0", False), ("", False)])
def test_debug_flags(monkeypatch, raw, expected):
    monkeypatch.setenv("KORISP_DEBUG_TOKENS", raw)
    monkeypatch.setenv("KORISP_DEBUG_EXPANSION", raw)
    assert config.debug_tokens() is expected
    assert config.debug_expansion() is expected


@pytest.mark.parametrize("raw, limit", [(None, 10_000), ("50000", 50_000), ("10", 1000), ("many", 10_000)])
def test_recursion_limit(monkeypatch, raw, limit):
    if raw is None:
        monkeypatch.delenv("KORISP_RECURSION_LIMIT", raising=False)
    else:
        monkeypatch.setenv("KORISP_RECURSION_LIMIT", raw)
    assert config.get_recursion_limit() == limit
