from decimal import Decimal

import logging

from groupsplit.config import Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("GROUPSPLIT_SETTLEMENT_TOLERANCE", raising=False)
    monkeypatch.delenv("GROUPSPLIT_LOG_LEVEL", raising=False)
    settings = Settings()
    assert settings.settlement_tolerance == Decimal("0.01")
    assert settings.default_currency == "USD"
    assert settings.log_level_number == logging.INFO


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("GROUPSPLIT_SETTLEMENT_TOLERANCE", "0.05")
    monkeypatch.setenv("GROUPSPLIT_LOG_LEVEL", "debug")
    settings = Settings()
    assert settings.settlement_tolerance == Decimal("0.05")
    assert settings.log_level_number == logging.DEBUG


def test_unknown_log_level_falls_back_to_info(monkeypatch):
    monkeypatch.setenv("GROUPSPLIT_LOG_LEVEL", "chatty")
    assert Settings().log_level_number == logging.INFO
