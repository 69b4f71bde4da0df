"""Tests for settings loading and logging setup."""

import logging
from decimal import Decimal

import pytest

from payslip_engine.config import PayrollRules, Settings, get_settings
from payslip_engine.logging_config import (
    RequestIdFilter,
    configure_logging,
    get_request_id,
    set_request_id,
)


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in (
            "DATABASE_URL",
            "PAYROLL_HOURS_PER_DAY",
            "PAYROLL_OVERTIME_MULTIPLIER",
            "PAYROLL_CURRENCY_QUANTUM",
            "LOG_LEVEL",
        ):
            monkeypatch.delenv(name, raising=False)

        settings = Settings.from_env()

        assert settings.database_url.startswith("postgresql+asyncpg://")
        assert settings.payroll.hours_per_day == 8
        assert settings.payroll.default_overtime_multiplier == Decimal("2.0")
        assert settings.payroll.currency_quantum == Decimal("0.01")
        assert settings.log_level == "INFO"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///payslips.db")
        monkeypatch.setenv("PAYROLL_HOURS_PER_DAY", "7")
        monkeypatch.setenv("PAYROLL_OVERTIME_MULTIPLIER", "1.5")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("DEBUG", "true")

        settings = Settings.from_env()

        assert settings.database_url == "sqlite+aiosqlite:///payslips.db"
        assert settings.payroll.hours_per_day == 7
        assert settings.payroll.default_overtime_multiplier == Decimal("1.5")
        assert settings.log_level == "DEBUG"
        assert settings.debug is True

    def test_invalid_decimal_is_reported(self, monkeypatch):
        monkeypatch.setenv("PAYROLL_OVERTIME_MULTIPLIER", "double")

        with pytest.raises(ValueError, match="PAYROLL_OVERTIME_MULTIPLIER"):
            Settings.from_env()

    def test_payroll_rules_reject_non_positive_values(self):
        with pytest.raises(ValueError):
            PayrollRules(hours_per_day=0)
        with pytest.raises(ValueError):
            PayrollRules(default_overtime_multiplier=Decimal("0"))

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestLogging:
    def test_request_id_filter(self):
        record = logging.LogRecord("payslip_engine", logging.INFO, __file__, 1, "hi", None, None)

        set_request_id("req-42")
        try:
            RequestIdFilter().filter(record)
            assert record.request_id == "req-42"
            assert get_request_id() == "req-42"
        finally:
            set_request_id(None)

        RequestIdFilter().filter(record)
        assert record.request_id == "-"

    def test_configure_logging_is_idempotent(self):
        configure_logging("INFO")
        configure_logging("DEBUG")

        package_logger = logging.getLogger("payslip_engine")
        ours = [h for h in package_logger.handlers if getattr(h, "_payslip_engine", False)]
        assert len(ours) == 1
        assert package_logger.level == logging.DEBUG
