"""
Tests for environment-based configuration and application wiring
"""

import pytest
import tempfile
from decimal import Decimal
from pathlib import Path

from pydantic import ValidationError

from dhaka_bank.__main__ import build_service
from dhaka_bank.config import BankConfig, get_config, reload_config


class TestBankConfig:
    """Test defaults and environment overrides"""

    def test_defaults(self, monkeypatch):
        for name in ("DATA_FILE", "ATOMIC_WRITES", "PASSWORD_SCHEME", "LOG_LEVEL"):
            monkeypatch.delenv(f"DHAKA_BANK_{name}", raising=False)

        config = BankConfig(_env_file=None)

        assert config.data_file == "accounts.json"
        assert config.atomic_writes is True
        assert config.password_scheme == "scrypt"
        assert config.currency_code == "USD"
        assert config.log_level == "WARNING"
        assert config.log_format == "json"
        assert config.log_file is None

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("DHAKA_BANK_DATA_FILE", "/tmp/bank.json")
        monkeypatch.setenv("DHAKA_BANK_ATOMIC_WRITES", "false")
        monkeypatch.setenv("dhaka_bank_password_scheme", "sha256")

        config = BankConfig(_env_file=None)

        assert config.data_file == "/tmp/bank.json"
        assert config.atomic_writes is False
        assert config.password_scheme == "sha256"

    def test_invalid_scheme_rejected(self, monkeypatch):
        monkeypatch.setenv("DHAKA_BANK_PASSWORD_SCHEME", "md5")

        with pytest.raises(ValidationError):
            BankConfig(_env_file=None)

    def test_reload_config(self, monkeypatch):
        monkeypatch.setenv("DHAKA_BANK_CURRENCY_CODE", "BDT")
        try:
            assert reload_config().currency_code == "BDT"
            assert get_config().currency_code == "BDT"
        finally:
            monkeypatch.delenv("DHAKA_BANK_CURRENCY_CODE")
            reload_config()


class TestBuildService:
    """Test wiring storage and service from configuration"""

    def test_build_service_loads_existing_accounts(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "accounts.json"
            config = BankConfig(_env_file=None, data_file=str(path), password_scheme="sha256")

            first = build_service(config)
            account = first.create_account("rahim", "s3cret", "Rahim Uddin")
            first.deposit(account, Decimal("12.34"))

            second = build_service(config)
            restored = second.get_by_username("rahim")

            assert restored is not None
            assert restored.balance == Decimal("12.34")
            assert second.password_scheme == "sha256"
