"""Tests for config, factories and logging."""

import logging
from decimal import Decimal

import pytest

from bankcore.config import BankConfig
from bankcore.domain.errors import InvalidAmountError
from bankcore.logging import get_logger, setup_logging
from bankcore.storage.factories import create_file_repository, create_transaction_log
from bankcore.utils.amount_parser import parse_amount


class TestBankConfig:
    """Tests for BankConfig."""

    def test_defaults(self):
        """Test default configuration values."""
        config = BankConfig()
        assert config.accounts_path.endswith("accounts.txt")
        assert config.transactions_path.endswith("transactions.txt")
        assert config.log_level == "WARNING"

    def test_from_env(self, monkeypatch):
        """Test configuration read from the environment."""
        monkeypatch.setenv("BANKCORE_ACCOUNTS_PATH", "/data/a.txt")
        monkeypatch.setenv("BANKCORE_TRANSACTIONS_PATH", "/data/t.txt")
        monkeypatch.setenv("BANKCORE_LOG_LEVEL", "DEBUG")
        config = BankConfig.from_env()
        assert config.accounts_path == "/data/a.txt"
        assert config.transactions_path == "/data/t.txt"
        assert config.log_level == "DEBUG"

    def test_from_env_defaults(self, monkeypatch):
        """Test an empty environment gives the defaults."""
        monkeypatch.delenv("BANKCORE_ACCOUNTS_PATH", raising=False)
        monkeypatch.delenv("BANKCORE_TRANSACTIONS_PATH", raising=False)
        monkeypatch.delenv("BANKCORE_LOG_LEVEL", raising=False)
        assert BankConfig.from_env() == BankConfig()


class TestFactories:
    """Tests for storage factories."""

    def test_explicit_paths(self, accounts_path, transactions_path):
        """Test factories use explicit paths."""
        assert create_file_repository(accounts_path).accounts_path == accounts_path
        assert create_transaction_log(transactions_path).transactions_path == transactions_path

    def test_environment_paths(self, monkeypatch, tmp_path):
        """Test factories fall back to environment paths."""
        monkeypatch.setenv("BANKCORE_ACCOUNTS_PATH", str(tmp_path / "env-a.txt"))
        monkeypatch.setenv("BANKCORE_TRANSACTIONS_PATH", str(tmp_path / "env-t.txt"))
        assert create_file_repository().accounts_path == str(tmp_path / "env-a.txt")
        assert create_transaction_log().transactions_path == str(tmp_path / "env-t.txt")


class TestLogging:
    """Tests for logging setup."""

    def test_setup_logging_sets_level(self):
        """Test setup_logging sets the package level."""
        setup_logging("DEBUG")
        package_logger = logging.getLogger("bankcore")
        assert package_logger.level == logging.DEBUG
        assert len(package_logger.handlers) == 1

    def test_setup_logging_replaces_handlers(self):
        """Test repeated setup does not stack handlers."""
        setup_logging("INFO")
        setup_logging("INFO")
        assert len(logging.getLogger("bankcore").handlers) == 1

    def test_unknown_level_falls_back(self):
        """Test unknown level names fall back to WARNING."""
        setup_logging("chatty")
        assert logging.getLogger("bankcore").level == logging.WARNING

    def test_get_logger(self):
        """Test get_logger returns the named logger."""
        assert get_logger("bankcore.test").name == "bankcore.test"


class TestParseAmount:
    """Tests for command-line amount parsing."""

    def test_plain(self):
        """Test parsing plain and formatted amounts."""
        assert parse_amount("123.45") == Decimal("123.45")
        assert parse_amount("$1,234.50") == Decimal("1234.50")
        assert parse_amount("-5") == Decimal("-5")

    def test_rejects(self):
        """Test invalid amounts raise InvalidAmountError."""
        for text in ("", "  ", "abc", "1.234", "inf", "NaN"):
            with pytest.raises(InvalidAmountError):
                parse_amount(text)
