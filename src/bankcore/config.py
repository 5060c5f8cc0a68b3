"""Configuration management for bankcore."""

import os
from dataclasses import dataclass, field
from pathlib import Path

ACCOUNTS_PATH_ENV = "BANKCORE_ACCOUNTS_PATH"
TRANSACTIONS_PATH_ENV = "BANKCORE_TRANSACTIONS_PATH"
LOG_LEVEL_ENV = "BANKCORE_LOG_LEVEL"

DEFAULT_DIR = Path.home() / ".bankcore"


def default_accounts_path() -> str:
    return str(DEFAULT_DIR / "accounts.txt")


def default_transactions_path() -> str:
    return str(DEFAULT_DIR / "transactions.txt")


@dataclass
class BankConfig:
    """Paths and log level for one run."""

    accounts_path: str = field(default_factory=default_accounts_path)
    transactions_path: str = field(default_factory=default_transactions_path)
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "BankConfig":
        """Create config from environment variables."""
        return cls(
            accounts_path=os.getenv(ACCOUNTS_PATH_ENV) or default_accounts_path(),
            transactions_path=os.getenv(TRANSACTIONS_PATH_ENV) or default_transactions_path(),
            log_level=os.getenv(LOG_LEVEL_ENV, "WARNING"),
        )
