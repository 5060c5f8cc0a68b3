"""Factory functions for creating the account store and transaction log."""

from pathlib import Path
from typing import Optional

from bankcore.config import BankConfig, DEFAULT_DIR
from bankcore.storage.file_accounts import FileAccountsRepository
from bankcore.storage.transaction_log import TransactionLog


def _ensure_default_dir(path: str) -> str:
    # Default to ~/.bankcore, created on first use
    if Path(path).parent == DEFAULT_DIR:
        DEFAULT_DIR.mkdir(exist_ok=True)
    return path


def create_file_repository(accounts_path: Optional[str] = None) -> FileAccountsRepository:
    """Create a file-backed account store.

    Args:
        accounts_path: Path to the accounts file. If None, checks
            BANKCORE_ACCOUNTS_PATH, then defaults to ~/.bankcore/accounts.txt

    Returns:
        FileAccountsRepository instance (not yet loaded)
    """
    if accounts_path is None:
        accounts_path = _ensure_default_dir(BankConfig.from_env().accounts_path)
    return FileAccountsRepository(accounts_path)


def create_transaction_log(transactions_path: Optional[str] = None) -> TransactionLog:
    """Create a transaction log.

    Args:
        transactions_path: Path to the daily transactions file. If None, checks
            BANKCORE_TRANSACTIONS_PATH, then defaults to ~/.bankcore/transactions.txt

    Returns:
        TransactionLog instance
    """
    if transactions_path is None:
        transactions_path = _ensure_default_dir(BankConfig.from_env().transactions_path)
    return TransactionLog(transactions_path)
