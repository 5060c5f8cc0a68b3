"""Storage layer for bankcore."""

from bankcore.storage.base import AccountsRepository, InMemoryAccountsRepository
from bankcore.storage.file_accounts import FileAccountsRepository
from bankcore.storage.transaction_log import TransactionLog
from bankcore.storage.factories import create_file_repository, create_transaction_log

__all__ = [
    "AccountsRepository",
    "InMemoryAccountsRepository",
    "FileAccountsRepository",
    "TransactionLog",
    "create_file_repository",
    "create_transaction_log",
]
