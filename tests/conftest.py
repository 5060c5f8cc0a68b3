"""Shared pytest fixtures for bankcore tests."""

import logging
from decimal import Decimal

import pytest

from bankcore.domain.banking import BankService
from bankcore.domain.entities import Account, AccountStatus
from bankcore.domain.session import Session
from bankcore.storage.factories import create_file_repository, create_transaction_log


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by CLI runs so later tests log cleanly."""
    yield
    package_logger = logging.getLogger("bankcore")
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def accounts_path(tmp_path):
    """Path of a temporary accounts file (not created)."""
    return str(tmp_path / "accounts.txt")


@pytest.fixture
def transactions_path(tmp_path):
    """Path of a temporary daily transactions file (not created)."""
    return str(tmp_path / "transactions.txt")


@pytest.fixture
def repository(accounts_path):
    """Create an empty, loaded file-backed account store."""
    repo = create_file_repository(accounts_path=accounts_path)
    repo.load()
    return repo


@pytest.fixture
def transaction_log(transactions_path):
    """Create a transaction log writing to a temporary file."""
    return create_transaction_log(transactions_path=transactions_path)


@pytest.fixture
def bank_service(repository, transaction_log):
    """Create a BankService over the temporary store and log."""
    return BankService(repository, transaction_log)


@pytest.fixture
def sample_accounts(repository):
    """Populate the store with a few accounts."""
    accounts = [
        Account(id="00001", name="Alice", balance=Decimal("1000.00")),
        Account(id="00002", name="Bob", balance=Decimal("250.00")),
        Account(id="00003", name="Carol", balance=Decimal("5000.00")),
        Account(
            id="00004",
            name="Dave",
            status=AccountStatus.DISABLED,
            balance=Decimal("300.00"),
        ),
    ]
    for account in accounts:
        repository.add(account)
    return {account.name: account for account in accounts}


@pytest.fixture
def admin_session():
    """Create a logged-in admin session."""
    session = Session()
    session.login_admin()
    return session


@pytest.fixture
def alice_session():
    """Create a standard session for Alice."""
    session = Session()
    session.login_standard("Alice")
    return session


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def cli_paths(accounts_path, transactions_path):
    """Global CLI options pointing at the temporary files."""
    return ["--accounts-file", accounts_path, "--transactions-file", transactions_path]
