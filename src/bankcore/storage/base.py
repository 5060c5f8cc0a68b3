"""Abstract account store interface."""

from abc import ABC, abstractmethod

from bankcore.domain.entities import Account
from bankcore.domain.errors import AccountNotFoundError, account_not_found
from bankcore.utils.fixed_width import account_id_field


class AccountsRepository(ABC):
    """Abstract keyed store of accounts.

    Identifiers passed to any method are normalised to their 5-digit form
    before lookup, so ``"7"`` and ``"00007"`` address the same account.
    """

    @abstractmethod
    def load(self) -> None:
        """Replace in-memory state with the contents of the backing medium."""
        pass

    @abstractmethod
    def save(self) -> None:
        """Write the complete in-memory state to the backing medium."""
        pass

    @abstractmethod
    def _accounts(self) -> dict[str, Account]:
        """Return the live mapping of normalised identifier to account."""
        pass

    def exists(self, account_id: str) -> bool:
        """Check whether an account is present."""
        return account_id_field(account_id) in self._accounts()

    def get(self, account_id: str) -> Account:
        """Get account by ID.

        Raises:
            AccountNotFoundError: If the account is not present
        """
        key = account_id_field(account_id)
        account = self._accounts().get(key)
        if account is None:
            raise AccountNotFoundError(account_not_found(key))
        return account

    def add(self, account: Account) -> None:
        """Store ``account`` under its normalised identifier."""
        account.id = account_id_field(account.id)
        self._accounts()[account.id] = account

    def remove(self, account_id: str) -> None:
        """Remove an account. Missing accounts are ignored."""
        self._accounts().pop(account_id_field(account_id), None)

    def list_accounts(self) -> list[Account]:
        """List all accounts sorted by identifier."""
        accounts = self._accounts()
        return [accounts[key] for key in sorted(accounts)]

    def next_account_id(self) -> str:
        """Return the highest identifier in the store plus one.

        Identifiers freed by deleting the current maximum are issued again.
        """
        highest = max((int(key) for key in self._accounts()), default=0)
        return account_id_field(str(highest + 1))


class InMemoryAccountsRepository(AccountsRepository):
    """Account store with no backing medium."""

    def __init__(self, accounts: list[Account] | None = None):
        self._store: dict[str, Account] = {}
        for account in accounts or []:
            self.add(account)

    def load(self) -> None:
        pass

    def save(self) -> None:
        pass

    def _accounts(self) -> dict[str, Account]:
        return self._store
