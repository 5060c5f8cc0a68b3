"""Fixed-width text file implementation of the account store.

Each line of the accounts file is 37 characters::

    IIIII NNNNNNNNNNNNNNNNNNNN S BBBBBBBB

identifier, holder name, status character and balance, separated by single
spaces. A sentinel line whose name is ``END_OF_FILE`` terminates the data.
The account plan is not part of this layout and loads as the standard plan.
"""

from typing import Optional

from bankcore.domain.entities import Account, AccountPlan, AccountStatus
from bankcore.domain.errors import PersistenceError, persistence_failed
from bankcore.logging import get_logger
from bankcore.storage.base import AccountsRepository
from bankcore.storage.files import write_lines
from bankcore.utils.fixed_width import (
    account_id_field,
    money_field,
    name_field,
    pad_right,
    parse_money,
)

logger = get_logger(__name__)

ACCOUNT_LINE_WIDTH = 37
END_OF_FILE = "END_OF_FILE"

# Field offsets within an account line
ID_SLICE = slice(0, 5)
NAME_SLICE = slice(6, 26)
STATUS_INDEX = 27
BALANCE_SLICE = slice(29, 37)


def encode_account(account: Account) -> str:
    """Render an account as one 37-character line."""
    line = (
        f"{account_id_field(account.id)} "
        f"{name_field(account.name)} "
        f"{account.status.value} "
        f"{money_field(account.balance)}"
    )
    return pad_right(line, ACCOUNT_LINE_WIDTH)


def end_of_file_line() -> str:
    """Return the sentinel line that closes the accounts file."""
    return pad_right(f"00000 {name_field(END_OF_FILE)} A 00000.00", ACCOUNT_LINE_WIDTH)


def decode_account(line: str) -> Optional[Account]:
    """Parse one account line.

    Returns:
        Account, or None for short lines and the sentinel line
    """
    if len(line) < ACCOUNT_LINE_WIDTH:
        return None

    name = line[NAME_SLICE].strip()
    if name == END_OF_FILE:
        return None

    status_code = line[STATUS_INDEX]
    if status_code not in (AccountStatus.ACTIVE.value, AccountStatus.DISABLED.value):
        logger.warning("Unknown status %r in accounts line, treating as active", status_code)

    return Account(
        id=account_id_field(line[ID_SLICE]),
        name=name,
        status=AccountStatus.from_code(status_code),
        balance=parse_money(line[BALANCE_SLICE]),
        plan=AccountPlan.STANDARD,
    )


class FileAccountsRepository(AccountsRepository):
    """Account store persisted to a fixed-width text file."""

    def __init__(self, accounts_path: str):
        """Initialize file-backed account store.

        Args:
            accounts_path: Path to the accounts file
        """
        self.accounts_path = accounts_path
        self._store: dict[str, Account] = {}

    def _accounts(self) -> dict[str, Account]:
        return self._store

    def load(self) -> None:
        """Load accounts from the file, replacing anything held in memory.

        A missing file loads as an empty store.

        Raises:
            PersistenceError: If the file exists but cannot be read
        """
        self._store = {}
        try:
            with open(self.accounts_path, "r", encoding="ascii", errors="replace") as handle:
                for raw_line in handle:
                    line = raw_line.rstrip("\r\n")
                    if len(line) >= ACCOUNT_LINE_WIDTH and line[NAME_SLICE].strip() == END_OF_FILE:
                        break
                    account = decode_account(line)
                    if account is None:
                        logger.debug("Skipping short accounts line %r", line)
                        continue
                    self.add(account)
        except FileNotFoundError:
            logger.warning("Accounts file %s not found, starting empty", self.accounts_path)
            return
        except OSError as e:
            self._store = {}
            raise PersistenceError(
                persistence_failed("read", self.accounts_path, e), path=self.accounts_path
            ) from e

        logger.info("Loaded %d accounts from %s", len(self._store), self.accounts_path)

    def save(self) -> None:
        """Write all accounts sorted by identifier, then the sentinel line.

        Raises:
            PersistenceError: If the file cannot be written
        """
        lines = [encode_account(account) for account in self.list_accounts()]
        lines.append(end_of_file_line())
        write_lines(self.accounts_path, lines)
        logger.info("Saved %d accounts to %s", len(lines) - 1, self.accounts_path)
