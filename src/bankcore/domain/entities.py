"""Domain model entities for bankcore.

Accounts are mutable records owned by the account store. Transaction
records are immutable values that know how to render themselves as one
line of the daily transactions file.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum

from bankcore.domain.errors import InvalidAmountError, InsufficientFundsError
from bankcore.utils.fixed_width import (
    account_id_field,
    misc_field,
    money_field,
    name_field,
    pad_right,
    to_decimal,
)

TRANSACTION_LINE_WIDTH = 40


class AccountStatus(StrEnum):
    """Account status, stored as a single character."""

    ACTIVE = "A"
    DISABLED = "D"

    @classmethod
    def from_code(cls, code: str) -> "AccountStatus":
        """Decode a status character, defaulting to ACTIVE."""
        for status in cls:
            if status.value == code:
                return status
        return cls.ACTIVE


class AccountPlan(StrEnum):
    """Account fee plan."""

    STANDARD = "SP"
    NEW = "NP"


class TransactionCode(StrEnum):
    """Two-character operation codes written to the transactions file."""

    END_OF_SESSION = "00"
    WITHDRAWAL = "01"
    TRANSFER = "02"
    PAYBILL = "03"
    DEPOSIT = "04"
    CREATE = "05"
    DELETE = "06"
    DISABLE = "07"
    CHANGEPLAN = "08"


@dataclass
class Account:
    """Bank account domain entity."""

    id: str
    name: str
    status: AccountStatus = AccountStatus.ACTIVE
    balance: Decimal = Decimal("0.00")
    plan: AccountPlan = AccountPlan.STANDARD

    @property
    def is_disabled(self) -> bool:
        return self.status is AccountStatus.DISABLED

    def owned_by(self, holder_name: str | None) -> bool:
        """Check whether ``holder_name`` matches the stored name, ignoring case."""
        if holder_name is None:
            return False
        return self.name.strip().lower() == holder_name.strip().lower()

    def credit(self, amount: Decimal) -> None:
        """Add ``amount`` to the balance. Callers validate the amount."""
        self.balance += to_decimal(amount)

    def debit(self, amount: Decimal) -> None:
        """Subtract ``amount`` from the balance.

        Raises:
            InvalidAmountError: If amount is negative
            InsufficientFundsError: If amount exceeds the balance
        """
        amount = to_decimal(amount)
        if amount < 0:
            raise InvalidAmountError("Amount must be non-negative")
        if amount > self.balance:
            raise InsufficientFundsError(f"Insufficient funds in account {self.id}")
        self.balance -= amount

    def set_status(self, status: AccountStatus) -> None:
        self.status = status

    def set_plan(self, plan: AccountPlan) -> None:
        self.plan = plan


@dataclass(frozen=True)
class TransactionRecord:
    """One logged operation."""

    code: str
    name: str
    account_id: str
    amount: Decimal
    misc: str = ""

    @classmethod
    def end_of_session(cls) -> "TransactionRecord":
        """Return the terminal record written after every flush."""
        return cls(
            code=TransactionCode.END_OF_SESSION.value,
            name="",
            account_id="00000",
            amount=Decimal("0"),
        )

    def to_fixed40(self) -> str:
        """Render as ``CC NNNNNNNNNNNNNNNNNNNN IIIII MMMMMMMMXX``."""
        line = (
            f"{self.code} "
            f"{name_field(self.name)} "
            f"{account_id_field(self.account_id)} "
            f"{money_field(self.amount)}"
            f"{misc_field(self.misc)}"
        )
        return pad_right(line, TRANSACTION_LINE_WIDTH)
