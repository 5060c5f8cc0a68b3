"""Transaction rule engine.

BankService validates every operation against the current session before
touching any state. An operation either applies completely (balances,
session totals and exactly one transaction record) or raises a DomainError
and changes nothing.

Checks run in a fixed order and the first failure wins:

1. the session is logged in
2. the amount is non-negative
3. bill payments only: the company code is known
4. the account exists
5. the account is active
6. standard sessions only: the holder owns the account
7. transfers only: the destination exists and is active
8. standard sessions only: the cumulative session limit
"""

from decimal import Decimal, InvalidOperation
from functools import wraps
from typing import Any, Optional

from bankcore.domain.entities import (
    Account,
    AccountPlan,
    AccountStatus,
    TransactionCode,
    TransactionRecord,
)
from bankcore.domain.errors import (
    AccountDisabledError,
    AdminRequiredError,
    DestinationNotFoundError,
    DomainError,
    HolderMismatchError,
    InvalidAmountError,
    InvalidCompanyCodeError,
    InvalidInitialBalanceError,
    LimitExceededError,
    NameTooLongError,
    OwnershipMismatchError,
    SessionStateError,
    account_disabled,
    holder_mismatch,
    limit_exceeded,
)
from bankcore.domain.session import LimitKind, Session
from bankcore.logging import get_logger
from bankcore.storage.base import AccountsRepository
from bankcore.storage.transaction_log import TransactionLog
from bankcore.utils.fixed_width import NAME_WIDTH, account_id_field

logger = get_logger(__name__)

COMPANY_CODES = frozenset({"EC", "CQ", "FI"})

SESSION_LIMITS: dict[LimitKind, Decimal] = {
    LimitKind.WITHDRAWAL: Decimal("500.00"),
    LimitKind.TRANSFER: Decimal("1000.00"),
    LimitKind.PAYBILL: Decimal("2000.00"),
}

MAX_INITIAL_BALANCE = Decimal("99999.99")

# Keeps balance and total arithmetic inside the default decimal context
MAX_AMOUNT_EXPONENT = 1000


def _parse_decimal(value: Any) -> Optional[Decimal]:
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return None
    return result if result.is_finite() else None


def _operation(func):
    """Log accepted and rejected calls of a BankService operation."""

    @wraps(func)
    def wrapper(self, *args, **kwargs):
        try:
            result = func(self, *args, **kwargs)
        except DomainError as e:
            logger.debug("%s rejected (%s): %s", func.__name__, e.kind, e)
            raise
        logger.info("%s accepted: %s", func.__name__, result.to_fixed40().rstrip())
        return result

    return wrapper


class BankService:
    """Service applying account operations under session rules."""

    def __init__(self, repository: AccountsRepository, transaction_log: TransactionLog):
        """Initialize bank service.

        Args:
            repository: Account store
            transaction_log: Buffer receiving one record per accepted operation
        """
        self.repository = repository
        self.transaction_log = transaction_log
        self._pending_deposits: dict[str, Decimal] = {}

    # Standard and admin operations

    @_operation
    def withdrawal(
        self,
        session: Session,
        account_id: str,
        amount: Decimal,
        holder_name: Optional[str] = None,
    ) -> TransactionRecord:
        """Withdraw from an account.

        Args:
            session: Current session
            account_id: Account to debit
            amount: Amount to withdraw
            holder_name: Name to log when the session is admin

        Returns:
            The logged transaction record
        """
        amount = self._validate_amount(session, amount)
        account = self._validate_account(session, account_id)
        self._check_limit(session, LimitKind.WITHDRAWAL, amount)

        account.debit(amount)
        self._add_total(session, LimitKind.WITHDRAWAL, amount)
        return self._record(session, holder_name, TransactionCode.WITHDRAWAL, account.id, amount)

    @_operation
    def transfer(
        self,
        session: Session,
        from_account_id: str,
        to_account_id: str,
        amount: Decimal,
        holder_name: Optional[str] = None,
    ) -> TransactionRecord:
        """Move funds between two accounts.

        The record is logged against the source account.
        """
        amount = self._validate_amount(session, amount)
        source = self._validate_account(session, from_account_id)

        to_id = account_id_field(to_account_id)
        if not self.repository.exists(to_id):
            raise DestinationNotFoundError(f"Destination account {to_id} does not exist")
        destination = self.repository.get(to_id)
        if destination.is_disabled:
            raise AccountDisabledError(account_disabled(to_id))

        self._check_limit(session, LimitKind.TRANSFER, amount)

        source.debit(amount)
        destination.credit(amount)
        self._add_total(session, LimitKind.TRANSFER, amount)
        return self._record(session, holder_name, TransactionCode.TRANSFER, source.id, amount)

    @_operation
    def paybill(
        self,
        session: Session,
        account_id: str,
        company_code: str,
        amount: Decimal,
        holder_name: Optional[str] = None,
    ) -> TransactionRecord:
        """Pay a bill to one of the known companies (EC, CQ, FI).

        The company code is checked before the account, so an unknown
        company is rejected whatever the state of the account.
        """
        amount = self._validate_amount(session, amount)
        company = (company_code or "").strip().upper()
        if company not in COMPANY_CODES:
            raise InvalidCompanyCodeError(
                f"Invalid company code '{company_code}'. Use EC, CQ, or FI"
            )

        account = self._validate_account(session, account_id)
        self._check_limit(session, LimitKind.PAYBILL, amount)

        account.debit(amount)
        self._add_total(session, LimitKind.PAYBILL, amount)
        return self._record(
            session, holder_name, TransactionCode.PAYBILL, account.id, amount, misc=company
        )

    @_operation
    def deposit(
        self,
        session: Session,
        account_id: str,
        amount: Decimal,
        holder_name: Optional[str] = None,
    ) -> TransactionRecord:
        """Record a deposit.

        The balance is not changed until apply_pending_deposits runs at
        logout, but the record is logged immediately.
        """
        amount = self._validate_amount(session, amount)
        account = self._validate_account(session, account_id)

        self._pending_deposits[account.id] = self.pending_deposit(account.id) + amount
        return self._record(session, holder_name, TransactionCode.DEPOSIT, account.id, amount)

    # Admin operations

    @_operation
    def create(
        self, session: Session, holder_name: str, initial_balance: Decimal
    ) -> TransactionRecord:
        """Open a new active, standard-plan account.

        Returns:
            The logged record; its account_id is the new identifier
        """
        self._require_admin(session)

        name = (holder_name or "").strip()
        if len(name) > NAME_WIDTH:
            raise NameTooLongError(f"Name must be at most {NAME_WIDTH} characters")

        balance = _parse_decimal(initial_balance)
        if balance is None or balance < 0 or balance > MAX_INITIAL_BALANCE:
            raise InvalidInitialBalanceError(
                f"Initial balance must be between 0.00 and {MAX_INITIAL_BALANCE}"
            )

        account = Account(
            id=self.repository.next_account_id(),
            name=name,
            status=AccountStatus.ACTIVE,
            balance=balance,
            plan=AccountPlan.STANDARD,
        )
        self.repository.add(account)
        return self._log(TransactionCode.CREATE, name, account.id, balance)

    @_operation
    def delete(self, session: Session, holder_name: str, account_id: str) -> TransactionRecord:
        """Remove an account whose stored name matches ``holder_name``."""
        account = self._validate_holder(session, holder_name, account_id)
        self.repository.remove(account.id)
        return self._log(TransactionCode.DELETE, holder_name, account.id, Decimal("0"))

    @_operation
    def disable(self, session: Session, holder_name: str, account_id: str) -> TransactionRecord:
        """Disable an account whose stored name matches ``holder_name``."""
        account = self._validate_holder(session, holder_name, account_id)
        account.set_status(AccountStatus.DISABLED)
        return self._log(TransactionCode.DISABLE, holder_name, account.id, Decimal("0"))

    @_operation
    def changeplan(self, session: Session, holder_name: str, account_id: str) -> TransactionRecord:
        """Move an account to the new plan, whatever its current plan."""
        account = self._validate_holder(session, holder_name, account_id)
        account.set_plan(AccountPlan.NEW)
        return self._log(
            TransactionCode.CHANGEPLAN,
            holder_name,
            account.id,
            Decimal("0"),
            misc=AccountPlan.NEW.value,
        )

    # Logout

    def pending_deposit(self, account_id: str) -> Decimal:
        """Return the deposits waiting for ``account_id`` in this session."""
        return self._pending_deposits.get(account_id_field(account_id), Decimal("0.00"))

    def apply_pending_deposits(self) -> int:
        """Credit pending deposits to accounts that still exist.

        Deposits for deleted accounts are dropped. The pending ledger is
        empty afterwards.

        Returns:
            Number of accounts credited
        """
        applied = 0
        for account_id, amount in self._pending_deposits.items():
            if not self.repository.exists(account_id):
                logger.debug("Dropping deposit of %s for missing account %s", amount, account_id)
                continue
            self.repository.get(account_id).credit(amount)
            applied += 1
        self._pending_deposits.clear()
        return applied

    def write_transactions_at_logout(self) -> None:
        """Flush the transaction log to the daily transactions file."""
        self.transaction_log.write_and_clear()

    def logout(self, session: Session) -> None:
        """Apply deposits, write the transactions file and end the session.

        Raises:
            SessionStateError: If the session is not logged in
            PersistenceError: If the transactions file cannot be written; the
                session is still logged out
        """
        if not session.is_logged_in:
            raise SessionStateError("Not logged in")
        applied = self.apply_pending_deposits()
        logger.info("Applied pending deposits to %d accounts", applied)
        try:
            self.write_transactions_at_logout()
        finally:
            session.logout()

    # Validation helpers

    def _validate_amount(self, session: Session, amount: Decimal) -> Decimal:
        if not session.is_logged_in:
            raise SessionStateError("Please login first")
        value = _parse_decimal(amount)
        if value is None or value < 0:
            raise InvalidAmountError("Amount must be non-negative")
        if value.adjusted() > MAX_AMOUNT_EXPONENT:
            raise InvalidAmountError("Amount is out of range")
        return value

    def _validate_account(self, session: Session, account_id: str) -> Account:
        """Return the account if it exists, is active and the session may use it."""
        account = self.repository.get(account_id_field(account_id))
        if account.is_disabled:
            raise AccountDisabledError(account_disabled(account.id))
        if not session.is_admin and not account.owned_by(session.holder_name):
            raise OwnershipMismatchError(
                f"Account {account.id} does not belong to the current user"
            )
        return account

    def _validate_holder(self, session: Session, holder_name: str, account_id: str) -> Account:
        self._require_admin(session)
        account = self.repository.get(account_id_field(account_id))
        if not account.owned_by(holder_name):
            raise HolderMismatchError(holder_mismatch(account.id))
        return account

    def _require_admin(self, session: Session) -> None:
        if not session.is_admin:
            raise AdminRequiredError("Admin only")

    def _check_limit(self, session: Session, kind: LimitKind, amount: Decimal) -> None:
        if session.is_admin:
            return
        limit = SESSION_LIMITS[kind]
        if session.total(kind) + amount > limit:
            raise LimitExceededError(limit_exceeded(kind.value, limit))

    def _add_total(self, session: Session, kind: LimitKind, amount: Decimal) -> None:
        if not session.is_admin:
            session.add_total(kind, amount)

    def _record(
        self,
        session: Session,
        holder_name: Optional[str],
        code: TransactionCode,
        account_id: str,
        amount: Decimal,
        misc: str = "",
    ) -> TransactionRecord:
        name = (holder_name or "") if session.is_admin else session.holder_name
        return self._log(code, name, account_id, amount, misc=misc)

    def _log(
        self,
        code: TransactionCode,
        name: str,
        account_id: str,
        amount: Decimal,
        misc: str = "",
    ) -> TransactionRecord:
        record = TransactionRecord(
            code=code.value,
            name=name or "",
            account_id=account_id,
            amount=amount,
            misc=misc,
        )
        self.transaction_log.add(record)
        return record
