"""Shared domain error messages and error types."""

from decimal import Decimal
from enum import StrEnum
from typing import Optional


class ErrorKind(StrEnum):
    """Machine-readable category of a failed operation."""

    INVALID_AMOUNT = "InvalidAmount"
    INSUFFICIENT_FUNDS = "InsufficientFunds"
    ACCOUNT_NOT_FOUND = "AccountNotFound"
    ACCOUNT_DISABLED = "AccountDisabled"
    OWNERSHIP_MISMATCH = "OwnershipMismatch"
    DESTINATION_NOT_FOUND = "DestinationNotFound"
    INVALID_COMPANY_CODE = "InvalidCompanyCode"
    LIMIT_EXCEEDED = "LimitExceeded"
    ADMIN_REQUIRED = "AdminRequired"
    NAME_TOO_LONG = "NameTooLong"
    INVALID_INITIAL_BALANCE = "InvalidInitialBalance"
    HOLDER_MISMATCH = "HolderMismatch"
    SESSION_STATE = "SessionState"
    PERSISTENCE = "Persistence"


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling. ``kind`` lets callers branch
    on the failure without parsing the message.
    """

    kind: Optional[ErrorKind] = None


class InvalidAmountError(DomainError):
    """Amount is negative."""

    kind = ErrorKind.INVALID_AMOUNT


class InsufficientFundsError(DomainError):
    """Debit exceeds the account balance."""

    kind = ErrorKind.INSUFFICIENT_FUNDS


class AccountNotFoundError(DomainError):
    """Account identifier is not in the store."""

    kind = ErrorKind.ACCOUNT_NOT_FOUND


class AccountDisabledError(DomainError):
    """Account has been disabled."""

    kind = ErrorKind.ACCOUNT_DISABLED


class OwnershipMismatchError(DomainError):
    """Standard session holder does not own the account."""

    kind = ErrorKind.OWNERSHIP_MISMATCH


class DestinationNotFoundError(DomainError):
    """Transfer destination does not exist."""

    kind = ErrorKind.DESTINATION_NOT_FOUND


class InvalidCompanyCodeError(DomainError):
    """Bill payment company code is not recognised."""

    kind = ErrorKind.INVALID_COMPANY_CODE


class LimitExceededError(DomainError):
    """Standard session cumulative limit would be crossed."""

    kind = ErrorKind.LIMIT_EXCEEDED


class AdminRequiredError(DomainError):
    """Operation is reserved for admin sessions."""

    kind = ErrorKind.ADMIN_REQUIRED


class NameTooLongError(DomainError):
    """Holder name exceeds 20 characters."""

    kind = ErrorKind.NAME_TOO_LONG


class InvalidInitialBalanceError(DomainError):
    """Initial balance outside the accepted range."""

    kind = ErrorKind.INVALID_INITIAL_BALANCE


class HolderMismatchError(DomainError):
    """Admin-supplied holder name does not match the account."""

    kind = ErrorKind.HOLDER_MISMATCH


class SessionStateError(DomainError):
    """Login or logout requested from the wrong session state."""

    kind = ErrorKind.SESSION_STATE


class PersistenceError(RuntimeError):
    """Reading or writing a backing file failed."""

    kind = ErrorKind.PERSISTENCE

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


def account_not_found(account_id: str) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def account_disabled(account_id: str) -> str:
    """Return message for a disabled account."""
    return f"Account {account_id} is disabled"


def holder_mismatch(account_id: str) -> str:
    """Return message when the supplied holder name does not match the account."""
    return f"Holder name does not match account {account_id}"


def limit_exceeded(operation: str, limit: Decimal) -> str:
    """Return message for a crossed standard session limit."""
    return f"Standard session {operation} limit is ${limit:.2f}"


def persistence_failed(action: str, path: str, error: OSError) -> str:
    """Return message for a failed file read or write."""
    return f"Could not {action} '{path}': {error.strerror or error}"
