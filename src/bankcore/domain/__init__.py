"""Domain layer for bankcore."""

from bankcore.domain.entities import (
    Account,
    AccountPlan,
    AccountStatus,
    TransactionCode,
    TransactionRecord,
)
from bankcore.domain.session import LimitKind, Session, SessionRole

__all__ = [
    "Account",
    "AccountPlan",
    "AccountStatus",
    "TransactionCode",
    "TransactionRecord",
    "LimitKind",
    "Session",
    "SessionRole",
]
