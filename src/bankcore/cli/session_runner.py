"""CLI helper running one operation inside its own login session."""

from __future__ import annotations

from typing import Callable, Optional

import click

from bankcore.cli.error_handling import handle_domain_error
from bankcore.domain.banking import BankService
from bankcore.domain.entities import TransactionRecord
from bankcore.domain.errors import DomainError, PersistenceError
from bankcore.domain.session import Session

Operation = Callable[[BankService, Session], TransactionRecord]


def run_in_session(
    ctx: click.Context,
    operation: Operation,
    holder: Optional[str] = None,
    admin: bool = False,
) -> TransactionRecord:
    """Log in, run ``operation``, log out and save the account store.

    A rejected operation exits with status 1 before anything is written,
    so neither the accounts file nor the transactions file changes.
    """
    service: BankService = ctx.obj["service"]
    session = Session()
    if admin:
        session.login_admin()
    else:
        session.login_standard(holder or "")

    try:
        record = operation(service, session)
    except DomainError as e:
        handle_domain_error(ctx, e)

    try:
        service.logout(session)
        service.repository.save()
    except PersistenceError as e:
        handle_domain_error(ctx, e)

    return record


def require_identity(holder: Optional[str], admin: bool) -> None:
    """Reject invocations that name neither a holder nor an admin session."""
    if not admin and not holder:
        raise click.UsageError("Provide --holder NAME for a standard session, or --admin")
