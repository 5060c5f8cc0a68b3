"""Money movement commands (standard or admin session)."""

import click

from bankcore.cli.error_handling import handle_domain_error
from bankcore.cli.session_runner import require_identity, run_in_session
from bankcore.domain.errors import DomainError
from bankcore.utils.amount_parser import parse_amount


def session_options(func):
    """Add the --holder/--admin options shared by all money commands."""
    func = click.option(
        "--admin",
        is_flag=True,
        help="Run in an admin session (no ownership checks or session limits)",
    )(func)
    func = click.option(
        "--holder",
        help="Account holder name; logs in a standard session, or names the holder in an admin session",
    )(func)
    return func


def _parse_or_exit(ctx: click.Context, amount: str):
    try:
        return parse_amount(amount)
    except DomainError as e:
        handle_domain_error(ctx, e)


@click.command("withdraw")
@click.argument("account", metavar="ACCOUNT")
@click.argument("amount", metavar="AMOUNT")
@session_options
@click.pass_context
def withdraw(ctx, account: str, amount: str, holder: str | None, admin: bool):
    """Withdraw AMOUNT from ACCOUNT.

    Standard sessions may withdraw at most $500.00 per login.

    Examples:
        bankcore withdraw 00001 30.00 --holder "Alice"
    """
    require_identity(holder, admin)
    value = _parse_or_exit(ctx, amount)
    record = run_in_session(
        ctx,
        lambda service, session: service.withdrawal(session, account, value, holder_name=holder),
        holder=holder,
        admin=admin,
    )
    click.echo(f"Withdrawal of ${value:,.2f} from account {record.account_id} recorded.")


@click.command("deposit")
@click.argument("account", metavar="ACCOUNT")
@click.argument("amount", metavar="AMOUNT")
@session_options
@click.pass_context
def deposit(ctx, account: str, amount: str, holder: str | None, admin: bool):
    """Deposit AMOUNT into ACCOUNT.

    The deposit is credited when the session logs out.

    Examples:
        bankcore deposit 00001 50.00 --holder "Alice"
    """
    require_identity(holder, admin)
    value = _parse_or_exit(ctx, amount)
    record = run_in_session(
        ctx,
        lambda service, session: service.deposit(session, account, value, holder_name=holder),
        holder=holder,
        admin=admin,
    )
    click.echo(f"Deposit of ${value:,.2f} to account {record.account_id} recorded.")


@click.command("transfer")
@click.argument("from_account", metavar="FROM_ACCOUNT")
@click.argument("to_account", metavar="TO_ACCOUNT")
@click.argument("amount", metavar="AMOUNT")
@session_options
@click.pass_context
def transfer(
    ctx, from_account: str, to_account: str, amount: str, holder: str | None, admin: bool
):
    """Transfer AMOUNT from FROM_ACCOUNT to TO_ACCOUNT.

    Standard sessions may transfer at most $1000.00 per login.

    Examples:
        bankcore transfer 00001 00002 100.00 --holder "Alice"
    """
    require_identity(holder, admin)
    value = _parse_or_exit(ctx, amount)
    record = run_in_session(
        ctx,
        lambda service, session: service.transfer(
            session, from_account, to_account, value, holder_name=holder
        ),
        holder=holder,
        admin=admin,
    )
    click.echo(f"Transfer of ${value:,.2f} from account {record.account_id} recorded.")


@click.command("paybill")
@click.argument("account", metavar="ACCOUNT")
@click.argument("company", metavar="COMPANY")
@click.argument("amount", metavar="AMOUNT")
@session_options
@click.pass_context
def paybill(ctx, account: str, company: str, amount: str, holder: str | None, admin: bool):
    """Pay AMOUNT from ACCOUNT to COMPANY (EC, CQ or FI).

    Standard sessions may pay at most $2000.00 in bills per login.

    Examples:
        bankcore paybill 00001 EC 75.00 --holder "Alice"
    """
    require_identity(holder, admin)
    value = _parse_or_exit(ctx, amount)
    record = run_in_session(
        ctx,
        lambda service, session: service.paybill(
            session, account, company, value, holder_name=holder
        ),
        holder=holder,
        admin=admin,
    )
    click.echo(f"Payment of ${value:,.2f} to {record.misc} recorded.")


def register_commands(cli):
    """Register money movement commands with main CLI."""
    for command in (withdraw, deposit, transfer, paybill):
        cli.add_command(command)
