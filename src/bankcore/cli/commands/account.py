"""Account management commands (admin session)."""

import click

from bankcore.cli.error_handling import handle_domain_error
from bankcore.cli.session_runner import run_in_session
from bankcore.domain.errors import DomainError
from bankcore.utils.amount_parser import parse_amount


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts."""
    repository = ctx.obj["repository"]

    accounts = repository.list_accounts()
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 60)
    for acc in accounts:
        click.echo(
            f"ID: {acc.id} | {acc.name:20s} | {acc.status.name:8s} | "
            f"{acc.plan.value} | ${acc.balance:,.2f}"
        )


@account_group.command("create")
@click.argument("name", metavar="HOLDER_NAME")
@click.argument("balance", metavar="INITIAL_BALANCE")
@click.pass_context
def create_account(ctx, name: str, balance: str):
    """Create a new account.

    The account starts active on the standard plan and receives the next
    free identifier.

    Examples:
        bankcore accounts create "Alice" 100.00
    """
    try:
        initial_balance = parse_amount(balance)
    except DomainError as e:
        handle_domain_error(ctx, e)

    record = run_in_session(
        ctx,
        lambda service, session: service.create(session, name, initial_balance),
        admin=True,
    )
    click.echo(f"Created account '{name.strip()}' (ID: {record.account_id})")


@account_group.command("delete")
@click.argument("name", metavar="HOLDER_NAME")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def delete_account(ctx, name: str, account: str) -> None:
    """Delete an account.

    HOLDER_NAME must match the name stored on the account (case-insensitive).

    Examples:
        bankcore accounts delete "Alice" 00001
    """
    repository = ctx.obj["repository"]
    if repository.exists(account):
        account_obj = repository.get(account)
        if not click.confirm(
            f"Are you sure you want to delete account '{account_obj.name}' (ID: {account_obj.id})?"
        ):
            click.echo("Deletion cancelled.")
            return

    record = run_in_session(
        ctx,
        lambda service, session: service.delete(session, name, account),
        admin=True,
    )
    click.echo(f"Deleted account {record.account_id}")


@account_group.command("disable")
@click.argument("name", metavar="HOLDER_NAME")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def disable_account(ctx, name: str, account: str) -> None:
    """Disable an account.

    Examples:
        bankcore accounts disable "Alice" 1
    """
    record = run_in_session(
        ctx,
        lambda service, session: service.disable(session, name, account),
        admin=True,
    )
    click.echo(f"Disabled account {record.account_id}")


@account_group.command("changeplan")
@click.argument("name", metavar="HOLDER_NAME")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def changeplan_account(ctx, name: str, account: str) -> None:
    """Move an account to the new plan.

    Examples:
        bankcore accounts changeplan "Alice" 00001
    """
    record = run_in_session(
        ctx,
        lambda service, session: service.changeplan(session, name, account),
        admin=True,
    )
    click.echo(f"Account {record.account_id} moved to plan {record.misc}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="accounts")
