"""Main CLI entry point."""

import click

from bankcore.cli.error_handling import handle_domain_error
from bankcore.config import ACCOUNTS_PATH_ENV, LOG_LEVEL_ENV, TRANSACTIONS_PATH_ENV
from bankcore.domain.banking import BankService
from bankcore.domain.errors import PersistenceError
from bankcore.logging import setup_logging
from bankcore.storage.factories import create_file_repository, create_transaction_log

# Import and register all commands at module level
from bankcore.cli.commands import account, session, transaction


@click.group()
@click.option(
    "--accounts-file",
    type=click.Path(dir_okay=False),
    help="Path to the accounts file (overrides BANKCORE_ACCOUNTS_PATH environment variable)",
    envvar=ACCOUNTS_PATH_ENV,
)
@click.option(
    "--transactions-file",
    type=click.Path(dir_okay=False),
    help="Path to the daily transactions file (overrides BANKCORE_TRANSACTIONS_PATH)",
    envvar=TRANSACTIONS_PATH_ENV,
)
@click.option(
    "--log-level",
    default="WARNING",
    show_default=True,
    help="Log level written to stderr",
    envvar=LOG_LEVEL_ENV,
)
@click.pass_context
def cli(ctx, accounts_file: str | None, transactions_file: str | None, log_level: str):
    """Bankcore - single-branch account ledger.

    Each command loads the accounts file, runs its operations in one
    login session, writes the daily transactions file and saves the
    accounts file. Use "session" to run several operations per login.
    """
    ctx.ensure_object(dict)
    setup_logging(log_level)

    # Load accounts only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        repository = create_file_repository(accounts_path=accounts_file)
        try:
            repository.load()
        except PersistenceError as e:
            handle_domain_error(ctx, e)
        transaction_log = create_transaction_log(transactions_path=transactions_file)
        ctx.obj["repository"] = repository
        ctx.obj["service"] = BankService(repository, transaction_log)


# Register all commands
account.register_commands(cli)
transaction.register_commands(cli)
session.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
