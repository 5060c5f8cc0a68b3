"""Scripted session command: many operations under one login."""

import shlex

import click

from bankcore.cli.commands.transaction import session_options
from bankcore.cli.error_handling import handle_domain_error
from bankcore.cli.session_runner import require_identity
from bankcore.domain.banking import BankService
from bankcore.domain.errors import PersistenceError
from bankcore.domain.session import Session
from bankcore.utils.amount_parser import parse_amount


# Operation name -> argument names, in script order
SCRIPT_OPERATIONS = {
    "withdraw": ("ACCOUNT", "AMOUNT"),
    "deposit": ("ACCOUNT", "AMOUNT"),
    "transfer": ("FROM_ACCOUNT", "TO_ACCOUNT", "AMOUNT"),
    "paybill": ("ACCOUNT", "COMPANY", "AMOUNT"),
    "create": ("NAME", "BALANCE"),
    "delete": ("NAME", "ACCOUNT"),
    "disable": ("NAME", "ACCOUNT"),
    "changeplan": ("NAME", "ACCOUNT"),
}


def run_script_line(service: BankService, session: Session, words: list[str], holder=None):
    """Apply one parsed script line and return its transaction record.

    Raises:
        DomainError: If the operation is rejected
        click.UsageError: If the line is malformed
    """
    name, args = words[0].lower(), words[1:]
    if name not in SCRIPT_OPERATIONS:
        raise click.UsageError(f"Unknown operation '{words[0]}'")
    expected = SCRIPT_OPERATIONS[name]
    if len(args) != len(expected):
        raise click.UsageError(f"Usage: {name} {' '.join(expected)}")

    if name == "withdraw":
        return service.withdrawal(session, args[0], parse_amount(args[1]), holder_name=holder)
    if name == "deposit":
        return service.deposit(session, args[0], parse_amount(args[1]), holder_name=holder)
    if name == "transfer":
        return service.transfer(
            session, args[0], args[1], parse_amount(args[2]), holder_name=holder
        )
    if name == "paybill":
        return service.paybill(session, args[0], args[1], parse_amount(args[2]), holder_name=holder)
    if name == "create":
        return service.create(session, args[0], parse_amount(args[1]))
    lifecycle = {
        "delete": service.delete,
        "disable": service.disable,
        "changeplan": service.changeplan,
    }
    return lifecycle[name](session, args[0], args[1])


@click.command("session")
@click.argument("script", type=click.File("r"), default="-")
@session_options
@click.pass_context
def session_cmd(ctx, script, holder: str | None, admin: bool):
    """Run the operations in SCRIPT under a single login.

    SCRIPT holds one operation per line (use - or omit it to read stdin).
    Session limits accumulate across lines. A rejected line is reported and
    skipped; earlier lines stay applied. Blank lines and lines starting
    with # are ignored.

    \b
    Operations:
        withdraw ACCOUNT AMOUNT
        deposit ACCOUNT AMOUNT
        transfer FROM_ACCOUNT TO_ACCOUNT AMOUNT
        paybill ACCOUNT COMPANY AMOUNT
        create NAME BALANCE            (admin)
        delete NAME ACCOUNT            (admin)
        disable NAME ACCOUNT           (admin)
        changeplan NAME ACCOUNT        (admin)

    Examples:
        bankcore session day.txt --holder "Alice"
        bankcore session --admin < admin.txt
    """
    require_identity(holder, admin)
    service: BankService = ctx.obj["service"]
    session = Session()
    if admin:
        session.login_admin()
    else:
        session.login_standard(holder)

    accepted = 0
    rejected = 0
    for line_no, line in enumerate(script, start=1):
        text = line.strip()
        if not text or text.startswith("#"):
            continue
        try:
            record = run_script_line(service, session, shlex.split(text), holder=holder)
        except (click.UsageError, ValueError) as e:
            # DomainError is a ValueError, as is an unbalanced quote
            rejected += 1
            click.echo(f"Error: line {line_no}: {e}", err=True)
            continue
        accepted += 1
        click.echo(record.to_fixed40().rstrip())

    try:
        service.logout(session)
        service.repository.save()
    except PersistenceError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nSession complete: {accepted} accepted, {rejected} rejected")
    if rejected:
        ctx.exit(1)


def register_commands(cli):
    """Register session command with main CLI."""
    cli.add_command(session_cmd)
