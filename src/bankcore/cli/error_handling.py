"""CLI error handling helpers."""

import click

from bankcore.domain.errors import DomainError, PersistenceError


def handle_domain_error(ctx: click.Context, error: DomainError | PersistenceError) -> None:
    """Render a domain or persistence error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
