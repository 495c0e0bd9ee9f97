"""CLI error handling helpers."""

import click

from khata.domain.errors import DomainError
from khata.storage.base import StorageError


def handle_domain_error(ctx: click.Context, error: DomainError | StorageError) -> None:
    """Render a domain or storage error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
