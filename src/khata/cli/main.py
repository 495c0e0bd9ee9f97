"""Main CLI entry point."""

import logging

import click
from khata.domain.profile import ProfileService
from khata.storage.base import StorageError
from khata.storage.collection_store import CollectionStore
from khata.storage.factories import create_sqlite_store

# Import and register all commands at module level
from khata.cli.commands import (
    profile,
    customer,
    transaction,
    batwa,
    report,
    me,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides KHATA_DB_PATH environment variable)",
    envvar="KHATA_DB_PATH",
)
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Khata - personal ledger.

    Keep track of money you owe and are owed by your customers, and log your
    own income and expenses, across separate profiles.
    """
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if verbose else logging.WARNING,
    )
    ctx.ensure_object(dict)

    # Open the store only when actually running a command (not for --help)
    if ctx.invoked_subcommand is not None:
        kv = create_sqlite_store(database_path=db_path)
        kv.connect()
        kv.initialize_schema()
        ctx.call_on_close(kv.disconnect)

        store = CollectionStore(kv)
        try:
            ProfileService(store).initialize_default()
        except StorageError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)
        ctx.obj["store"] = store


# Register all commands
profile.register_commands(cli)
customer.register_commands(cli)
transaction.register_commands(cli)
batwa.register_commands(cli)
report.register_commands(cli)
me.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
