"""Commands for the user's own details."""

import click
from khata.cli.error_handling import handle_domain_error
from khata.domain.errors import DomainError
from khata.domain.user_profile import UserProfileService
from khata.storage.base import StorageError


@click.group()
def me_group():
    """Your own name and phone number."""
    pass


@me_group.command("show")
@click.pass_context
def show(ctx):
    """Show your details."""
    user = UserProfileService(ctx.obj["store"]).get_user_profile()
    if user is None:
        click.echo("No details saved. Use 'khata me set --name ...'.")
        return
    click.echo(f"Name:  {user.name}")
    click.echo(f"Phone: {user.phone_number or '-'}")


@me_group.command("set")
@click.option("--name", required=True, help="Your name")
@click.option("--phone", default="", help="Your phone number (digits only)")
@click.pass_context
def set_details(ctx, name: str, phone: str):
    """Save your details."""
    service = UserProfileService(ctx.obj["store"])
    try:
        user = service.save_user_profile(name=name, phone_number=phone)
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)
    click.echo(f"Saved details for '{user.name}'")


def register_commands(cli):
    """Register user detail commands with main CLI."""
    cli.add_command(me_group, name="me")
