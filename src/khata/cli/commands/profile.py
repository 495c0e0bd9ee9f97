"""Profile management commands."""

import click
from khata.cli.error_handling import handle_domain_error
from khata.cli.resolution import resolve_profile_or_exit
from khata.domain.errors import DomainError
from khata.domain.profile import ProfileService
from khata.storage.base import StorageError


@click.group()
def profile_group():
    """Manage profiles (separate khatas)."""
    pass


@profile_group.command("list")
@click.pass_context
def list_profiles(ctx):
    """List all profiles. The active one is marked with '*'."""
    service = ProfileService(ctx.obj["store"])

    profiles = service.list_profiles()
    if not profiles:
        click.echo("No profiles found.")
        return

    active = service.get_active()
    click.echo("\nProfiles:")
    click.echo("-" * 60)
    for p in profiles:
        marker = "*" if active is not None and active.id == p.id else " "
        description = f" | {p.description}" if p.description else ""
        click.echo(f"{marker} {p.name:20s} | ID: {p.id}{description}")


@profile_group.command("create")
@click.argument("name", metavar="PROFILE_NAME")
@click.option("--description", help="Short description")
@click.option("--use", "make_active", is_flag=True, help="Make the new profile active")
@click.pass_context
def create_profile(ctx, name: str, description: str | None, make_active: bool):
    """Create a new profile.

    Examples:
        khata profile create "Shop"
        khata profile create "Home" --description "Family loans" --use
    """
    service = ProfileService(ctx.obj["store"])
    try:
        created = service.add_profile(name=name, description=description)
        if make_active:
            service.set_active(created)
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created profile '{created.name}' (ID: {created.id})")
    if make_active:
        click.echo(f"Switched to profile '{created.name}'")


@profile_group.command("use")
@click.argument("profile", metavar="PROFILE")
@click.pass_context
def use_profile(ctx, profile: str):
    """Switch the active profile. PROFILE can be a name or ID."""
    service = ProfileService(ctx.obj["store"])
    target = resolve_profile_or_exit(ctx, service, profile)
    try:
        service.set_active(target)
    except StorageError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Switched to profile '{target.name}'")


@profile_group.command("rename")
@click.argument("profile", metavar="PROFILE")
@click.argument("new_name", metavar="NEW_NAME")
@click.option("--description", help="New description")
@click.pass_context
def rename_profile(ctx, profile: str, new_name: str, description: str | None):
    """Rename a profile. PROFILE can be a name or ID."""
    service = ProfileService(ctx.obj["store"])
    target = resolve_profile_or_exit(ctx, service, profile)
    try:
        service.update_profile(target.id, name=new_name, description=description)
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)
    click.echo(f"Renamed profile to '{new_name.strip()}'")


@profile_group.command("delete")
@click.argument("profile", metavar="PROFILE")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_profile(ctx, profile: str, yes: bool):
    """Delete a profile with all of its customers, transactions and batwa entries.

    Examples:
        khata profile delete "Shop"
        khata profile delete 3f2a... --yes
    """
    service = ProfileService(ctx.obj["store"])
    target = resolve_profile_or_exit(ctx, service, profile)

    if not yes and not click.confirm(
        f"Delete profile '{target.name}' and everything recorded in it?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_profile(target.id)
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted profile '{target.name}'")


def register_commands(cli):
    """Register profile commands with main CLI."""
    cli.add_command(profile_group, name="profile")
