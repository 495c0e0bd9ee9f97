"""CLI helpers for resolving profiles and customers given by name or ID."""

from __future__ import annotations

import click

from khata.domain.customer import CustomerService
from khata.domain.entities import Customer, Profile
from khata.domain.profile import ProfileService


def _pick(ctx: click.Context, kind: str, ref: str, candidates: list) -> object:
    for item in candidates:
        if item.id == ref:
            return item

    matches = [item for item in candidates if item.name.lower() == ref.strip().lower()]
    if len(matches) == 1:
        return matches[0]
    if not matches:
        click.echo(f"Error: {kind} '{ref}' not found", err=True)
    else:
        ids = ", ".join(item.id for item in matches)
        click.echo(f"Error: {kind} name '{ref}' is ambiguous, use an ID ({ids})", err=True)
    ctx.exit(1)


def resolve_profile_or_exit(
    ctx: click.Context, service: ProfileService, ref: str
) -> Profile:
    """Resolve a profile name or ID, or exit with a CLI error."""
    return _pick(ctx, "Profile", ref, service.list_profiles())


def resolve_customer_or_exit(
    ctx: click.Context, service: CustomerService, ref: str
) -> Customer:
    """Resolve a customer name or ID within the active profile, or exit."""
    return _pick(ctx, "Customer", ref, service.list_customers())
