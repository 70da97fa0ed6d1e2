"""User commands."""

import click

from ..db import UserRepository
from .base import async_command, echo_info, echo_success, format_table, get_gateway, get_partner_manager


@click.group()
def users():
    """Create and find users."""
    pass


@users.command("add")
@click.argument("name")
@click.argument("username")
@click.option("--email", help="Email address (optional)")
@click.pass_context
@async_command
async def add(ctx: click.Context, name: str, username: str, email: str | None):
    """Create a user with a display NAME and unique USERNAME."""
    repo = UserRepository(get_gateway(ctx))
    user = await repo.create(name=name, username=username, email=email)
    echo_success(f"Created user {user.username} (ID: {user.id})")


@users.command("search")
@click.argument("query")
@click.pass_context
@async_command
async def search(ctx: click.Context, query: str):
    """Find other users by username or email."""
    results = await get_partner_manager(ctx).search_users(query)
    if not results:
        echo_info("No users found.")
        return
    click.echo(format_table(
        ["ID", "Username", "Name"],
        [[str(u.id), u.username, u.name] for u in results],
    ))
