"""Workout partner commands."""

import click

from ..models.partner import PartnerStatus
from .base import (
    async_command,
    echo_info,
    echo_success,
    echo_warning,
    format_table,
    get_partner_manager,
)


@click.group()
def partners():
    """Invite workout partners and answer invites."""
    pass


@partners.command("list")
@click.pass_context
@async_command
async def list_partners(ctx: click.Context):
    """List sent and received invites."""
    links = await get_partner_manager(ctx).list_partners()

    for label, items in (("Sent", links["sent"]), ("Received", links["received"])):
        click.echo(click.style(label, bold=True))
        if not items:
            echo_info("None")
        else:
            click.echo(format_table(
                ["Link", "User", "Name", "Status"],
                [
                    [
                        str(link.id),
                        link.counterpart.username if link.counterpart else "?",
                        link.counterpart.name if link.counterpart else "?",
                        link.status.value,
                    ]
                    for link in items
                ],
            ))
        click.echo()


@partners.command("invite")
@click.argument("user_id", type=int)
@click.pass_context
@async_command
async def invite(ctx: click.Context, user_id: int):
    """Invite a user to be your workout partner."""
    link = await get_partner_manager(ctx).send_invite(user_id)
    echo_success(f"Invite sent (link {link.id})")


@partners.command("respond")
@click.argument("link_id", type=int)
@click.argument(
    "answer",
    type=click.Choice([PartnerStatus.ACCEPTED.value, PartnerStatus.REJECTED.value]),
)
@click.pass_context
@async_command
async def respond(ctx: click.Context, link_id: int, answer: str):
    """Accept or reject an invite."""
    link = await get_partner_manager(ctx).respond_to_invite(link_id, answer)
    echo_success(f"Invite {link.id} {link.status.value}")


@partners.command("cancel")
@click.argument("link_id", type=int)
@click.pass_context
@async_command
async def cancel(ctx: click.Context, link_id: int):
    """Withdraw an invite you sent (or end the partnership)."""
    if await get_partner_manager(ctx).cancel_invite(link_id):
        echo_success(f"Link {link_id} removed")
    else:
        echo_warning(f"You sent no link {link_id}; nothing removed.")
