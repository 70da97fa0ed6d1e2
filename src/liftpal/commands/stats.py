"""Weekly stats command."""

import click

from .base import async_command, echo_info, format_table, get_aggregator


@click.command()
@click.option("--compare", "partner_id", type=int, help="Compare with an accepted partner")
@click.pass_context
@async_command
async def stats(ctx: click.Context, partner_id: int | None):
    """Show this week's completion stats."""
    aggregator = get_aggregator(ctx)

    if partner_id is not None:
        comparison = await aggregator.compare_with_partner(partner_id)
        you, them = comparison.user, comparison.partner
        click.echo(format_table(
            ["", "You", them.name],
            [
                ["Weekly workouts", str(you.weekly_workouts), str(them.weekly_workouts)],
                ["Total weight", f"{you.total_weight:g}", f"{them.total_weight:g}"],
                ["Completion rate", f"{you.completion_rate}%", f"{them.completion_rate}%"],
                ["Current streak", str(you.streak), str(them.streak)],
            ],
        ))
        return

    result = await aggregator.compute_stats()
    sets = result.exercise_completion

    click.echo(click.style("This week", bold=True))
    click.echo(f"  Workouts:   {result.completed_workouts}/{result.weekly_workouts} "
               f"({result.completion_rate}%)")
    click.echo(f"  Sets:       {sets.completed}/{sets.total} ({sets.rate}%)")

    click.echo()
    if result.partner:
        partner = result.partner
        click.echo(click.style(f"Partner: {partner.name}", bold=True))
        click.echo(f"  Workouts completed: {partner.completed_workouts}")
        click.echo(f"  Set completion:     {partner.completion_rate}%")
    else:
        echo_info("No workout partner yet. Run 'liftpal partners invite <user id>'.")
