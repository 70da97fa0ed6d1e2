"""CLI entry point for liftpal."""

import logging

import click

from . import __version__
from .commands import generate, init, partners, serve, stats, users, workouts
from .settings import get_settings


@click.group()
@click.version_option(version=__version__, prog_name="liftpal")
@click.option(
    "--user",
    "-u",
    "user_id",
    type=int,
    help="Act as this user ID (default: LIFTPAL_USER_ID)",
)
@click.pass_context
def main(ctx: click.Context, user_id: int | None):
    """liftpal: workouts, set logging and partner progress.

    Generate workouts from the exercise catalog, log your sets, and compare
    your week with a workout partner.

    Example usage:

        # Initialize the database
        liftpal init

        # Create users
        liftpal users add "Sam Lee" sam

        # Generate and log a workout
        liftpal --user 1 generate -b Chest -b Back
        liftpal --user 1 workouts log 3 1 --weight 135 --reps 8

        # See how the week is going
        liftpal --user 1 stats
    """
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["user_id"] = user_id if user_id is not None else settings.user_id


# Register commands
main.add_command(init)
main.add_command(users)
main.add_command(generate)
main.add_command(workouts)
main.add_command(stats)
main.add_command(partners)
main.add_command(serve)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
