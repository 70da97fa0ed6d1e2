"""Generate workout command."""

import click
import questionary

from ..db import CatalogRepository
from ..models.workout import Difficulty
from ..services import Sharing
from .base import async_command, echo_error, echo_success, echo_workout, get_generator


@click.command()
@click.option(
    "--duration",
    "-d",
    type=click.IntRange(min=1),
    default=45,
    help="Workout length in minutes (default: 45)",
)
@click.option(
    "--difficulty",
    type=click.Choice([d.value for d in Difficulty]),
    default=Difficulty.MEDIUM.value,
    help="Workout difficulty (default: medium)",
)
@click.option(
    "--body-part",
    "-b",
    "body_parts",
    multiple=True,
    help="Body part to train; repeat for several (prompted if omitted)",
)
@click.option(
    "--share-with",
    "share_with",
    multiple=True,
    type=int,
    help="User ID to share the workout with; repeat for several",
)
@click.pass_context
@async_command
async def generate(
    ctx: click.Context,
    duration: int,
    difficulty: str,
    body_parts: tuple[str, ...],
    share_with: tuple[int, ...],
):
    """Generate a workout for the chosen body parts.

    Two exercises are picked per body part, each with 3-4 sets to log.

    Examples:

        # Chest and back, 45 minutes
        liftpal --user 1 generate -b Chest -b Back

        # Hard leg day shared with user 2
        liftpal --user 1 generate -b Legs --difficulty hard --share-with 2
    """
    generator = get_generator(ctx)

    parts = list(body_parts)
    if not parts:
        available = await CatalogRepository(generator.gateway).body_parts()
        parts = await questionary.checkbox(
            "Which body parts do you want to train?",
            choices=available,
        ).ask_async() or []
        if not parts:
            echo_error("No body parts selected.")
            ctx.exit(1)

    sharing = Sharing(is_shared=bool(share_with), shared_with=list(share_with))
    workout = await generator.generate(duration, difficulty, parts, sharing=sharing)

    echo_success(f"Generated workout (ID: {workout.id})")
    click.echo()
    echo_workout(workout)
