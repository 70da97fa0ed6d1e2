"""Shared CLI utilities."""

import asyncio
import random
from functools import wraps

import click

from ..db import Gateway
from ..errors import LiftpalError
from ..models.workout import DailyWorkout
from ..services import PartnerManager, ProgressAggregator, WorkoutGenerator
from ..settings import get_db_path, get_settings


def async_command(f):
    """Decorator to run async Click commands.

    Domain and validation errors are reported as ``[ERROR]`` lines with
    exit status 1.
    """

    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return asyncio.run(f(*args, **kwargs))
        except (LiftpalError, ValueError) as e:
            echo_error(str(e))
            click.get_current_context().exit(1)

    return wrapper


def ensure_initialized(ctx: click.Context) -> None:
    """Ensure the database is initialized."""
    db_path = get_db_path()
    if not db_path.exists():
        click.echo(
            click.style("Error: ", fg="red")
            + "Project not initialized. Run 'liftpal init' first."
        )
        ctx.exit(1)


def get_gateway(ctx: click.Context) -> Gateway:
    """Gateway bound to the --user identity (or LIFTPAL_USER_ID)."""
    ensure_initialized(ctx)
    obj = ctx.find_root().obj or {}
    return Gateway(get_db_path(), user_id=obj.get("user_id"))


def get_generator(ctx: click.Context) -> WorkoutGenerator:
    settings = get_settings()
    return WorkoutGenerator(
        get_gateway(ctx),
        rng=random.Random(settings.random_seed),
        first_weekday=settings.first_weekday,
    )


def get_aggregator(ctx: click.Context) -> ProgressAggregator:
    return ProgressAggregator(get_gateway(ctx), first_weekday=get_settings().first_weekday)


def get_partner_manager(ctx: click.Context) -> PartnerManager:
    return PartnerManager(get_gateway(ctx))


def echo_success(message: str) -> None:
    """Print a success message."""
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_error(message: str) -> None:
    """Print an error message."""
    click.echo(click.style("[ERROR] ", fg="red") + message)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(click.style("[INFO] ", fg="blue") + message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.echo(click.style("[WARN] ", fg="yellow") + message)


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Format data as a simple table."""
    if not rows:
        return ""

    # Calculate column widths
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    lines = ["".join(h.ljust(widths[i] + padding) for i, h in enumerate(headers))]
    lines.append("".join("-" * w + " " * padding for w in widths))
    for row in rows:
        lines.append("".join(str(cell).ljust(widths[i] + padding) for i, cell in enumerate(row)))

    return "\n".join(lines)


def echo_workout(workout: DailyWorkout) -> None:
    """Print a workout with its exercises and sets."""
    status = click.style("done", fg="green") if workout.completed else "open"
    favorite = " *" if workout.is_favorite else ""
    click.echo(click.style(f"#{workout.id} {workout.title}{favorite}", bold=True))
    click.echo(
        f"  {workout.duration} min, {workout.difficulty.value}, {status}, "
        f"{workout.date.strftime('%Y-%m-%d %H:%M')}"
    )

    rows = []
    for ex in workout.exercises:
        sets = " ".join(
            f"{s.set_number}:{s.weight:g}x{s.reps}{'+' if s.completed else ''}"
            for s in ex.sets
        )
        rows.append([
            str(ex.id),
            ex.name,
            ex.body_part,
            f"{ex.target_sets} x {ex.target_reps}",
            "yes" if ex.completed else "",
            sets,
        ])
    if rows:
        click.echo()
        click.echo(format_table(["ID", "Exercise", "Body Part", "Target", "Done", "Sets"], rows))
    click.echo()
