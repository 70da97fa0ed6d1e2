"""Workout commands."""

import click

from .base import (
    async_command,
    echo_info,
    echo_success,
    echo_warning,
    echo_workout,
    format_table,
    get_aggregator,
    get_generator,
)


@click.group()
def workouts():
    """View, complete, favorite and copy workouts."""
    pass


def _summary_rows(items) -> list[list[str]]:
    rows = []
    for w in items:
        sets = w.all_sets
        done = sum(1 for s in sets if s.completed)
        rows.append([
            str(w.id),
            w.title,
            w.difficulty.value,
            f"{w.duration} min",
            f"{done}/{len(sets)}",
            "yes" if w.completed else "",
        ])
    return rows


HEADERS = ["ID", "Title", "Difficulty", "Duration", "Sets", "Done"]


@workouts.command("week")
@click.pass_context
@async_command
async def week(ctx: click.Context):
    """List this week's workouts, newest first."""
    items = await get_aggregator(ctx).get_current_week_workouts()
    if not items:
        echo_info("No workouts this week. Run 'liftpal generate' to create one.")
        return
    click.echo(format_table(HEADERS, _summary_rows(items)))


@workouts.command("favorites")
@click.pass_context
@async_command
async def favorites(ctx: click.Context):
    """List favorite workouts."""
    items = await get_aggregator(ctx).get_favorite_workouts()
    if not items:
        echo_info("No favorite workouts yet.")
        return
    click.echo(format_table(HEADERS, _summary_rows(items)))


@workouts.command("show")
@click.argument("workout_id", type=int)
@click.pass_context
@async_command
async def show(ctx: click.Context, workout_id: int):
    """Show a workout with its exercises and sets."""
    echo_workout(await get_aggregator(ctx).get_workout(workout_id))


@workouts.command("complete")
@click.argument("workout_id", type=int)
@click.pass_context
@async_command
async def complete(ctx: click.Context, workout_id: int):
    """Mark a workout as completed."""
    week_done = await get_aggregator(ctx).complete_workout(workout_id)
    echo_success(f"Workout {workout_id} completed")
    if week_done:
        echo_success("Every workout this week is done!")


@workouts.command("favorite")
@click.argument("workout_id", type=int)
@click.option("--off", is_flag=True, help="Remove from favorites instead")
@click.pass_context
@async_command
async def favorite(ctx: click.Context, workout_id: int, off: bool):
    """Add a workout to (or remove it from) favorites."""
    updated = await get_aggregator(ctx).toggle_favorite(workout_id, not off)
    if not updated:
        echo_warning(f"You have no workout {workout_id}; nothing changed.")
        return
    echo_success(f"Workout {workout_id} {'removed from' if off else 'added to'} favorites")


@workouts.command("delete")
@click.argument("workout_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.pass_context
@async_command
async def delete(ctx: click.Context, workout_id: int, yes: bool):
    """Delete a workout with its exercises and sets."""
    if not yes and not click.confirm(f"Delete workout {workout_id}?"):
        return
    deleted = await get_aggregator(ctx).delete_workout(workout_id)
    if not deleted:
        echo_warning(f"You have no workout {workout_id}; nothing deleted.")
        return
    echo_success(f"Deleted workout {workout_id}")


@workouts.command("copy")
@click.argument("workout_id", type=int)
@click.pass_context
@async_command
async def copy(ctx: click.Context, workout_id: int):
    """Add a copy of a workout to this week with fresh sets."""
    workout = await get_generator(ctx).add_workout_to_week(workout_id)
    echo_success(f"Added workout {workout.id} to this week")
    click.echo()
    echo_workout(workout)


@workouts.command("log")
@click.argument("exercise_id", type=int)
@click.argument("set_number", type=click.IntRange(min=1))
@click.option("--weight", "-w", type=click.FloatRange(min=0), default=0, help="Weight lifted")
@click.option("--reps", "-r", type=click.IntRange(min=0), default=0, help="Reps performed")
@click.option("--done/--not-done", default=True, help="Mark the set completed (default: done)")
@click.pass_context
@async_command
async def log(
    ctx: click.Context,
    exercise_id: int,
    set_number: int,
    weight: float,
    reps: int,
    done: bool,
):
    """Log weight and reps for one set of an exercise."""
    all_done = await get_aggregator(ctx).update_exercise_set(
        exercise_id, set_number, weight, reps, done
    )
    echo_success(f"Set {set_number} saved: {weight:g} x {reps}")
    if all_done:
        echo_success(f"All sets of exercise {exercise_id} completed")
