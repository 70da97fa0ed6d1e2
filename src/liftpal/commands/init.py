"""Initialize project command."""

from pathlib import Path

import click

from ..data.catalog_loader import seed_catalog_from_json
from ..db import init_db, seed_catalog
from ..settings import get_db_path
from .base import async_command, echo_info, echo_success, echo_warning


@click.command()
@click.option(
    "--catalog",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON file with catalog exercises (default: built-in list)",
)
@async_command
async def init(catalog: Path | None):
    """Initialize the liftpal database.

    Creates the SQLite schema and seeds the exercise catalog the workout
    generator draws from.
    """
    db_path = get_db_path()
    echo_info(f"Initializing liftpal at {db_path}")

    await init_db(db_path)
    echo_success("Database initialized")

    if catalog:
        count = await seed_catalog_from_json(catalog, db_path)
        if count:
            echo_success(f"Exercise catalog populated ({count} exercises from {catalog.name})")
        else:
            echo_warning(f"No valid exercises in {catalog.name}; catalog unchanged")
    else:
        count = await seed_catalog(db_path)
        echo_success(f"Exercise catalog populated ({count} built-in exercises)")

    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Create a user:       liftpal users add 'Sam Lee' sam")
    click.echo("  2. Generate a workout:  liftpal --user 1 generate -b Chest -b Back")
    click.echo("  3. Check your week:     liftpal --user 1 stats")
