"""Exercise catalog loader from JSON."""

import json
import logging
from pathlib import Path

from ..db.engine import seed_catalog
from ..models.catalog import AvailableExercise

logger = logging.getLogger(__name__)


def load_catalog(json_path: Path) -> list[AvailableExercise]:
    """Load catalog entries from a JSON file.

    The file holds either a list of entries or ``{"exercises": [...]}``;
    each entry needs ``name``, ``main_muscle_group`` and
    ``primary_equipment``, with an optional ``grip_style``.

    Returns:
        List of AvailableExercise objects; invalid entries are skipped
    """
    with open(json_path) as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get("exercises", [])

    exercises = []
    for entry in data:
        if not isinstance(entry, dict):
            logger.warning("Skipping invalid catalog entry %r", entry)
            continue
        try:
            exercises.append(AvailableExercise.from_dict(entry))
        except KeyError as e:
            logger.warning("Skipping catalog entry %s: missing %s", entry.get("name", "unknown"), e)

    return exercises


async def seed_catalog_from_json(json_path: Path, db_path: Path | None = None) -> int:
    """Seed the catalog from a JSON file.

    Returns:
        Number of catalog entries written
    """
    exercises = load_catalog(json_path)
    if not exercises:
        logger.warning("No valid catalog entries in %s", json_path)
        return 0
    return await seed_catalog(db_path, exercises)
