"""Database schema setup and catalog seeding."""

import logging
from pathlib import Path

import aiosqlite

from ..models.catalog import COMMON_EXERCISES, AvailableExercise
from ..settings import get_db_path

logger = logging.getLogger(__name__)


SCHEMA = [
    """
    CREATE TABLE IF NOT EXISTS users (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        username TEXT UNIQUE NOT NULL,
        email TEXT UNIQUE,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS workout_partners (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        requester_id INTEGER NOT NULL,
        target_id INTEGER NOT NULL,
        status TEXT NOT NULL DEFAULT 'pending'
            CHECK (status IN ('pending', 'accepted', 'rejected')),
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        UNIQUE (requester_id, target_id),
        FOREIGN KEY (requester_id) REFERENCES users(id) ON DELETE CASCADE,
        FOREIGN KEY (target_id) REFERENCES users(id) ON DELETE CASCADE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS weekly_workouts (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id INTEGER NOT NULL,
        week_start_date TEXT NOT NULL,
        status TEXT NOT NULL DEFAULT 'in_progress'
            CHECK (status IN ('in_progress', 'completed')),
        UNIQUE (user_id, week_start_date),
        FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS daily_workouts (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id INTEGER NOT NULL,
        weekly_workout_id INTEGER,
        title TEXT NOT NULL,
        duration INTEGER NOT NULL CHECK (duration > 0),
        difficulty TEXT NOT NULL CHECK (difficulty IN ('easy', 'medium', 'hard')),
        date TEXT NOT NULL,
        completed INTEGER NOT NULL DEFAULT 0,
        completed_at TEXT,
        is_favorite INTEGER NOT NULL DEFAULT 0,
        is_shared INTEGER NOT NULL DEFAULT 0,
        shared_with TEXT NOT NULL DEFAULT '[]',
        FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE,
        FOREIGN KEY (weekly_workout_id) REFERENCES weekly_workouts(id) ON DELETE SET NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS exercises (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        daily_workout_id INTEGER NOT NULL,
        name TEXT NOT NULL,
        body_part TEXT NOT NULL,
        target_sets INTEGER NOT NULL CHECK (target_sets >= 1),
        target_reps TEXT NOT NULL,
        notes TEXT DEFAULT '',
        completed INTEGER NOT NULL DEFAULT 0,
        FOREIGN KEY (daily_workout_id) REFERENCES daily_workouts(id) ON DELETE CASCADE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS exercise_sets (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        exercise_id INTEGER NOT NULL,
        set_number INTEGER NOT NULL CHECK (set_number >= 1),
        weight REAL NOT NULL DEFAULT 0 CHECK (weight >= 0),
        reps INTEGER NOT NULL DEFAULT 0 CHECK (reps >= 0),
        completed INTEGER NOT NULL DEFAULT 0,
        UNIQUE (exercise_id, set_number),
        FOREIGN KEY (exercise_id) REFERENCES exercises(id) ON DELETE CASCADE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS available_exercises (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT UNIQUE NOT NULL,
        main_muscle_group TEXT NOT NULL,
        primary_equipment TEXT NOT NULL,
        grip_style TEXT
    )
    """,
]

INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_daily_workouts_user ON daily_workouts(user_id)",
    "CREATE INDEX IF NOT EXISTS idx_daily_workouts_weekly ON daily_workouts(weekly_workout_id)",
    "CREATE INDEX IF NOT EXISTS idx_daily_workouts_date ON daily_workouts(date)",
    "CREATE INDEX IF NOT EXISTS idx_exercises_workout ON exercises(daily_workout_id)",
    "CREATE INDEX IF NOT EXISTS idx_workout_partners_target ON workout_partners(target_id)",
    "CREATE INDEX IF NOT EXISTS idx_available_exercises_group ON available_exercises(main_muscle_group)",
]


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        for statement in SCHEMA:
            await db.execute(statement)
        for statement in INDEXES:
            await db.execute(statement)
        await db.commit()

    logger.debug("Schema ready at %s", db_path)


async def seed_catalog(
    db_path: Path | None = None,
    exercises: list[AvailableExercise] | None = None,
) -> int:
    """Seed the exercise catalog.

    Existing entries with the same name are replaced.

    Returns:
        Number of catalog entries written
    """
    if db_path is None:
        db_path = get_db_path()
    if exercises is None:
        exercises = COMMON_EXERCISES

    async with aiosqlite.connect(db_path) as db:
        for exercise in exercises:
            await db.execute(
                """
                INSERT INTO available_exercises
                (name, main_muscle_group, primary_equipment, grip_style)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(name) DO UPDATE SET
                    main_muscle_group = excluded.main_muscle_group,
                    primary_equipment = excluded.primary_equipment,
                    grip_style = excluded.grip_style
                """,
                (
                    exercise.name,
                    exercise.main_muscle_group,
                    exercise.primary_equipment,
                    exercise.grip_style,
                ),
            )
        await db.commit()

    logger.info("Seeded %d catalog exercises", len(exercises))
    return len(exercises)
