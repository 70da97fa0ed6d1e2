"""Workout generation from the exercise catalog."""

import logging
import random
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Callable

from ..db.gateway import Gateway
from ..db.repositories import (
    CatalogRepository,
    ExerciseRepository,
    ExerciseSetRepository,
    WeeklyWorkoutRepository,
    WorkoutRepository,
)
from ..errors import NotFoundError
from ..models.catalog import AvailableExercise
from ..models.workout import DailyWorkout, Difficulty, Exercise, WeeklyStatus
from ..utils.dates import format_short_date, start_of_week

logger = logging.getLogger(__name__)

EXERCISES_PER_BODY_PART = 2
TARGET_SETS_RANGE = (3, 4)
REPS_LOW_RANGE = (8, 11)
REPS_HIGH_RANGE = (10, 13)


@dataclass
class Sharing:
    """Sharing options for a new workout."""

    is_shared: bool = False
    shared_with: list[int] = field(default_factory=list)


def unique_in_order(items: list[str]) -> list[str]:
    """Drop repeats, keeping the first occurrence of each item."""
    return list(dict.fromkeys(items))


class WorkoutGenerator:
    """Builds and stores daily workouts.

    The random source is injected so selection is reproducible under a
    seeded ``random.Random``.
    """

    def __init__(
        self,
        gateway: Gateway,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = datetime.now,
        first_weekday: int = 6,
    ):
        self.gateway = gateway
        self.rng = rng or random.Random()
        self.clock = clock
        self.first_weekday = first_weekday
        self.catalog = CatalogRepository(gateway)
        self.workouts = WorkoutRepository(gateway)
        self.exercises = ExerciseRepository(gateway)
        self.sets = ExerciseSetRepository(gateway)
        self.weeks = WeeklyWorkoutRepository(gateway)

    async def generate(
        self,
        duration: int,
        difficulty: Difficulty | str,
        body_parts: list[str],
        sharing: Sharing | None = None,
    ) -> DailyWorkout:
        """Generate a workout covering the requested body parts.

        Two exercises are drawn per distinct body part (fewer when the
        catalog has fewer), each with 3-4 zeroed sets.

        Args:
            duration: Planned length in minutes
            difficulty: easy, medium or hard
            body_parts: Body-part tags in display order; repeats are ignored
            sharing: Optional sharing flags for the new workout

        Returns:
            The stored workout with exercises and sets, re-read from storage

        Raises:
            NotFoundError: A body part has no catalog entries
        """
        user_id = self.gateway.current_identity()

        difficulty = Difficulty(difficulty)
        if duration <= 0:
            raise ValueError(f"Duration must be positive, got {duration}")
        parts = unique_in_order(body_parts)
        if not parts:
            raise ValueError("At least one body part is required")
        sharing = sharing or Sharing()

        # Pick everything before writing so a missing body part leaves no rows
        planned: list[Exercise] = []
        for part in parts:
            candidates = await self.catalog.by_muscle_group(part)
            if not candidates:
                raise NotFoundError(f"No exercises found for {part}")
            count = min(EXERCISES_PER_BODY_PART, len(candidates))
            for entry in self.rng.sample(candidates, count):
                planned.append(self._plan_exercise(entry))

        now = self.clock()
        async with self.gateway.transaction():
            workout = await self.workouts.create(
                DailyWorkout(
                    user_id=user_id,
                    title=f"{'/'.join(parts)} ({format_short_date(now)})",
                    duration=duration,
                    difficulty=difficulty,
                    date=now,
                    is_shared=sharing.is_shared,
                    shared_with=list(sharing.shared_with),
                )
            )
            await self._store_exercises(workout.id, planned)

        logger.info(
            "Generated workout %s for user %s: %d exercises",
            workout.id, user_id, len(planned),
        )
        return await self.workouts.get_detail(workout.id)

    async def add_workout_to_week(self, workout_id: int) -> DailyWorkout:
        """Copy a workout into the caller's current week with fresh sets.

        The source must be one the caller could list: their own, shared with
        them, or outside any week.

        Raises:
            NotFoundError: No such workout visible to the caller
        """
        user_id = self.gateway.current_identity()

        template = await self.workouts.get_detail(workout_id)
        if template is None or not (
            template.user_id == user_id
            or user_id in template.shared_with
            or template.weekly_workout_id is None
        ):
            raise NotFoundError(f"Workout {workout_id} not found")

        now = self.clock()
        week_start = start_of_week(now.date(), self.first_weekday)

        async with self.gateway.transaction():
            week = await self.weeks.get_or_create(user_id, week_start)
            workout = await self.workouts.create(
                DailyWorkout(
                    user_id=user_id,
                    title=template.title,
                    duration=template.duration,
                    difficulty=template.difficulty,
                    date=now,
                    weekly_workout_id=week.id,
                )
            )
            await self._store_exercises(
                workout.id,
                [
                    Exercise(
                        daily_workout_id=workout.id,
                        name=ex.name,
                        body_part=ex.body_part,
                        target_sets=ex.target_sets,
                        target_reps=ex.target_reps,
                        notes=ex.notes,
                    )
                    for ex in template.exercises
                ],
            )
            # The week now has an unfinished workout
            if week.status == WeeklyStatus.COMPLETED:
                await self.weeks.set_status(week.id, WeeklyStatus.IN_PROGRESS)

        logger.info(
            "Copied workout %s to %s for user %s (week of %s)",
            workout_id, workout.id, user_id, week_start,
        )
        return await self.workouts.get_detail(workout.id)

    def _plan_exercise(self, entry: AvailableExercise) -> Exercise:
        # low can exceed high (e.g. "11-10"); left as generated
        low = self.rng.randint(*REPS_LOW_RANGE)
        high = self.rng.randint(*REPS_HIGH_RANGE)
        return Exercise(
            daily_workout_id=0,
            name=entry.name,
            body_part=entry.main_muscle_group,
            target_sets=self.rng.randint(*TARGET_SETS_RANGE),
            target_reps=f"{low}-{high}",
            notes=entry.describe(),
        )

    async def _store_exercises(self, workout_id: int, exercises: list[Exercise]) -> None:
        for exercise in exercises:
            created = await self.exercises.create(
                replace(exercise, daily_workout_id=workout_id, sets=[])
            )
            await self.sets.create_blank(created.id, exercise.target_sets)
