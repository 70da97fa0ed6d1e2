"""Progress tracking: set logging, completion roll-ups and weekly stats."""

import logging
from datetime import date, datetime
from typing import Callable

from ..db.gateway import Gateway
from ..db.repositories import (
    ExerciseRepository,
    ExerciseSetRepository,
    PartnerRepository,
    UserRepository,
    WeeklyWorkoutRepository,
    WorkoutRepository,
)
from ..errors import NotFoundError
from ..models.partner import PartnerStatus
from ..models.stats import (
    ComparisonSide,
    ExerciseCompletion,
    PartnerComparison,
    PartnerStats,
    WorkoutStats,
)
from ..models.workout import DailyWorkout, ExerciseSet, WeeklyStatus
from ..utils.dates import streak_length, week_start_datetime

logger = logging.getLogger(__name__)


def count_sets(workouts: list[DailyWorkout]) -> ExerciseCompletion:
    """Total and completed set counts across workouts."""
    sets = [s for w in workouts for s in w.all_sets]
    return ExerciseCompletion(total=len(sets), completed=sum(1 for s in sets if s.completed))


class ProgressAggregator:
    """Computes completion figures and applies set/workout roll-ups."""

    def __init__(
        self,
        gateway: Gateway,
        first_weekday: int = 6,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.gateway = gateway
        self.first_weekday = first_weekday
        self.clock = clock
        self.workouts = WorkoutRepository(gateway)
        self.exercises = ExerciseRepository(gateway)
        self.sets = ExerciseSetRepository(gateway)
        self.weeks = WeeklyWorkoutRepository(gateway)
        self.partners = PartnerRepository(gateway)
        self.users = UserRepository(gateway)

    def week_start(self) -> datetime:
        return week_start_datetime(self.clock(), self.first_weekday)

    # Stats

    async def compute_stats(self, user_id: int | None = None) -> WorkoutStats:
        """Current week completion figures for a user and their partner.

        Counts cover the user's own, non-shared workouts dated this week.
        """
        caller = self.gateway.current_identity()
        user_id = user_id or caller

        workouts = await self.workouts.list_owned_since(user_id, self.week_start())
        return WorkoutStats(
            weekly_workouts=len(workouts),
            completed_workouts=sum(1 for w in workouts if w.completed),
            exercise_completion=count_sets(workouts),
            partner=await self._partner_stats(user_id),
        )

    async def _partner_stats(self, user_id: int) -> PartnerStats | None:
        links = await self.partners.list_accepted(user_id)
        if not links:
            return None

        # More than one accepted link is tolerated; the oldest wins
        partner_id = links[0].other(user_id)
        profile = await self.users.get(partner_id)
        week = await self.weeks.latest_for_user(partner_id)
        workouts = await self.workouts.list_by_weekly(week.id) if week else []
        sets = count_sets(workouts)

        return PartnerStats(
            partner_id=partner_id,
            name=profile.name if profile else "",
            completed_workouts=sum(1 for w in workouts if w.completed),
            completion_rate=sets.rate,
        )

    async def current_streak(self, user_id: int | None = None, today: date | None = None) -> int:
        """Consecutive days with a completed workout, ending today or yesterday."""
        caller = self.gateway.current_identity()
        user_id = user_id or caller
        today = today or self.clock().date()
        completed = await self.workouts.list_completed_dates(user_id)
        return streak_length({d.date() for d in completed}, today)

    async def compare_with_partner(self, partner_id: int) -> PartnerComparison:
        """Side-by-side weekly figures for the caller and an accepted partner.

        Raises:
            NotFoundError: The two users are not accepted partners
        """
        caller = self.gateway.current_identity()
        links = await self.partners.find_between(caller, partner_id)
        if not any(link.status == PartnerStatus.ACCEPTED for link in links):
            raise NotFoundError(f"No accepted partnership with user {partner_id}")

        return PartnerComparison(
            user=await self._comparison_side(caller),
            partner=await self._comparison_side(partner_id),
        )

    async def _comparison_side(self, user_id: int) -> ComparisonSide:
        profile = await self.users.get(user_id)
        workouts = await self.workouts.list_owned_since(user_id, self.week_start())
        return ComparisonSide(
            user_id=user_id,
            name=profile.name if profile else "",
            weekly_workouts=len(workouts),
            completed_workouts=sum(1 for w in workouts if w.completed),
            total_weight=sum(s.volume for w in workouts for s in w.all_sets if s.completed),
            streak=await self.current_streak(user_id),
        )

    # Workout listings

    async def get_current_week_workouts(self, user_id: int | None = None) -> list[DailyWorkout]:
        """Workouts visible to the user dated this week, newest first.

        Visible means owned by the user, shared with them, or not assigned
        to any weekly workout.
        """
        caller = self.gateway.current_identity()
        return await self.workouts.list_visible_since(user_id or caller, self.week_start())

    async def get_favorite_workouts(self) -> list[DailyWorkout]:
        caller = self.gateway.current_identity()
        return await self.workouts.list_favorites(caller)

    async def get_workout(self, workout_id: int) -> DailyWorkout:
        """A single workout the caller owns or is shared on."""
        caller = self.gateway.current_identity()
        workout = await self.workouts.get_detail(workout_id)
        if workout is None or not self._can_view(workout, caller):
            raise NotFoundError(f"Workout {workout_id} not found")
        return workout

    # Mutations

    async def update_exercise_set(
        self,
        exercise_id: int,
        set_number: int,
        weight: float,
        reps: int,
        completed: bool,
    ) -> bool:
        """Write a set and roll completion up to the exercise.

        The set is inserted or replaced by (exercise, set number). When every
        set of the exercise is then completed, the exercise is marked
        completed. The workout itself is left alone.

        Returns:
            True if all of the exercise's sets are completed
        """
        caller = self.gateway.current_identity()

        if set_number < 1:
            raise ValueError(f"Set number must be at least 1, got {set_number}")
        if weight < 0 or reps < 0:
            raise ValueError("Weight and reps cannot be negative")

        exercise = await self.exercises.get(exercise_id)
        workout = await self.workouts.get(exercise.daily_workout_id) if exercise else None
        if workout is None or not self._can_view(workout, caller):
            raise NotFoundError(f"Exercise {exercise_id} not found")

        await self.sets.upsert(
            ExerciseSet(
                exercise_id=exercise_id,
                set_number=set_number,
                weight=weight,
                reps=reps,
                completed=completed,
            )
        )

        sets = await self.sets.list_by_exercise(exercise_id)
        all_completed = bool(sets) and all(s.completed for s in sets)
        if all_completed:
            await self.exercises.mark_completed(exercise_id)
            logger.info("Exercise %s completed (%d sets)", exercise_id, len(sets))

        return all_completed

    async def complete_workout(self, workout_id: int) -> bool:
        """Mark a workout completed and roll up to its weekly workout.

        Returns:
            True if every workout in the same week is now completed
            (vacuously True for a workout outside any week)

        Raises:
            NotFoundError: The caller owns no such workout
        """
        caller = self.gateway.current_identity()

        updated = await self.workouts.mark_completed(workout_id, caller, self.clock())
        if not updated:
            raise NotFoundError(f"Workout {workout_id} not found")

        workout = await self.workouts.get(workout_id)
        if workout.weekly_workout_id is None:
            return True
        return await self._roll_up_week(workout.weekly_workout_id)

    async def _roll_up_week(self, weekly_workout_id: int) -> bool:
        """Mark the week completed when all of its remaining workouts are."""
        siblings = await self.gateway.query(
            "daily_workouts", {"weekly_workout_id": weekly_workout_id}
        )
        # An emptied week keeps its status
        all_completed = bool(siblings) and all(row["completed"] for row in siblings)
        if all_completed:
            await self.weeks.set_status(weekly_workout_id, WeeklyStatus.COMPLETED)
            logger.info("Weekly workout %s completed", weekly_workout_id)
        return all_completed

    async def toggle_favorite(self, workout_id: int, is_favorite: bool) -> int:
        """Set the favorite flag; returns 0 when the caller does not own it."""
        caller = self.gateway.current_identity()
        return await self.workouts.set_favorite(workout_id, caller, is_favorite)

    async def delete_workout(self, workout_id: int) -> int:
        """Delete a workout with its exercises and sets.

        The workout's week is rolled up again, since removing its last
        unfinished workout can complete it. Returns 0 when the caller does
        not own the workout.
        """
        caller = self.gateway.current_identity()
        async with self.gateway.transaction():
            workout = await self.workouts.get(workout_id)
            deleted = await self.workouts.delete(workout_id, caller)
            if deleted and workout.weekly_workout_id is not None:
                await self._roll_up_week(workout.weekly_workout_id)
        if deleted:
            logger.info("Deleted workout %s for user %s", workout_id, caller)
        return deleted

    @staticmethod
    def _can_view(workout: DailyWorkout, user_id: int) -> bool:
        return workout.user_id == user_id or user_id in workout.shared_with
