"""Data access layer for liftpal."""

from datetime import date, datetime

from ..models.catalog import AvailableExercise
from ..models.partner import PartnerLink, PartnerStatus, UserProfile
from ..models.workout import (
    DailyWorkout,
    Exercise,
    ExerciseSet,
    WeeklyStatus,
    WeeklyWorkout,
)
from .gateway import Gateway


class UserRepository:
    """Repository for user profiles."""

    def __init__(self, gateway: Gateway):
        self.gateway = gateway

    async def create(self, name: str, username: str, email: str | None = None) -> UserProfile:
        """Create a user. Duplicate usernames raise ConflictError."""
        row = await self.gateway.insert(
            "users", {"name": name, "username": username, "email": email}
        )
        return UserProfile.from_dict(row)

    async def get(self, user_id: int) -> UserProfile | None:
        rows = await self.gateway.query("users", {"id": user_id})
        return UserProfile.from_dict(rows[0]) if rows else None

    async def get_many(self, user_ids: list[int]) -> dict[int, UserProfile]:
        """Get several users keyed by id."""
        rows = await self.gateway.query("users", {"id": list(set(user_ids))})
        return {row["id"]: UserProfile.from_dict(row) for row in rows}

    async def search(self, query: str, exclude_id: int, limit: int = 10) -> list[UserProfile]:
        """Search users by username or email (case-insensitive substring)."""
        escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        pattern = f"%{escaped}%"
        rows = await self.gateway.fetch_all(
            """
            SELECT * FROM users
            WHERE (username LIKE ? ESCAPE '\\' OR email LIKE ? ESCAPE '\\') AND id != ?
            ORDER BY username
            LIMIT ?
            """,
            (pattern, pattern, exclude_id, limit),
        )
        return [UserProfile.from_dict(row) for row in rows]


class CatalogRepository:
    """Repository for the read-only exercise catalog."""

    def __init__(self, gateway: Gateway):
        self.gateway = gateway

    async def by_muscle_group(self, body_part: str) -> list[AvailableExercise]:
        """Get catalog entries whose main muscle group equals ``body_part``."""
        rows = await self.gateway.query(
            "available_exercises", {"main_muscle_group": body_part}, order_by="id"
        )
        return [AvailableExercise.from_dict(row) for row in rows]

    async def body_parts(self) -> list[str]:
        """List the distinct body parts present in the catalog."""
        rows = await self.gateway.fetch_all(
            "SELECT DISTINCT main_muscle_group FROM available_exercises "
            "ORDER BY main_muscle_group"
        )
        return [row["main_muscle_group"] for row in rows]


class ExerciseSetRepository:
    """Repository for logged sets."""

    def __init__(self, gateway: Gateway):
        self.gateway = gateway

    async def create_blank(self, exercise_id: int, count: int) -> int:
        """Create ``count`` zeroed sets numbered 1..count."""
        return await self.gateway.insert_many(
            "exercise_sets",
            [
                ExerciseSet(exercise_id=exercise_id, set_number=i + 1).to_dict()
                for i in range(count)
            ],
        )

    async def upsert(self, exercise_set: ExerciseSet) -> ExerciseSet:
        """Insert or replace the set keyed by (exercise, set number)."""
        row = await self.gateway.upsert(
            "exercise_sets",
            exercise_set.to_dict(),
            conflict=("exercise_id", "set_number"),
        )
        return ExerciseSet.from_dict(row)

    async def list_by_exercise(self, exercise_id: int) -> list[ExerciseSet]:
        rows = await self.gateway.query(
            "exercise_sets", {"exercise_id": exercise_id}, order_by="set_number"
        )
        return [ExerciseSet.from_dict(row) for row in rows]

    async def list_by_exercises(self, exercise_ids: list[int]) -> list[ExerciseSet]:
        rows = await self.gateway.query(
            "exercise_sets", {"exercise_id": exercise_ids}, order_by="set_number"
        )
        return [ExerciseSet.from_dict(row) for row in rows]


class ExerciseRepository:
    """Repository for exercises inside daily workouts."""

    def __init__(self, gateway: Gateway):
        self.gateway = gateway

    async def create(self, exercise: Exercise) -> Exercise:
        row = await self.gateway.insert("exercises", exercise.to_dict())
        return Exercise.from_dict(row)

    async def get(self, exercise_id: int) -> Exercise | None:
        rows = await self.gateway.query("exercises", {"id": exercise_id})
        return Exercise.from_dict(rows[0]) if rows else None

    async def list_by_workouts(self, workout_ids: list[int]) -> list[Exercise]:
        rows = await self.gateway.query(
            "exercises", {"daily_workout_id": workout_ids}, order_by="id"
        )
        return [Exercise.from_dict(row) for row in rows]

    async def mark_completed(self, exercise_id: int) -> int:
        return await self.gateway.update(
            "exercises", {"id": exercise_id}, {"completed": True}
        )


class WorkoutRepository:
    """Repository for daily workouts.

    ``list_*`` and ``get_detail`` return workouts with their exercises and
    sets attached.
    """

    def __init__(self, gateway: Gateway):
        self.gateway = gateway
        self.exercises = ExerciseRepository(gateway)
        self.sets = ExerciseSetRepository(gateway)

    async def create(self, workout: DailyWorkout) -> DailyWorkout:
        row = await self.gateway.insert("daily_workouts", workout.to_dict())
        return DailyWorkout.from_dict(row)

    async def get(self, workout_id: int) -> DailyWorkout | None:
        rows = await self.gateway.query("daily_workouts", {"id": workout_id})
        return DailyWorkout.from_dict(rows[0]) if rows else None

    async def get_detail(self, workout_id: int) -> DailyWorkout | None:
        rows = await self.gateway.query("daily_workouts", {"id": workout_id})
        workouts = await self._materialize(rows)
        return workouts[0] if workouts else None

    async def list_visible_since(self, user_id: int, since: datetime) -> list[DailyWorkout]:
        """Workouts the user owns, is shared on, or that sit in no week."""
        rows = await self.gateway.fetch_all(
            """
            SELECT * FROM daily_workouts
            WHERE (
                user_id = ?
                OR EXISTS (SELECT 1 FROM json_each(shared_with) WHERE value = ?)
                OR weekly_workout_id IS NULL
            )
            AND date >= ?
            ORDER BY date DESC, id DESC
            """,
            (user_id, user_id, since.isoformat()),
        )
        return await self._materialize(rows)

    async def list_owned_since(self, user_id: int, since: datetime) -> list[DailyWorkout]:
        """The user's own non-shared workouts dated on or after ``since``."""
        rows = await self.gateway.fetch_all(
            """
            SELECT * FROM daily_workouts
            WHERE user_id = ? AND is_shared = 0 AND date >= ?
            ORDER BY date DESC, id DESC
            """,
            (user_id, since.isoformat()),
        )
        return await self._materialize(rows)

    async def list_completed_dates(self, user_id: int) -> list[datetime]:
        rows = await self.gateway.fetch_all(
            """
            SELECT completed_at FROM daily_workouts
            WHERE user_id = ? AND completed = 1 AND completed_at IS NOT NULL
            """,
            (user_id,),
        )
        return [datetime.fromisoformat(row["completed_at"]) for row in rows]

    async def list_favorites(self, user_id: int) -> list[DailyWorkout]:
        rows = await self.gateway.query(
            "daily_workouts",
            {"user_id": user_id, "is_favorite": True},
            order_by="date",
            descending=True,
        )
        return await self._materialize(rows)

    async def list_by_weekly(self, weekly_workout_id: int) -> list[DailyWorkout]:
        rows = await self.gateway.query(
            "daily_workouts", {"weekly_workout_id": weekly_workout_id}, order_by="date"
        )
        return await self._materialize(rows)

    async def set_favorite(self, workout_id: int, user_id: int, is_favorite: bool) -> int:
        return await self.gateway.update(
            "daily_workouts",
            {"id": workout_id, "user_id": user_id},
            {"is_favorite": is_favorite},
        )

    async def mark_completed(self, workout_id: int, user_id: int, when: datetime) -> int:
        return await self.gateway.update(
            "daily_workouts",
            {"id": workout_id, "user_id": user_id},
            {"completed": True, "completed_at": when},
        )

    async def delete(self, workout_id: int, user_id: int) -> int:
        """Delete sets, exercises, then the workout, if the user owns it."""
        async with self.gateway.transaction():
            owned = await self.gateway.query(
                "daily_workouts", {"id": workout_id, "user_id": user_id}
            )
            if not owned:
                return 0
            exercise_rows = await self.gateway.query(
                "exercises", {"daily_workout_id": workout_id}
            )
            exercise_ids = [row["id"] for row in exercise_rows]
            if exercise_ids:
                await self.gateway.delete("exercise_sets", {"exercise_id": exercise_ids})
            await self.gateway.delete("exercises", {"daily_workout_id": workout_id})
            return await self.gateway.delete(
                "daily_workouts", {"id": workout_id, "user_id": user_id}
            )

    async def _materialize(self, rows: list[dict]) -> list[DailyWorkout]:
        """Attach exercises and sets to workout rows."""
        if not rows:
            return []

        exercises = await self.exercises.list_by_workouts([row["id"] for row in rows])
        sets = await self.sets.list_by_exercises([ex.id for ex in exercises])

        sets_by_exercise: dict[int, list[ExerciseSet]] = {}
        for s in sets:
            sets_by_exercise.setdefault(s.exercise_id, []).append(s)

        exercises_by_workout: dict[int, list[Exercise]] = {}
        for ex in exercises:
            ex.sets = sets_by_exercise.get(ex.id, [])
            exercises_by_workout.setdefault(ex.daily_workout_id, []).append(ex)

        return [
            DailyWorkout.from_dict(row, exercises=exercises_by_workout.get(row["id"], []))
            for row in rows
        ]


class WeeklyWorkoutRepository:
    """Repository for weekly workout groupings."""

    def __init__(self, gateway: Gateway):
        self.gateway = gateway

    async def get(self, weekly_workout_id: int) -> WeeklyWorkout | None:
        rows = await self.gateway.query("weekly_workouts", {"id": weekly_workout_id})
        return WeeklyWorkout.from_dict(rows[0]) if rows else None

    async def get_or_create(self, user_id: int, week_start: date) -> WeeklyWorkout:
        """Get the user's week starting on ``week_start``, creating it if missing."""
        row = await self.gateway.upsert(
            "weekly_workouts",
            {"user_id": user_id, "week_start_date": week_start},
            conflict=("user_id", "week_start_date"),
        )
        return WeeklyWorkout.from_dict(row)

    async def latest_for_user(self, user_id: int) -> WeeklyWorkout | None:
        rows = await self.gateway.query(
            "weekly_workouts",
            {"user_id": user_id},
            order_by="week_start_date",
            descending=True,
            limit=1,
        )
        return WeeklyWorkout.from_dict(rows[0]) if rows else None

    async def set_status(self, weekly_workout_id: int, status: WeeklyStatus) -> int:
        return await self.gateway.update(
            "weekly_workouts", {"id": weekly_workout_id}, {"status": status}
        )


class PartnerRepository:
    """Repository for workout partner links."""

    def __init__(self, gateway: Gateway):
        self.gateway = gateway
        self.users = UserRepository(gateway)

    async def find_between(self, user_a: int, user_b: int) -> list[PartnerLink]:
        """All links between two users, in either direction."""
        rows = await self.gateway.fetch_all(
            """
            SELECT * FROM workout_partners
            WHERE (requester_id = ? AND target_id = ?)
               OR (requester_id = ? AND target_id = ?)
            """,
            (user_a, user_b, user_b, user_a),
        )
        return [PartnerLink.from_dict(row) for row in rows]

    async def create(self, requester_id: int, target_id: int) -> PartnerLink:
        row = await self.gateway.insert(
            "workout_partners",
            {
                "requester_id": requester_id,
                "target_id": target_id,
                "status": PartnerStatus.PENDING,
            },
        )
        return PartnerLink.from_dict(row)

    async def get(self, link_id: int) -> PartnerLink | None:
        rows = await self.gateway.query("workout_partners", {"id": link_id})
        return PartnerLink.from_dict(rows[0]) if rows else None

    async def set_status(self, link_id: int, target_id: int, status: PartnerStatus) -> int:
        return await self.gateway.update(
            "workout_partners",
            {"id": link_id, "target_id": target_id},
            {"status": status},
        )

    async def delete(self, link_id: int, requester_id: int) -> int:
        return await self.gateway.delete(
            "workout_partners", {"id": link_id, "requester_id": requester_id}
        )

    async def list_sent(self, user_id: int) -> list[PartnerLink]:
        """Links the user requested, with the target's profile attached."""
        return await self._with_counterparts(
            await self.gateway.query(
                "workout_partners", {"requester_id": user_id}, order_by="id"
            ),
            "target_id",
        )

    async def list_received(self, user_id: int) -> list[PartnerLink]:
        """Links addressed to the user, with the requester's profile attached."""
        return await self._with_counterparts(
            await self.gateway.query(
                "workout_partners", {"target_id": user_id}, order_by="id"
            ),
            "requester_id",
        )

    async def list_accepted(self, user_id: int) -> list[PartnerLink]:
        """Accepted links on either side, oldest first."""
        rows = await self.gateway.fetch_all(
            """
            SELECT * FROM workout_partners
            WHERE status = ? AND (requester_id = ? OR target_id = ?)
            ORDER BY id
            """,
            (PartnerStatus.ACCEPTED.value, user_id, user_id),
        )
        return [PartnerLink.from_dict(row) for row in rows]

    async def _with_counterparts(self, rows: list[dict], column: str) -> list[PartnerLink]:
        profiles = await self.users.get_many([row[column] for row in rows]) if rows else {}
        return [PartnerLink.from_dict(row, counterpart=profiles.get(row[column])) for row in rows]
