"""Workout, exercise and set models."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum


class Difficulty(str, Enum):
    """Workout difficulty."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class WeeklyStatus(str, Enum):
    """Completion status of a weekly workout."""

    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


def _parse_datetime(value) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


@dataclass
class ExerciseSet:
    """One logged set of an exercise."""

    exercise_id: int
    set_number: int
    weight: float = 0
    reps: int = 0
    completed: bool = False
    id: int | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "exercise_id": self.exercise_id,
            "set_number": self.set_number,
            "weight": self.weight,
            "reps": self.reps,
            "completed": self.completed,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ExerciseSet":
        """Create from dictionary or database row."""
        return cls(
            id=data.get("id"),
            exercise_id=data["exercise_id"],
            set_number=data["set_number"],
            weight=data.get("weight") or 0,
            reps=data.get("reps") or 0,
            completed=bool(data.get("completed", False)),
        )

    @property
    def volume(self) -> float:
        """Weight moved in this set (weight x reps)."""
        return self.weight * self.reps


@dataclass
class Exercise:
    """An exercise inside a daily workout."""

    daily_workout_id: int
    name: str
    body_part: str
    target_sets: int
    target_reps: str
    notes: str = ""
    completed: bool = False
    sets: list[ExerciseSet] = field(default_factory=list)
    id: int | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "daily_workout_id": self.daily_workout_id,
            "name": self.name,
            "body_part": self.body_part,
            "target_sets": self.target_sets,
            "target_reps": self.target_reps,
            "notes": self.notes,
            "completed": self.completed,
        }

    @classmethod
    def from_dict(cls, data: dict, sets: list[ExerciseSet] | None = None) -> "Exercise":
        """Create from dictionary or database row."""
        return cls(
            id=data.get("id"),
            daily_workout_id=data["daily_workout_id"],
            name=data["name"],
            body_part=data["body_part"],
            target_sets=data["target_sets"],
            target_reps=data["target_reps"],
            notes=data.get("notes") or "",
            completed=bool(data.get("completed", False)),
            sets=sets or [],
        )


@dataclass
class DailyWorkout:
    """A single day's workout with its exercises.

    Completion is only ever set explicitly; it is not derived from the
    exercises' own completion flags.
    """

    user_id: int
    title: str
    duration: int
    difficulty: Difficulty
    date: datetime
    completed: bool = False
    completed_at: datetime | None = None
    is_favorite: bool = False
    is_shared: bool = False
    shared_with: list[int] = field(default_factory=list)
    weekly_workout_id: int | None = None
    exercises: list[Exercise] = field(default_factory=list)
    id: int | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "user_id": self.user_id,
            "title": self.title,
            "duration": self.duration,
            "difficulty": self.difficulty.value,
            "date": self.date.isoformat(),
            "completed": self.completed,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "is_favorite": self.is_favorite,
            "is_shared": self.is_shared,
            "shared_with": list(self.shared_with),
            "weekly_workout_id": self.weekly_workout_id,
        }

    @classmethod
    def from_dict(
        cls, data: dict, exercises: list[Exercise] | None = None
    ) -> "DailyWorkout":
        """Create from dictionary or database row."""
        return cls(
            id=data.get("id"),
            user_id=data["user_id"],
            title=data["title"],
            duration=data["duration"],
            difficulty=Difficulty(data["difficulty"]),
            date=_parse_datetime(data["date"]),
            completed=bool(data.get("completed", False)),
            completed_at=_parse_datetime(data.get("completed_at")),
            is_favorite=bool(data.get("is_favorite", False)),
            is_shared=bool(data.get("is_shared", False)),
            shared_with=list(data.get("shared_with") or []),
            weekly_workout_id=data.get("weekly_workout_id"),
            exercises=exercises or [],
        )

    @property
    def all_sets(self) -> list[ExerciseSet]:
        return [s for ex in self.exercises for s in ex.sets]

    def to_detail_dict(self) -> dict:
        """Workout with nested exercises and sets, for API responses."""
        data = self.to_dict()
        data["id"] = self.id
        data["exercises"] = []
        for ex in self.exercises:
            ex_data = ex.to_dict()
            ex_data["id"] = ex.id
            ex_data["sets"] = [s.to_dict() for s in ex.sets]
            data["exercises"].append(ex_data)
        return data


@dataclass
class WeeklyWorkout:
    """Groups a user's daily workouts for one calendar week."""

    user_id: int
    week_start_date: date
    status: WeeklyStatus = WeeklyStatus.IN_PROGRESS
    workouts: list[DailyWorkout] = field(default_factory=list)
    id: int | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "user_id": self.user_id,
            "week_start_date": self.week_start_date.isoformat(),
            "status": self.status.value,
        }

    @classmethod
    def from_dict(
        cls, data: dict, workouts: list[DailyWorkout] | None = None
    ) -> "WeeklyWorkout":
        """Create from dictionary or database row."""
        week_start = data["week_start_date"]
        if isinstance(week_start, str):
            week_start = date.fromisoformat(week_start[:10])
        return cls(
            id=data.get("id"),
            user_id=data["user_id"],
            week_start_date=week_start,
            status=WeeklyStatus(data.get("status", "in_progress")),
            workouts=workouts or [],
        )
