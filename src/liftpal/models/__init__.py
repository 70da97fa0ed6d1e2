"""Data models for liftpal."""

from .catalog import BODY_PARTS, COMMON_EXERCISES, AvailableExercise
from .partner import PartnerLink, PartnerStatus, UserProfile
from .stats import (
    ComparisonSide,
    ExerciseCompletion,
    PartnerComparison,
    PartnerStats,
    WorkoutStats,
)
from .workout import (
    DailyWorkout,
    Difficulty,
    Exercise,
    ExerciseSet,
    WeeklyStatus,
    WeeklyWorkout,
)

__all__ = [
    "AvailableExercise",
    "BODY_PARTS",
    "COMMON_EXERCISES",
    "ComparisonSide",
    "DailyWorkout",
    "Difficulty",
    "Exercise",
    "ExerciseCompletion",
    "ExerciseSet",
    "PartnerComparison",
    "PartnerLink",
    "PartnerStats",
    "PartnerStatus",
    "UserProfile",
    "WeeklyStatus",
    "WeeklyWorkout",
    "WorkoutStats",
]
