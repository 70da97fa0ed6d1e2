"""Database layer for liftpal."""

from .engine import init_db, seed_catalog
from .gateway import Gateway
from .repositories import (
    CatalogRepository,
    ExerciseRepository,
    ExerciseSetRepository,
    PartnerRepository,
    UserRepository,
    WeeklyWorkoutRepository,
    WorkoutRepository,
)

__all__ = [
    "CatalogRepository",
    "ExerciseRepository",
    "ExerciseSetRepository",
    "Gateway",
    "init_db",
    "PartnerRepository",
    "seed_catalog",
    "UserRepository",
    "WeeklyWorkoutRepository",
    "WorkoutRepository",
]
