"""CLI commands for liftpal."""

from .generate import generate
from .init import init
from .partners import partners
from .serve import serve
from .stats import stats
from .users import users
from .workouts import workouts

__all__ = [
    "generate",
    "init",
    "partners",
    "serve",
    "stats",
    "users",
    "workouts",
]
