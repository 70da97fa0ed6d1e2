"""Domain services for liftpal."""

from .generator import Sharing, WorkoutGenerator
from .partners import PartnerManager
from .progress import ProgressAggregator

__all__ = ["PartnerManager", "ProgressAggregator", "Sharing", "WorkoutGenerator"]
