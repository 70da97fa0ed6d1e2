"""Progress statistics returned by the aggregator."""

from dataclasses import asdict, dataclass


def percent(part: int | float, whole: int | float) -> int:
    """Rounded percentage with the denominator floored at 1."""
    return round(part / max(whole, 1) * 100)


@dataclass
class ExerciseCompletion:
    """Set counts across a group of workouts."""

    total: int = 0
    completed: int = 0

    @property
    def rate(self) -> int:
        return percent(self.completed, self.total)

    def to_dict(self) -> dict:
        return {"total": self.total, "completed": self.completed, "rate": self.rate}


@dataclass
class PartnerStats:
    """Partner's completion figures for their most recent week."""

    partner_id: int
    name: str
    completed_workouts: int = 0
    completion_rate: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class WorkoutStats:
    """Current week summary for one user."""

    weekly_workouts: int
    completed_workouts: int
    exercise_completion: ExerciseCompletion
    partner: PartnerStats | None = None

    @property
    def completion_rate(self) -> int:
        return percent(self.completed_workouts, self.weekly_workouts)

    def to_dict(self) -> dict:
        return {
            "weekly_workouts": self.weekly_workouts,
            "completed_workouts": self.completed_workouts,
            "completion_rate": self.completion_rate,
            "exercise_completion": self.exercise_completion.to_dict(),
            "partner": self.partner.to_dict() if self.partner else None,
        }


@dataclass
class ComparisonSide:
    """One user's figures in a partner comparison."""

    user_id: int
    name: str
    weekly_workouts: int = 0
    completed_workouts: int = 0
    total_weight: float = 0
    streak: int = 0

    @property
    def completion_rate(self) -> int:
        return percent(self.completed_workouts, self.weekly_workouts)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["completion_rate"] = self.completion_rate
        return data


@dataclass
class PartnerComparison:
    """Side-by-side weekly figures for a user and an accepted partner."""

    user: ComparisonSide
    partner: ComparisonSide

    def to_dict(self) -> dict:
        return {"user": self.user.to_dict(), "partner": self.partner.to_dict()}
