"""Tests for data models."""

from datetime import date, datetime

from liftpal.models.catalog import BODY_PARTS, COMMON_EXERCISES, AvailableExercise
from liftpal.models.partner import PartnerLink, PartnerStatus, UserProfile
from liftpal.models.stats import (
    ComparisonSide,
    ExerciseCompletion,
    PartnerStats,
    WorkoutStats,
    percent,
)
from liftpal.models.workout import (
    DailyWorkout,
    Difficulty,
    Exercise,
    ExerciseSet,
    WeeklyStatus,
    WeeklyWorkout,
)


class TestCatalog:
    """Tests for the built-in exercise catalog."""

    def test_every_body_part_has_two_exercises(self):
        """Test the generator can draw two exercises for each body part."""
        for part in BODY_PARTS:
            matches = [e for e in COMMON_EXERCISES if e.main_muscle_group == part]
            assert len(matches) >= 2, part

    def test_names_unique(self):
        names = [e.name for e in COMMON_EXERCISES]
        assert len(names) == len(set(names))

    def test_describe_with_grip(self):
        exercise = AvailableExercise("Barbell Row", "Back", "Barbell", "Pronated")
        assert exercise.describe() == "Equipment: Barbell, Grip: Pronated"

    def test_describe_without_grip(self):
        exercise = AvailableExercise("Plank", "Core", "Bodyweight")
        assert exercise.describe() == "Equipment: Bodyweight, Grip: Any"


class TestDailyWorkout:
    """Tests for DailyWorkout model."""

    def test_round_trip_from_row(self):
        """Test a stored row with integer flags and JSON list converts back."""
        row = {
            "id": 7,
            "user_id": 1,
            "title": "Chest (3/12/25)",
            "duration": 45,
            "difficulty": "hard",
            "date": "2025-03-12T18:30:00",
            "completed": 1,
            "completed_at": "2025-03-12T19:30:00",
            "is_favorite": 0,
            "is_shared": 1,
            "shared_with": [2, 3],
            "weekly_workout_id": None,
        }
        workout = DailyWorkout.from_dict(row)

        assert workout.id == 7
        assert workout.difficulty == Difficulty.HARD
        assert workout.completed is True
        assert workout.is_favorite is False
        assert workout.shared_with == [2, 3]
        assert workout.completed_at == datetime(2025, 3, 12, 19, 30)

        data = workout.to_dict()
        assert data["difficulty"] == "hard"
        assert data["date"] == "2025-03-12T18:30:00"

    def test_all_sets_and_detail(self):
        sets = [ExerciseSet(exercise_id=1, set_number=n) for n in (1, 2, 3)]
        exercise = Exercise(
            daily_workout_id=1, name="Dip", body_part="Triceps",
            target_sets=3, target_reps="8-10", sets=sets, id=1,
        )
        workout = DailyWorkout(
            user_id=1, title="Triceps", duration=30, difficulty=Difficulty.EASY,
            date=datetime(2025, 3, 12), exercises=[exercise], id=1,
        )

        assert len(workout.all_sets) == 3
        detail = workout.to_detail_dict()
        assert detail["exercises"][0]["id"] == 1
        assert [s["set_number"] for s in detail["exercises"][0]["sets"]] == [1, 2, 3]


class TestExerciseSet:
    def test_volume(self):
        assert ExerciseSet(exercise_id=1, set_number=1, weight=100, reps=8).volume == 800


class TestWeeklyWorkout:
    def test_from_row(self):
        week = WeeklyWorkout.from_dict(
            {"id": 3, "user_id": 1, "week_start_date": "2025-03-09", "status": "completed"}
        )
        assert week.week_start_date == date(2025, 3, 9)
        assert week.status == WeeklyStatus.COMPLETED
        assert week.to_dict()["week_start_date"] == "2025-03-09"


class TestPartnerLink:
    def test_other(self):
        link = PartnerLink(requester_id=1, target_id=2)
        assert link.other(1) == 2
        assert link.other(2) == 1

    def test_to_dict_hides_email(self):
        link = PartnerLink(
            requester_id=1, target_id=2, status=PartnerStatus.ACCEPTED, id=5,
            counterpart=UserProfile(id=2, name="Bob", username="bob", email="b@x.io"),
        )
        data = link.to_dict()
        assert data["status"] == "accepted"
        assert data["counterpart"] == {"id": 2, "name": "Bob", "username": "bob"}


class TestStats:
    """Tests for the stats result types."""

    def test_percent_guards_zero(self):
        assert percent(0, 0) == 0
        assert percent(3, 0) == 300

    def test_percent_rounds(self):
        assert percent(1, 3) == 33
        assert percent(2, 3) == 67

    def test_exercise_completion_rate(self):
        assert ExerciseCompletion().rate == 0
        assert ExerciseCompletion(total=8, completed=6).rate == 75

    def test_workout_stats_to_dict(self):
        stats = WorkoutStats(
            weekly_workouts=4,
            completed_workouts=3,
            exercise_completion=ExerciseCompletion(total=10, completed=5),
            partner=PartnerStats(partner_id=2, name="Bob", completed_workouts=1, completion_rate=50),
        )
        data = stats.to_dict()
        assert data["completion_rate"] == 75
        assert data["exercise_completion"] == {"total": 10, "completed": 5, "rate": 50}
        assert data["partner"]["name"] == "Bob"

    def test_comparison_side_rate(self):
        side = ComparisonSide(user_id=1, name="A", weekly_workouts=0)
        assert side.completion_rate == 0
        assert side.to_dict()["completion_rate"] == 0
