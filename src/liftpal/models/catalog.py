"""Exercise catalog used by the workout generator."""

from dataclasses import dataclass


# Body-part tags the catalog is keyed on (``main_muscle_group``)
BODY_PARTS = [
    "Chest",
    "Back",
    "Shoulders",
    "Biceps",
    "Triceps",
    "Legs",
    "Glutes",
    "Core",
]


@dataclass
class AvailableExercise:
    """A catalog entry the generator can pick from."""

    name: str
    main_muscle_group: str
    primary_equipment: str
    grip_style: str | None = None
    id: int | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "name": self.name,
            "main_muscle_group": self.main_muscle_group,
            "primary_equipment": self.primary_equipment,
            "grip_style": self.grip_style,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AvailableExercise":
        """Create from dictionary or database row."""
        return cls(
            id=data.get("id"),
            name=data["name"],
            main_muscle_group=data["main_muscle_group"],
            primary_equipment=data["primary_equipment"],
            grip_style=data.get("grip_style"),
        )

    def describe(self) -> str:
        """Human-readable equipment/grip summary stored as exercise notes."""
        return f"Equipment: {self.primary_equipment}, Grip: {self.grip_style or 'Any'}"


COMMON_EXERCISES: list[AvailableExercise] = [
    # Chest
    AvailableExercise("Barbell Bench Press", "Chest", "Barbell", "Pronated"),
    AvailableExercise("Incline Dumbbell Press", "Chest", "Dumbbell", "Neutral"),
    AvailableExercise("Cable Fly", "Chest", "Cable"),
    AvailableExercise("Push Up", "Chest", "Bodyweight"),
    # Back
    AvailableExercise("Pull Up", "Back", "Bodyweight", "Pronated"),
    AvailableExercise("Barbell Row", "Back", "Barbell", "Pronated"),
    AvailableExercise("Lat Pulldown", "Back", "Cable", "Wide"),
    AvailableExercise("Seated Cable Row", "Back", "Cable", "Neutral"),
    # Shoulders
    AvailableExercise("Overhead Press", "Shoulders", "Barbell", "Pronated"),
    AvailableExercise("Lateral Raise", "Shoulders", "Dumbbell", "Neutral"),
    AvailableExercise("Face Pull", "Shoulders", "Cable", "Rope"),
    # Arms
    AvailableExercise("Barbell Curl", "Biceps", "Barbell", "Supinated"),
    AvailableExercise("Hammer Curl", "Biceps", "Dumbbell", "Neutral"),
    AvailableExercise("Incline Dumbbell Curl", "Biceps", "Dumbbell", "Supinated"),
    AvailableExercise("Tricep Pushdown", "Triceps", "Cable", "Pronated"),
    AvailableExercise("Skull Crusher", "Triceps", "EZ Bar", "Pronated"),
    AvailableExercise("Dip", "Triceps", "Bodyweight"),
    # Legs
    AvailableExercise("Back Squat", "Legs", "Barbell"),
    AvailableExercise("Romanian Deadlift", "Legs", "Barbell", "Pronated"),
    AvailableExercise("Leg Press", "Legs", "Machine"),
    AvailableExercise("Walking Lunge", "Legs", "Dumbbell", "Neutral"),
    AvailableExercise("Hip Thrust", "Glutes", "Barbell"),
    AvailableExercise("Cable Kickback", "Glutes", "Cable"),
    # Core
    AvailableExercise("Plank", "Core", "Bodyweight"),
    AvailableExercise("Hanging Leg Raise", "Core", "Bodyweight", "Pronated"),
    AvailableExercise("Cable Crunch", "Core", "Cable", "Rope"),
]
