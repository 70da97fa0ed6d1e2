"""Workout routes."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ...models.workout import Difficulty
from ...services import ProgressAggregator, Sharing, WorkoutGenerator
from ..deps import get_aggregator, get_generator

router = APIRouter(prefix="/workouts", tags=["workouts"])


class GenerateRequest(BaseModel):
    duration: int = Field(gt=0)
    difficulty: Difficulty
    body_parts: list[str] = Field(min_length=1)
    is_shared: bool = False
    shared_with: list[int] = Field(default_factory=list)


class SetUpdate(BaseModel):
    weight: float = Field(ge=0)
    reps: int = Field(ge=0)
    completed: bool


class FavoriteUpdate(BaseModel):
    is_favorite: bool


@router.post("", status_code=201)
async def generate_workout(
    body: GenerateRequest,
    generator: WorkoutGenerator = Depends(get_generator),
):
    """Generate a workout for the requested body parts."""
    workout = await generator.generate(
        body.duration,
        body.difficulty,
        body.body_parts,
        sharing=Sharing(is_shared=body.is_shared, shared_with=body.shared_with),
    )
    return workout.to_detail_dict()


@router.get("/week")
async def current_week(aggregator: ProgressAggregator = Depends(get_aggregator)):
    """Workouts visible to the caller this week, newest first."""
    return [w.to_detail_dict() for w in await aggregator.get_current_week_workouts()]


@router.get("/favorites")
async def favorites(aggregator: ProgressAggregator = Depends(get_aggregator)):
    return [w.to_detail_dict() for w in await aggregator.get_favorite_workouts()]


@router.get("/{workout_id}")
async def get_workout(workout_id: int, aggregator: ProgressAggregator = Depends(get_aggregator)):
    return (await aggregator.get_workout(workout_id)).to_detail_dict()


@router.post("/{workout_id}/complete")
async def complete_workout(
    workout_id: int,
    aggregator: ProgressAggregator = Depends(get_aggregator),
):
    """Mark a workout completed; reports whether its week is now complete."""
    all_completed = await aggregator.complete_workout(workout_id)
    return {"status": "completed", "all_workouts_completed": all_completed}


@router.put("/{workout_id}/favorite")
async def set_favorite(
    workout_id: int,
    body: FavoriteUpdate,
    aggregator: ProgressAggregator = Depends(get_aggregator),
):
    updated = await aggregator.toggle_favorite(workout_id, body.is_favorite)
    return {"updated": updated}


@router.delete("/{workout_id}")
async def delete_workout(
    workout_id: int,
    aggregator: ProgressAggregator = Depends(get_aggregator),
):
    return {"deleted": await aggregator.delete_workout(workout_id)}


@router.post("/{workout_id}/copy", status_code=201)
async def copy_to_week(
    workout_id: int,
    generator: WorkoutGenerator = Depends(get_generator),
):
    """Copy a workout into the caller's current week."""
    return (await generator.add_workout_to_week(workout_id)).to_detail_dict()


@router.put("/exercises/{exercise_id}/sets/{set_number}")
async def update_set(
    exercise_id: int,
    set_number: int,
    body: SetUpdate,
    aggregator: ProgressAggregator = Depends(get_aggregator),
):
    """Log one set; reports whether every set of the exercise is done."""
    all_completed = await aggregator.update_exercise_set(
        exercise_id, set_number, body.weight, body.reps, body.completed
    )
    return {"all_sets_completed": all_completed}
