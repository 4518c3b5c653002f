from typing import Optional

from pydantic import BaseModel

from mapty.models import Workout
from mapty.render import WorkoutMarker, WorkoutListItem
from .env_loader import EnvironmentName


class MapClickRequest(BaseModel):
    """A click on the map, in degrees."""

    lat: float
    lng: float


class WorkoutViewsResponse(BaseModel):
    """Everything the map and list need to draw the current workouts."""

    markers: list[WorkoutMarker]
    items: list[WorkoutListItem]


class CreateWorkoutResponse(BaseModel):
    """Response model for a newly recorded workout."""

    workout: Workout
    marker: WorkoutMarker
    item: WorkoutListItem
    # False when the workout could not be saved and only lives in memory.
    persisted: bool
    warning: Optional[str] = None


class ResetResponse(BaseModel):
    reload: bool


class EnvironmentResponse(BaseModel):
    """Response model for the environment endpoint."""

    environment: EnvironmentName
