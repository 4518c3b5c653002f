from .workout import (
    Workout,
    WorkoutBase,
    WorkoutType,
    WORKOUT_TYPES,
    Running,
    Cycling,
    Coords,
    create_workout,
    generate_workout_id,
    workout_adapter,
    workout_list_adapter,
)
from .errors import WorkoutValidationError, PersistenceError

__all__ = [
    "Workout",
    "WorkoutBase",
    "WorkoutType",
    "WORKOUT_TYPES",
    "Running",
    "Cycling",
    "Coords",
    "create_workout",
    "generate_workout_id",
    "workout_adapter",
    "workout_list_adapter",
    "WorkoutValidationError",
    "PersistenceError",
]
