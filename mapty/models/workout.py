"""Workout records and the factory that validates input and builds them.

A workout is one of two variants selected by its `type` field: `Running`
(cadence and pace) or `Cycling` (elevation gain and speed). Records are frozen
once built; the store only ever appends or clears them.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Annotated, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    FiniteFloat,
    TypeAdapter,
    ValidationError,
)

from mapty.agg import compute_pace, compute_speed, describe
from .errors import WorkoutValidationError

logger = logging.getLogger(__name__)

WorkoutType = Literal["running", "cycling"]
WORKOUT_TYPES: tuple[WorkoutType, ...] = ("running", "cycling")

# (latitude, longitude)
Coords = tuple[FiniteFloat, FiniteFloat]


_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def generate_workout_id(date: datetime) -> str:
    """Derive a workout ID from the last ten digits of the creation time in epoch ms.

    Naive datetimes are taken to be in local time.
    """
    if date.tzinfo is None:
        date = date.astimezone()
    millis = (date - _EPOCH) // timedelta(milliseconds=1)
    return str(millis)[-10:]


class WorkoutBase(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False, populate_by_name=True)

    id: str
    date: datetime  # Creation time, never changed
    coords: Coords
    distance: FiniteFloat = Field(gt=0)  # in km
    duration: FiniteFloat = Field(gt=0)  # in minutes
    type: WorkoutType
    description: str


class Running(WorkoutBase):
    type: Literal["running"] = "running"
    cadence: FiniteFloat = Field(gt=0)  # steps per minute
    pace: FiniteFloat  # min/km


class Cycling(WorkoutBase):
    type: Literal["cycling"] = "cycling"
    # Negative values represent a net elevation loss.
    elevation_gain: FiniteFloat = Field(alias="elevationGain")  # in meters
    speed: FiniteFloat  # km/h


Workout = Annotated[Union[Running, Cycling], Field(discriminator="type")]

workout_adapter: TypeAdapter[Workout] = TypeAdapter(Workout)
workout_list_adapter: TypeAdapter[list[Workout]] = TypeAdapter(list[Workout])


class _WorkoutInput(BaseModel):
    """Raw construction input, coerced from floats or numeric form strings."""

    model_config = ConfigDict(allow_inf_nan=False, populate_by_name=True)

    coords: Coords
    distance: FiniteFloat = Field(gt=0)
    duration: FiniteFloat = Field(gt=0)


class _RunningInput(_WorkoutInput):
    cadence: FiniteFloat = Field(gt=0)


class _CyclingInput(_WorkoutInput):
    elevation_gain: FiniteFloat = Field(alias="elevationGain")


def _failed_fields(error: ValidationError) -> list[str]:
    """Collect the top-level field names from a pydantic error, in order, without repeats."""
    fields: list[str] = []
    for detail in error.errors():
        if not detail["loc"]:
            continue
        name = str(detail["loc"][0])
        if name == "elevation_gain":
            name = "elevationGain"
        if name not in fields:
            fields.append(name)
    return fields


def create_workout(
    type: str,
    coords: tuple[float, float],
    distance: float | str,
    duration: float | str,
    extra: float | str | None,
    now: datetime | None = None,
) -> Workout:
    """Validate raw input and build a Running or Cycling record.

    Args:
        type: "running" or "cycling".
        coords: (latitude, longitude) of the workout.
        distance: Distance in km; must be finite and positive.
        duration: Duration in minutes; must be finite and positive.
        extra: Cadence (steps/min, finite and positive) for running, or
            elevation gain (meters, finite, any sign) for cycling.
        now: Creation time. Defaults to the current local time.

    Raises:
        WorkoutValidationError: If any input is invalid. Nothing is built.
    """
    if type not in WORKOUT_TYPES:
        raise WorkoutValidationError(["type"], f"Unknown workout type: {type!r}")

    raw = {"coords": coords, "distance": distance, "duration": duration}
    inputs: _RunningInput | _CyclingInput
    try:
        match type:
            case "running":
                inputs = _RunningInput.model_validate({**raw, "cadence": extra})
            case _:
                inputs = _CyclingInput.model_validate({**raw, "elevationGain": extra})
    except ValidationError as e:
        fields = _failed_fields(e)
        logger.debug(f"Rejected {type} workout input, invalid fields: {fields}")
        raise WorkoutValidationError(fields) from e

    date = now if now is not None else datetime.now().astimezone()
    shared = {
        "id": generate_workout_id(date),
        "date": date,
        "coords": inputs.coords,
        "distance": inputs.distance,
        "duration": inputs.duration,
        "description": describe(type, date),
    }
    try:
        if isinstance(inputs, _RunningInput):
            return Running(
                **shared,
                cadence=inputs.cadence,
                pace=compute_pace(inputs.distance, inputs.duration),
            )
        return Cycling(
            **shared,
            elevation_gain=inputs.elevation_gain,
            speed=compute_speed(inputs.distance, inputs.duration),
        )
    except (ZeroDivisionError, ValidationError) as e:
        # Finite inputs whose derived metric overflows or underflows.
        logger.debug(f"Rejected {type} workout, derived metric out of range: {e}")
        raise WorkoutValidationError(
            ["distance", "duration"],
            "Distance and duration are too far apart to compute a finite "
            + ("pace" if type == "running" else "speed"),
        ) from e
