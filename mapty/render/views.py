"""View data handed to the map and list renderers for each workout.

Drawing itself happens outside this package; renderers receive a workout and
turn these views into markers and list entries.
"""

from typing import Protocol

from pydantic import BaseModel

from mapty.models import Workout, WorkoutType

WORKOUT_ICONS: dict[WorkoutType, str] = {
    "running": "🏃‍♂️",
    "cycling": "🚴‍♀️",
}


class WorkoutMarker(BaseModel):
    """A map marker with an always-open popup."""

    workout_id: str
    coords: tuple[float, float]
    popup_text: str
    popup_class: str
    max_width: int = 250
    min_width: int = 100


class WorkoutDetail(BaseModel):
    """One icon/value/unit row of a list entry."""

    icon: str
    value: str
    unit: str


class WorkoutListItem(BaseModel):
    """A workout entry in the sidebar list."""

    workout_id: str
    type: WorkoutType
    title: str
    details: list[WorkoutDetail]


def _format_number(value: float) -> str:
    """Format a stored number the way it was entered: 5.0 -> "5", 5.5 -> "5.5"."""
    return str(int(value)) if value.is_integer() else str(value)


def marker_view(workout: Workout) -> WorkoutMarker:
    return WorkoutMarker(
        workout_id=workout.id,
        coords=workout.coords,
        popup_text=f"{WORKOUT_ICONS[workout.type]} {workout.description}",
        popup_class=f"{workout.type}-popup",
    )


def list_item_view(workout: Workout) -> WorkoutListItem:
    """Build the list entry: distance and duration, then the type-specific metrics."""
    details = [
        WorkoutDetail(
            icon=WORKOUT_ICONS[workout.type],
            value=_format_number(workout.distance),
            unit="km",
        ),
        WorkoutDetail(icon="⏱", value=_format_number(workout.duration), unit="min"),
    ]
    match workout.type:
        case "running":
            details += [
                WorkoutDetail(icon="⚡️", value=f"{workout.pace:.1f}", unit="min/km"),
                WorkoutDetail(
                    icon="🦶🏼", value=_format_number(workout.cadence), unit="spm"
                ),
            ]
        case "cycling":
            details += [
                WorkoutDetail(icon="⚡️", value=f"{workout.speed:.1f}", unit="km/h"),
                WorkoutDetail(
                    icon="⛰", value=_format_number(workout.elevation_gain), unit="m"
                ),
            ]
    return WorkoutListItem(
        workout_id=workout.id,
        type=workout.type,
        title=workout.description,
        details=details,
    )


class WorkoutRenderer(Protocol):
    def render_workout(self, workout: Workout) -> None: ...

    def clear(self) -> None: ...


class ViewCollector:
    """A renderer that keeps the marker and list views of every workout it is shown.

    List items are kept newest first, matching how new entries are inserted at
    the top of the list.
    """

    def __init__(self) -> None:
        self.markers: list[WorkoutMarker] = []
        self.items: list[WorkoutListItem] = []

    def render_workout(self, workout: Workout) -> None:
        self.markers.append(marker_view(workout))
        self.items.insert(0, list_item_view(workout))

    def clear(self) -> None:
        self.markers = []
        self.items = []
