"""Session orchestration: map clicks and form submissions in, workouts out.

All per-session state lives in an explicit `AppContext` so the controller can
run without a browser or a web server.
"""

import logging
from dataclasses import dataclass, field

from pydantic import BaseModel

from mapty.db.workouts import WorkoutStore, HydrationResult
from mapty.models import (
    Workout,
    WorkoutValidationError,
    PersistenceError,
    create_workout,
)
from mapty.render import WorkoutRenderer

logger = logging.getLogger(__name__)

DEFAULT_MAP_ZOOM_LEVEL = 13


class MapClick(BaseModel):
    """The map position the pending workout will be recorded at."""

    lat: float
    lng: float


class MapFocus(BaseModel):
    """Where to move the map to show a workout's marker."""

    coords: tuple[float, float]
    zoom: int


class SubmitResult(BaseModel):
    workout: Workout
    persisted: bool


@dataclass
class AppContext:
    store: WorkoutStore
    renderers: list[WorkoutRenderer] = field(default_factory=list)
    map_zoom_level: int = DEFAULT_MAP_ZOOM_LEVEL
    pending_click: MapClick | None = None


class SessionController:
    def __init__(self, context: AppContext):
        self.context = context

    @property
    def store(self) -> WorkoutStore:
        return self.context.store

    def _notify(self, workout: Workout) -> None:
        for renderer in self.context.renderers:
            renderer.render_workout(workout)

    def load(self) -> HydrationResult:
        """Restore stored workouts and render each of them in stored order."""
        result = self.store.hydrate()
        for renderer in self.context.renderers:
            renderer.clear()
        for workout in self.store:
            self._notify(workout)
        return result

    def handle_map_click(self, lat: float, lng: float) -> MapClick:
        """Remember where the user clicked; the next submitted workout is placed there."""
        self.context.pending_click = MapClick(lat=lat, lng=lng)
        return self.context.pending_click

    def submit_workout(
        self,
        type: str,
        distance: float | str,
        duration: float | str,
        cadence: float | str | None = None,
        elevation: float | str | None = None,
    ) -> SubmitResult:
        """Build a workout from form input at the last clicked position and store it.

        The cadence is used for running workouts and the elevation for cycling
        ones; the other is ignored.

        Raises:
            WorkoutValidationError: If there is no clicked position or the input
                is invalid. The store is not touched.
        """
        click = self.context.pending_click
        if click is None:
            raise WorkoutValidationError(
                ["coords"], "Click on the map to choose where the workout happened"
            )
        extra = cadence if type == "running" else elevation
        workout = create_workout(type, (click.lat, click.lng), distance, duration, extra)

        persisted = True
        try:
            self.store.add(workout)
        except PersistenceError as e:
            # The workout is still in memory; keep going for this session.
            logger.warning(f"Workout {workout.id} was not saved to storage: {e}")
            persisted = False

        self._notify(workout)
        self.context.pending_click = None
        return SubmitResult(workout=workout, persisted=persisted)

    def focus_workout(self, workout_id: str) -> MapFocus | None:
        """Get the map position for a listed workout, or None if it is unknown."""
        workout = self.store.find_by_id(workout_id)
        if workout is None:
            logger.debug(f"No workout with ID {workout_id} to focus")
            return None
        return MapFocus(coords=workout.coords, zoom=self.context.map_zoom_level)

    def reset(self) -> bool:
        """Delete every workout, stored and in memory.

        Returns True to signal that the host should reload its view.

        Raises:
            PersistenceError: If storage could not be cleared.
        """
        self.store.reset()
        for renderer in self.context.renderers:
            renderer.clear()
        self.context.pending_click = None
        return True
