"""The workout store: an ordered in-memory sequence mirrored to a storage slot."""

import json
import logging
from typing import Iterator

from pydantic import BaseModel, ValidationError

from mapty.models import Workout, PersistenceError, workout_adapter, workout_list_adapter
from .storage import KeyValueStore

logger = logging.getLogger(__name__)

STORAGE_KEY = "workouts"


class HydrationResult(BaseModel):
    """Outcome of loading the persisted snapshot."""

    loaded: int = 0
    rejected: int = 0


class WorkoutStore:
    """Owns the workouts in creation order and their persisted snapshot.

    Every write stores the whole sequence as a JSON array under a single key.
    The store is the only reader and writer of that key.
    """

    def __init__(self, storage: KeyValueStore, key: str = STORAGE_KEY):
        self.storage = storage
        self.key = key
        self._workouts: list[Workout] = []

    @property
    def workouts(self) -> tuple[Workout, ...]:
        return tuple(self._workouts)

    def __len__(self) -> int:
        return len(self._workouts)

    def __iter__(self) -> Iterator[Workout]:
        return iter(tuple(self._workouts))

    def add(self, workout: Workout) -> None:
        """Append a workout and persist the full snapshot.

        Duplicate IDs are not checked. If the write fails the workout is kept in
        memory and PersistenceError is raised.
        """
        self._workouts.append(workout)
        logger.debug(f"Added {workout.type} workout {workout.id}")
        self.persist()

    def find_by_id(self, workout_id: str) -> Workout | None:
        """Get a workout by its ID, or None if there is no such workout."""
        for workout in self._workouts:
            if workout.id == workout_id:
                return workout
        return None

    def persist(self) -> None:
        """Write every workout to storage as one JSON array.

        Raises:
            PersistenceError: If the storage write fails.
        """
        payload = workout_list_adapter.dump_json(self._workouts, by_alias=True).decode(
            "utf-8"
        )
        try:
            self.storage.set_item(self.key, payload)
        except (OSError, ValueError) as e:
            logger.warning(
                f"Failed to persist {len(self._workouts)} workouts: {type(e).__name__}: {e}"
            )
            raise PersistenceError(f"Could not save workouts: {e}") from e
        logger.info(f"Persisted {len(self._workouts)} workouts")

    def hydrate(self) -> HydrationResult:
        """Replace the in-memory workouts with the persisted snapshot.

        A missing, unreadable, or unparsable snapshot leaves the store empty.
        Each stored entry is validated again; entries that fail are dropped and
        logged rather than loaded.
        """
        self._workouts = []
        try:
            raw = self.storage.get_item(self.key)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read stored workouts: {type(e).__name__}: {e}")
            return HydrationResult()
        if raw is None:
            logger.debug("No stored workouts found")
            return HydrationResult()

        try:
            entries = json.loads(raw)
        except (ValueError, RecursionError) as e:
            logger.warning(f"Stored workouts are not valid JSON, starting empty: {e}")
            return HydrationResult()
        if not isinstance(entries, list):
            logger.warning(
                f"Stored workouts are a {type(entries).__name__}, not a list; starting empty"
            )
            return HydrationResult()

        result = HydrationResult()
        for index, entry in enumerate(entries):
            try:
                workout = workout_adapter.validate_python(entry)
            except ValidationError as e:
                logger.warning(
                    f"Dropping invalid stored workout at index {index}: {e.error_count()} errors"
                )
                logger.debug(f"Problematic workout data: {entry}")
                result.rejected += 1
                continue
            self._workouts.append(workout)
            result.loaded += 1

        logger.info(
            f"Loaded {result.loaded} stored workouts (rejected {result.rejected})"
        )
        return result

    def reset(self) -> None:
        """Remove the persisted snapshot and clear the in-memory workouts.

        The in-memory workouts are only cleared once storage has been cleared.

        Raises:
            PersistenceError: If the snapshot cannot be removed. Nothing is cleared.
        """
        try:
            self.storage.remove_item(self.key)
        except (OSError, ValueError) as e:
            raise PersistenceError(f"Could not clear stored workouts: {e}") from e
        self._workouts = []
        logger.info("Cleared all workouts")
