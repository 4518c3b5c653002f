"""Errors raised by the workout model and the workout store."""

from typing import Sequence


class WorkoutValidationError(ValueError):
    """Raised when workout input fails validation; nothing is constructed.

    `fields` lists the offending inputs by their persisted names
    (e.g. "distance", "elevationGain").
    """

    def __init__(self, fields: Sequence[str], message: str | None = None):
        self.fields = list(fields)
        if message is None:
            message = (
                "Inputs have to be positive numbers "
                f"(invalid: {', '.join(self.fields)})"
            )
        super().__init__(message)


class PersistenceError(Exception):
    """Raised when the workout snapshot cannot be written to or removed from storage.

    Non-fatal: the in-memory workouts stay authoritative for the session.
    """
