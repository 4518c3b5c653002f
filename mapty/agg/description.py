from datetime import datetime

MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def describe(workout_type: str, date: datetime) -> str:
    """
    Build the human-readable label for a workout, e.g. "Running on March 3".

    Uses the calendar day of `date` (in whatever timezone it carries), never the
    current time.
    """
    label = workout_type[:1].upper() + workout_type[1:]
    return f"{label} on {MONTHS[date.month - 1]} {date.day}"
