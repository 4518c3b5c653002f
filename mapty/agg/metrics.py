def compute_pace(distance: float, duration: float) -> float:
    """Pace in minutes per kilometer.

    The caller guarantees `distance > 0`; no validation happens here.
    """
    return duration / distance


def compute_speed(distance: float, duration: float) -> float:
    """Speed in kilometers per hour, from a distance in km and a duration in minutes."""
    return distance / (duration / 60)
