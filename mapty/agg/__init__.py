from .metrics import compute_pace, compute_speed
from .description import describe, MONTHS

__all__ = [
    "compute_pace",
    "compute_speed",
    "describe",
    "MONTHS",
]
