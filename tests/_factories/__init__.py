from .workout import RunningFactory, CyclingFactory

__all__ = [
    "RunningFactory",
    "CyclingFactory",
]
