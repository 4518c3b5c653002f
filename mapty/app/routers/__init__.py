from .workouts import router as workouts_router

__all__ = [
    "workouts_router",
]
