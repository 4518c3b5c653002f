from .views import (
    WORKOUT_ICONS,
    WorkoutMarker,
    WorkoutDetail,
    WorkoutListItem,
    WorkoutRenderer,
    ViewCollector,
    marker_view,
    list_item_view,
)

__all__ = [
    "WORKOUT_ICONS",
    "WorkoutMarker",
    "WorkoutDetail",
    "WorkoutListItem",
    "WorkoutRenderer",
    "ViewCollector",
    "marker_view",
    "list_item_view",
]
