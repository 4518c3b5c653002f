"""Routes for recording, listing, and clearing workouts."""

import logging

from fastapi import APIRouter, Depends, Form, HTTPException, Response, status

from mapty.models import Workout, WorkoutValidationError, PersistenceError
from mapty.render import marker_view, list_item_view
from mapty.app.dependencies import session_controller, view_collector
from mapty.app.models import (
    MapClickRequest,
    WorkoutViewsResponse,
    CreateWorkoutResponse,
    ResetResponse,
)
from mapty.app.session import SessionController, MapFocus

logger = logging.getLogger(__name__)

router = APIRouter(tags=["workouts"])


@router.get("/workouts", response_model=list[Workout])
def read_workouts(
    controller: SessionController = Depends(session_controller),
) -> list[Workout]:
    """Get all workouts in the order they were recorded."""
    return list(controller.store.workouts)


@router.get("/workouts/views", response_model=WorkoutViewsResponse)
def read_workout_views(
    controller: SessionController = Depends(session_controller),
) -> WorkoutViewsResponse:
    """Get the map markers and list entries for every workout."""
    collector = view_collector(controller)
    return WorkoutViewsResponse(markers=collector.markers, items=collector.items)


@router.get("/workouts/{workout_id}", response_model=Workout)
def read_workout(
    workout_id: str,
    controller: SessionController = Depends(session_controller),
) -> Workout:
    workout = controller.store.find_by_id(workout_id)
    if workout is None:
        raise HTTPException(
            status_code=404, detail=f"Workout with ID '{workout_id}' not found"
        )
    return workout


@router.get("/workouts/{workout_id}/focus", response_model=MapFocus)
def focus_workout(
    workout_id: str,
    controller: SessionController = Depends(session_controller),
) -> MapFocus:
    """Get the map centre and zoom level that show a workout's marker."""
    focus = controller.focus_workout(workout_id)
    if focus is None:
        raise HTTPException(
            status_code=404, detail=f"Workout with ID '{workout_id}' not found"
        )
    return focus


@router.post("/map/click", status_code=status.HTTP_204_NO_CONTENT)
def click_map(
    request: MapClickRequest,
    controller: SessionController = Depends(session_controller),
) -> Response:
    """Record where the user clicked; the next workout submitted is placed there."""
    controller.handle_map_click(request.lat, request.lng)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/workouts",
    response_model=CreateWorkoutResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_workout(
    type: str = Form(...),
    distance: str = Form(""),
    duration: str = Form(""),
    cadence: str = Form(""),
    elevation: str = Form(""),
    controller: SessionController = Depends(session_controller),
) -> CreateWorkoutResponse:
    """Record a workout from the form at the last clicked map position.

    All numeric fields arrive as the raw strings typed into the form.
    """
    try:
        result = controller.submit_workout(
            type=type,
            distance=distance,
            duration=duration,
            cadence=cadence,
            elevation=elevation,
        )
    except WorkoutValidationError as e:
        raise HTTPException(
            status_code=422,
            detail={"message": str(e), "fields": e.fields},
        )

    warning = None
    if not result.persisted:
        warning = "Workout recorded for this session only; it could not be saved"
    return CreateWorkoutResponse(
        workout=result.workout,
        marker=marker_view(result.workout),
        item=list_item_view(result.workout),
        persisted=result.persisted,
        warning=warning,
    )


@router.delete("/workouts", response_model=ResetResponse)
def reset_workouts(
    controller: SessionController = Depends(session_controller),
) -> ResetResponse:
    """Delete every workout and tell the client to reload from an empty state."""
    try:
        reload = controller.reset()
    except PersistenceError as e:
        logger.error(f"Failed to reset workouts: {e}")
        raise HTTPException(status_code=503, detail=str(e))
    return ResetResponse(reload=reload)
