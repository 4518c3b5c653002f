import json

import pytest

from mapty.app.session import AppContext, SessionController, MapFocus
from mapty.db.storage import InMemoryKeyValueStore
from mapty.db.workouts import WorkoutStore, STORAGE_KEY, HydrationResult
from mapty.models import Running, Cycling, WorkoutValidationError
from mapty.render import ViewCollector


class FailingWriteStorage(InMemoryKeyValueStore):
    def set_item(self, key: str, value: str) -> None:
        raise OSError("quota exceeded")


def _controller(storage=None) -> tuple[SessionController, ViewCollector]:
    collector = ViewCollector()
    context = AppContext(
        store=WorkoutStore(storage or InMemoryKeyValueStore()),
        renderers=[collector],
    )
    return SessionController(context), collector


def test_submit_running_workout_at_clicked_position():
    controller, collector = _controller()
    controller.handle_map_click(40.7, -73.9)

    result = controller.submit_workout("running", "5", "25", cadence="180", elevation="")

    assert result.persisted is True
    assert isinstance(result.workout, Running)
    assert result.workout.coords == (40.7, -73.9)
    assert result.workout.pace == pytest.approx(5.0)
    assert controller.store.workouts == (result.workout,)
    assert [m.workout_id for m in collector.markers] == [result.workout.id]
    # The form is hidden again until the next click.
    assert controller.context.pending_click is None


def test_submit_cycling_uses_elevation_not_cadence():
    controller, _ = _controller()
    controller.handle_map_click(45.0, 7.0)
    result = controller.submit_workout(
        "cycling", "20", "60", cadence="not used", elevation="300"
    )
    assert isinstance(result.workout, Cycling)
    assert result.workout.elevation_gain == 300
    assert result.workout.speed == pytest.approx(20.0)


def test_submit_without_map_click_is_rejected():
    controller, collector = _controller()
    with pytest.raises(WorkoutValidationError) as exc_info:
        controller.submit_workout("running", "5", "25", cadence="180")
    assert exc_info.value.fields == ["coords"]
    assert len(controller.store) == 0
    assert collector.markers == []


def test_invalid_submission_leaves_store_untouched():
    controller, collector = _controller()
    controller.handle_map_click(40.7, -73.9)
    with pytest.raises(WorkoutValidationError) as exc_info:
        controller.submit_workout("running", "-5", "25", cadence="180")
    assert exc_info.value.fields == ["distance"]
    assert len(controller.store) == 0
    assert collector.items == []
    # The click is kept so the user can fix the form.
    assert controller.context.pending_click is not None


def test_failed_save_is_not_fatal():
    controller, collector = _controller(FailingWriteStorage())
    controller.handle_map_click(40.7, -73.9)
    result = controller.submit_workout("running", "5", "25", cadence="180")
    assert result.persisted is False
    assert len(controller.store) == 1
    assert len(collector.markers) == 1


def test_load_renders_stored_workouts_in_order():
    storage = InMemoryKeyValueStore()
    first, _ = _controller(storage)
    first.handle_map_click(40.7, -73.9)
    a = first.submit_workout("running", "5", "25", cadence="180").workout
    first.handle_map_click(40.8, -73.8)
    b = first.submit_workout("cycling", "20", "60", elevation="150").workout

    second, collector = _controller(storage)
    assert second.load() == HydrationResult(loaded=2, rejected=0)
    assert second.store.workouts == (a, b)
    assert [m.workout_id for m in collector.markers] == [a.id, b.id]


def test_load_skips_invalid_stored_workouts():
    storage = InMemoryKeyValueStore()
    storage.set_item(STORAGE_KEY, json.dumps([{"id": "1", "type": "running"}]))
    controller, collector = _controller(storage)
    assert controller.load() == HydrationResult(loaded=0, rejected=1)
    assert collector.markers == []


def test_focus_workout():
    controller, _ = _controller()
    controller.context.map_zoom_level = 15
    controller.handle_map_click(40.7, -73.9)
    workout = controller.submit_workout("running", "5", "25", cadence="180").workout
    assert controller.focus_workout(workout.id) == MapFocus(
        coords=(40.7, -73.9), zoom=15
    )


def test_focus_unknown_workout_returns_none():
    controller, _ = _controller()
    assert controller.focus_workout("missing") is None


def test_reset_clears_everything():
    storage = InMemoryKeyValueStore()
    controller, collector = _controller(storage)
    controller.handle_map_click(40.7, -73.9)
    controller.submit_workout("running", "5", "25", cadence="180")
    controller.handle_map_click(40.8, -73.8)

    assert controller.reset() is True
    assert len(controller.store) == 0
    assert storage.get_item(STORAGE_KEY) is None
    assert collector.markers == []
    assert controller.context.pending_click is None


class UndecodableWriteStorage(InMemoryKeyValueStore):
    def set_item(self, key: str, value: str) -> None:
        raise UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")


def test_decode_failure_on_save_is_not_fatal():
    controller, collector = _controller(UndecodableWriteStorage())
    controller.handle_map_click(40.7, -73.9)
    result = controller.submit_workout("running", "5", "25", cadence="180")
    assert result.persisted is False
    assert len(controller.store) == 1
    assert [m.workout_id for m in collector.markers] == [result.workout.id]
    assert controller.context.pending_click is None
