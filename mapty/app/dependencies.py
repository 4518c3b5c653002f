import logging

from mapty.db.storage import get_storage
from mapty.db.workouts import WorkoutStore
from mapty.render import ViewCollector
from .env_loader import get_map_zoom_level
from .session import AppContext, SessionController

logger = logging.getLogger(__name__)

# The one process-wide controller, owned by the HTTP host. Everything else
# receives its state through AppContext; tests override `session_controller`.
_controller: SessionController | None = None


def build_session_controller() -> SessionController:
    """Create a controller over the configured storage and load stored workouts."""
    context = AppContext(
        store=WorkoutStore(get_storage()),
        renderers=[ViewCollector()],
        map_zoom_level=get_map_zoom_level(),
    )
    controller = SessionController(context)
    result = controller.load()
    logger.info(
        f"Session started with {result.loaded} workouts ({result.rejected} rejected)"
    )
    return controller


def session_controller() -> SessionController:
    """Get the process-wide session controller, creating it on first use."""
    global _controller
    if _controller is None:
        _controller = build_session_controller()
    return _controller


def view_collector(controller: SessionController) -> ViewCollector:
    """Get the view collector attached to a controller."""
    for renderer in controller.context.renderers:
        if isinstance(renderer, ViewCollector):
            return renderer
    raise LookupError("Session controller has no view collector attached")
