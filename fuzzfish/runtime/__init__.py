"""Event-driven runtime: state, controller, background workers, and loop."""

from .controller import ControllerCallbacks, FuzzfishController, delete_last_word
from .events import Event, FilterTickEvent, KeyEvent, LoadedEvent, ResizeEvent
from .loader import BackgroundLoader, FilterDebouncer
from .loop import RuntimeLoopCallbacks, drain_events, run_main_loop
from .state import AppState, Phase


def run_finder(*args, **kwargs):
    """Lazily import the session entrypoint to avoid package-import cycles."""
    from .app import run_finder as _run_finder

    return _run_finder(*args, **kwargs)


__all__ = [
    "AppState",
    "BackgroundLoader",
    "ControllerCallbacks",
    "Event",
    "FilterDebouncer",
    "FilterTickEvent",
    "FuzzfishController",
    "KeyEvent",
    "LoadedEvent",
    "Phase",
    "ResizeEvent",
    "RuntimeLoopCallbacks",
    "delete_last_word",
    "drain_events",
    "run_finder",
    "run_main_loop",
]
