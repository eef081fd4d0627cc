"""Main interactive event loop for the terminal UI.

Polls terminal size and keyboard, turns both into events on the shared
queue, then drains the queue in arrival order into the controller. Loader
threads and debounce timers post to the same queue, so every state change
happens on this thread.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from queue import Empty, Queue

from .controller import FuzzfishController
from .events import Event, KeyEvent, ResizeEvent

logger = logging.getLogger(__name__)

KEY_POLL_TIMEOUT_MS = 30


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected I/O used by ``run_main_loop``."""

    terminal_size: Callable[[], tuple[int, int]]
    read_key: Callable[[int], str]
    render: Callable[[], None]


def drain_events(controller: FuzzfishController, events: Queue[Event]) -> int:
    """Apply queued events until the queue is empty or the controller quits."""
    handled = 0
    while not controller.state.quitting:
        try:
            event = events.get_nowait()
        except Empty:
            break
        controller.handle_event(event)
        handled += 1
    return handled


def run_main_loop(
    controller: FuzzfishController,
    events: Queue[Event],
    callbacks: RuntimeLoopCallbacks,
    poll_timeout_ms: int = KEY_POLL_TIMEOUT_MS,
) -> None:
    """Run until the controller enters the quitting phase.

    The caller is responsible for raw mode; this function only moves events.
    """
    state = controller.state
    last_size: tuple[int, int] | None = None
    while not state.quitting:
        size = callbacks.terminal_size()
        if size != last_size:
            last_size = size
            events.put(ResizeEvent(columns=size[0], rows=size[1]))

        drain_events(controller, events)
        if state.quitting:
            break

        if state.dirty:
            callbacks.render()
            state.dirty = False

        try:
            key = callbacks.read_key(poll_timeout_ms)
        except KeyboardInterrupt:
            key = "CTRL_C"
        if key:
            events.put(KeyEvent(key=key))
    logger.debug("main loop finished with choice %r", state.choice)
