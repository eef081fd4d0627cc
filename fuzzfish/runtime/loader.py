"""Background workers that feed the controller's event queue.

Provider loads run on daemon threads and post exactly one ``LoadedEvent``
each. Debounce timers post ``FilterTickEvent``. Neither touches
``AppState``; the loop thread is the only consumer.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping, Sequence
from queue import Queue

from ..items import Mode, Record
from .events import Event, FilterTickEvent, LoadedEvent

logger = logging.getLogger(__name__)

ProviderFn = Callable[[], Sequence[Record]]


class BackgroundLoader:
    """Run one provider per mode on a daemon thread; at most one in flight per mode."""

    def __init__(self, providers: Mapping[Mode, ProviderFn], events: Queue[Event]) -> None:
        self._providers = dict(providers)
        self._events = events
        self._lock = threading.Lock()
        self._running: set[Mode] = set()

    def _worker(self, mode: Mode) -> None:
        records: list[Record] = []
        try:
            provider = self._providers.get(mode)
            if provider is None:
                logger.warning("no provider registered for %s", mode.value)
            else:
                records = list(provider())
        except Exception:
            logger.exception("loading %s records failed", mode.value)
            records = []
        finally:
            with self._lock:
                self._running.discard(mode)
        self._events.put(LoadedEvent(mode=mode, records=records))

    def request(self, mode: Mode) -> bool:
        """Start loading ``mode`` unless a load is already running; return whether one started."""
        with self._lock:
            if mode in self._running:
                return False
            self._running.add(mode)

        worker = threading.Thread(
            target=self._worker,
            args=(mode,),
            name=f"fuzzfish-load-{mode.value}",
            daemon=True,
        )
        worker.start()
        return True


class FilterDebouncer:
    """Latest-request-wins ``threading.Timer`` that posts ``FilterTickEvent``."""

    def __init__(self, events: Queue[Event]) -> None:
        self._events = events
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None

    def _fire(self, query: str) -> None:
        self._events.put(FilterTickEvent(query=query))

    def schedule(self, query: str, delay: float) -> None:
        timer = threading.Timer(max(0.0, delay), self._fire, args=(query,))
        timer.daemon = True
        with self._lock:
            previous = self._timer
            self._timer = timer
        if previous is not None:
            previous.cancel()
        timer.start()

    def cancel(self) -> None:
        with self._lock:
            timer = self._timer
            self._timer = None
        if timer is not None:
            timer.cancel()


__all__ = ["BackgroundLoader", "FilterDebouncer", "ProviderFn"]
