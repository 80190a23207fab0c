"""Background producers feeding the UI thread one event queue.

An input worker decodes terminal bytes into key/mouse events and a tick
worker emits ``Tick`` at a fixed interval. Only the consumer of ``events``
touches application state.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass
from queue import Empty, Queue

from ..input import KeyEvent, MouseEvent, read_event

TICK_INTERVAL_SECONDS = 0.25
INPUT_POLL_MS = 100


@dataclass(frozen=True)
class Tick:
    """Periodic refresh request."""


Event = KeyEvent | MouseEvent | Tick


class EventPump:
    """Owns the input and tick worker threads and their shared queue."""

    def __init__(
        self,
        stdin_fd: int,
        tick_interval: float = TICK_INTERVAL_SECONDS,
        read: Callable[..., KeyEvent | MouseEvent | None] = read_event,
    ) -> None:
        self.stdin_fd = stdin_fd
        self.tick_interval = tick_interval
        self._read = read
        self.events: Queue[Event] = Queue()
        self._stop = threading.Event()
        self._threads: list[threading.Thread] = []

    def _input_worker(self) -> None:
        while not self._stop.is_set():
            event = self._read(self.stdin_fd, timeout_ms=INPUT_POLL_MS)
            if event is not None:
                self.events.put(event)

    def _tick_worker(self) -> None:
        while not self._stop.wait(self.tick_interval):
            self.events.put(Tick())

    def start(self) -> None:
        for name, target in (("sidetree-input", self._input_worker), ("sidetree-tick", self._tick_worker)):
            worker = threading.Thread(target=target, name=name, daemon=True)
            worker.start()
            self._threads.append(worker)

    def stop(self) -> None:
        self._stop.set()
        for worker in self._threads:
            worker.join(timeout=1.0)
        self._threads.clear()

    def next_event(self, timeout: float | None = None) -> Event | None:
        """Block for the next event; ``None`` when ``timeout`` elapses."""
        try:
            return self.events.get(timeout=timeout)
        except Empty:
            return None

    def drain(self) -> list[Event]:
        out: list[Event] = []
        while True:
            try:
                out.append(self.events.get_nowait())
            except Empty:
                break
        return out


__all__ = ["Tick", "Event", "EventPump", "TICK_INTERVAL_SECONDS"]
