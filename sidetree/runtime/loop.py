"""Main UI loop: draw, wait for one event, dispatch, repeat until quit."""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable

from ..input import KeyEvent, MouseEvent
from .events import EventPump, Tick
from .executor import App
from .terminal import TerminalController

logger = logging.getLogger(__name__)


def dispatch_event(app: App, event: KeyEvent | MouseEvent | Tick) -> None:
    if isinstance(event, Tick):
        app.tick()
    elif isinstance(event, MouseEvent):
        app.on_mouse(event)
    elif isinstance(event, KeyEvent):
        app.on_key(event)


def run_main_loop(
    *,
    app: App,
    terminal: TerminalController,
    pump: EventPump,
    draw: Callable[[App, int, int], None],
) -> None:
    """Run until ``app.exit`` is set; the terminal is restored on any exit."""
    with terminal.raw_mode():
        pump.start()
        try:
            while not app.exit:
                term = shutil.get_terminal_size((80, 24))
                draw(app, term.columns, term.lines)
                event = pump.next_event()
                if event is None:
                    continue
                dispatch_event(app, event)
                # Coalesce bursts (wheel scrolling, pastes) into one redraw.
                for pending in pump.drain():
                    if app.exit:
                        break
                    dispatch_event(app, pending)
        finally:
            pump.stop()
    logger.debug("main loop finished")


__all__ = ["dispatch_event", "run_main_loop"]
