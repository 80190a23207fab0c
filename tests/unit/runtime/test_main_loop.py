"""Tests for event production and the draw/dispatch loop."""

from __future__ import annotations

import contextlib
import os
import tempfile
import unittest
from pathlib import Path

from sidetree.input import KeyEvent, MouseEvent, MOUSE_WHEEL_DOWN, char_key
from sidetree.runtime.events import EventPump, Tick
from sidetree.runtime.executor import App
from sidetree.runtime.loop import dispatch_event, run_main_loop


class _FakeTerminal:
    def __init__(self) -> None:
        self.entered = 0
        self.exited = 0

    @contextlib.contextmanager
    def raw_mode(self):
        self.entered += 1
        try:
            yield
        finally:
            self.exited += 1


class _ScriptedPump:
    def __init__(self, batches: list[list[object]]) -> None:
        self.batches = batches
        self.started = False
        self.stopped = False
        self._pending: list[object] = []

    def start(self) -> None:
        self.started = True

    def stop(self) -> None:
        self.stopped = True

    def next_event(self, timeout=None):
        if not self.batches:
            return Tick()
        self._pending = list(self.batches.pop(0))
        return self._pending.pop(0)

    def drain(self) -> list[object]:
        out, self._pending = self._pending, []
        return out


class MainLoopTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name).resolve()
        for name in ("a.txt", "b.txt", "c.txt"):
            (self.root / name).write_text("", encoding="utf-8")
        self.app = App(root=self.root)

    def test_loop_draws_dispatches_and_stops_on_quit(self) -> None:
        terminal = _FakeTerminal()
        pump = _ScriptedPump([[char_key("j")], [char_key("j"), char_key("q"), char_key("k")]])
        frames: list[tuple[int, int, int]] = []

        def draw(app: App, width: int, height: int) -> None:
            frames.append((app.tree.selected_idx, width, height))

        run_main_loop(app=self.app, terminal=terminal, pump=pump, draw=draw)

        self.assertTrue(self.app.exit)
        self.assertEqual([frame[0] for frame in frames], [0, 1])
        # Events queued after quit are not handled.
        self.assertEqual(self.app.tree.selected_idx, 2)
        self.assertTrue(pump.started and pump.stopped)
        self.assertEqual((terminal.entered, terminal.exited), (1, 1))

    def test_terminal_is_restored_when_draw_fails(self) -> None:
        terminal = _FakeTerminal()
        pump = _ScriptedPump([])

        def draw(app: App, width: int, height: int) -> None:
            raise RuntimeError("boom")

        with self.assertRaises(RuntimeError):
            run_main_loop(app=self.app, terminal=terminal, pump=pump, draw=draw)
        self.assertEqual(terminal.exited, 1)
        self.assertTrue(pump.stopped)

    def test_dispatch_routes_each_event_kind(self) -> None:
        dispatch_event(self.app, MouseEvent(MOUSE_WHEEL_DOWN, 1, 1))
        self.assertEqual(self.app.tree.selected_idx, 1)
        dispatch_event(self.app, KeyEvent("up"))
        self.assertEqual(self.app.tree.selected_idx, 0)

        (self.root / "d.txt").write_text("", encoding="utf-8")
        dispatch_event(self.app, Tick())
        self.assertEqual(len(self.app.tree.lines), 4)


class EventPumpTests(unittest.TestCase):
    def test_input_and_ticks_share_one_queue(self) -> None:
        read_fd, write_fd = os.pipe()
        self.addCleanup(os.close, read_fd)
        self.addCleanup(os.close, write_fd)
        pump = EventPump(read_fd, tick_interval=0.01)
        pump.start()
        try:
            os.write(write_fd, b"x")
            seen: list[object] = []
            for _ in range(200):
                event = pump.next_event(timeout=1.0)
                seen.append(event)
                if char_key("x") in seen and Tick() in seen:
                    break
        finally:
            pump.stop()

        self.assertIn(char_key("x"), seen)
        self.assertIn(Tick(), seen)

    def test_next_event_times_out(self) -> None:
        pump = EventPump(0, tick_interval=60)
        self.assertIsNone(pump.next_event(timeout=0.01))
        self.assertEqual(pump.drain(), [])


if __name__ == "__main__":
    unittest.main()
