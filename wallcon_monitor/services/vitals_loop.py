# wallcon_monitor/services/vitals_loop.py
"""Live-refresh display of the wall connector vitals.

The loop cycles FETCHING -> RENDERING -> WAITING until the user presses
Esc or Ctrl+C. The terminal is driven through :class:`TerminalScreen`,
which keeps it in raw mode only for the lifetime of the ``with`` block.
"""

from __future__ import annotations

import curses
import time
from datetime import datetime
from enum import Enum
from typing import Callable, Optional, Sequence

from wallcon_monitor.models.vitals import Vitals
from wallcon_monitor.services.output_formatter import format_vitals
from wallcon_monitor.services.wall_connector_client import WallConnectorError

KEY_ESC = 27
KEY_CTRL_C = 3      # delivered as a key, not SIGINT, while in raw mode
EXIT_KEYS = frozenset({KEY_ESC, KEY_CTRL_C})


class LoopState(Enum):
    FETCHING = "fetching"
    RENDERING = "rendering"
    WAITING = "waiting"
    TERMINATED = "terminated"


class TerminalScreen:
    """Raw-mode curses session used by the refresh loop."""

    ESC_DELAY_MS = 25

    def __init__(self):
        self.stdscr = None

    def __enter__(self) -> "TerminalScreen":
        self.stdscr = curses.initscr()
        try:
            curses.noecho()
            curses.raw()
            self.stdscr.keypad(True)
            curses.set_escdelay(self.ESC_DELAY_MS)
        except curses.error:
            self._restore()
            raise
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.stdscr.erase()
            self.stdscr.refresh()
        finally:
            self._restore()

    def _restore(self) -> None:
        self.stdscr.keypad(False)
        curses.noraw()
        curses.echo()
        curses.endwin()

    def draw(self, lines: Sequence[str]) -> None:
        self.stdscr.erase()
        height, width = self.stdscr.getmaxyx()
        for row, line in enumerate(lines[:height]):
            # writing the bottom-right cell raises in curses
            self.stdscr.addnstr(row, 0, line, max(width - 1, 0))
        self.stdscr.refresh()

    def wait_key(self, timeout: float) -> Optional[int]:
        """Block up to ``timeout`` seconds for a key press; None on timeout."""
        self.stdscr.timeout(max(int(timeout * 1000), 0))
        key = self.stdscr.getch()
        return None if key == -1 else key


class VitalsRefreshLoop:
    def __init__(
        self,
        fetch: Callable[[], Vitals],
        screen,
        delay: float,
        log,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.fetch = fetch
        self.screen = screen
        self.delay = delay
        self.log = log
        self.clock = clock

    # ------------------------------------------------------------------
    def hint_line(self, now: Optional[datetime] = None) -> str:
        now = now or datetime.now()
        return (
            f"Updated {now:%H:%M:%S}, refreshing every {self.delay:g}s. "
            "Press Esc or Ctrl+C to exit."
        )

    def _fetch_lines(self) -> list[str]:
        try:
            return format_vitals(self.fetch())
        except WallConnectorError as exc:
            self.log.debug("Vitals refresh failed: %s", exc)
            return [f"Error fetching vitals: {exc}"]

    def _wait(self) -> LoopState:
        deadline = self.clock() + self.delay
        while True:
            remaining = deadline - self.clock()
            if remaining <= 0:
                return LoopState.FETCHING
            key = self.screen.wait_key(remaining)
            if key is None:
                return LoopState.FETCHING
            if key in EXIT_KEYS:
                return LoopState.TERMINATED
            self.log.debug("Ignoring key %r; %.1fs left in refresh window", key, remaining)

    # ------------------------------------------------------------------
    def run(self) -> int:
        """Refresh until the user exits; returns the number of screens drawn."""
        state = LoopState.FETCHING
        lines: list[str] = []
        drawn = 0
        while state is not LoopState.TERMINATED:
            if state is LoopState.FETCHING:
                lines = self._fetch_lines()
                state = LoopState.RENDERING
            elif state is LoopState.RENDERING:
                self.screen.draw(lines + ["", self.hint_line()])
                drawn += 1
                state = LoopState.WAITING
            else:
                state = self._wait()
        return drawn


def run_vitals_loop(fetch: Callable[[], Vitals], delay: float, log) -> int:
    with TerminalScreen() as screen:
        return VitalsRefreshLoop(fetch, screen, delay, log).run()
