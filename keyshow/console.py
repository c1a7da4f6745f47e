"""Plain terminal display of the recently pressed keys."""

from __future__ import annotations

import asyncio
import logging
import sys
import time
from collections.abc import Callable
from typing import TextIO

from keyshow.display import KeyDisplay

log = logging.getLogger(__name__)

_CLEAR_SCREEN = "\x1b[2J\x1b[1;1H"
_DISPLAY_START = "\x1b[6;1H"
_CLEAR_LINE = "\x1b[K"
_DISPLAY_LINES = 5
_RECENT_COUNT = 5
_POLL_INTERVAL = 0.016


class ConsoleRenderer:
    """Shows pressed keys in a fixed area of the terminal."""

    def __init__(
        self,
        queue: asyncio.Queue,
        out: TextIO | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.queue = queue
        self.out = out if out is not None else sys.stdout
        self.display = KeyDisplay(clock=clock)

    def header(self) -> None:
        """Clear the screen and print the title lines."""
        self.out.write(_CLEAR_SCREEN)
        self.out.write("keyshow - console display\n")
        self.out.write("Press keys to see them displayed below:\n")
        self.out.write("Press Ctrl+C to exit\n")
        self.out.write("=" * 50 + "\n")
        self.out.flush()

    def process_pending(self) -> int:
        """Take every queued event, showing each press. Returns the number shown."""
        shown = 0
        while True:
            try:
                event = self.queue.get_nowait()
            except asyncio.QueueEmpty:
                return shown
            if event.pressed:
                self.display.add(event.key)
                self.render()
                shown += 1

    def render(self) -> None:
        """Redraw the key area below the header."""
        lines = [_DISPLAY_START, f"{_CLEAR_LINE}\n" * _DISPLAY_LINES, _DISPLAY_START]
        if not len(self.display):
            lines.append("(no recent keys)\n")
        else:
            lines.append(f"Keys: {self.display.display_text()}\n")
            elapsed = self.display.seconds_since_last()
            if elapsed is not None:
                lines.append(f"Time since last key: {elapsed:.1f}s\n")
            lines.extend(
                f"  {number}: {text}\n"
                for number, text in enumerate(self.display.recent(_RECENT_COUNT), 1)
            )
        self.out.write("".join(lines))
        self.out.flush()

    async def run(self) -> None:
        """Show keys from the queue until cancelled."""
        log.info("Starting renderer (console mode)")
        self.header()
        while True:
            self.process_pending()
            if self.display.cleanup():
                self.render()
            await asyncio.sleep(_POLL_INTERVAL)