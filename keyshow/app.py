"""Wiring of input capture and a renderer, and the command entry point."""

from __future__ import annotations

import asyncio
import contextlib
import enum
import logging
import os
import sys
from collections.abc import Sequence

from keyshow.console import ConsoleRenderer
from keyshow.gui import GuiRenderer
from keyshow.input import InputHandler

log = logging.getLogger(__name__)


class RenderMode(enum.Enum):
    """Where pressed keys are shown."""

    CONSOLE = "console"
    GUI = "gui"


def parse_mode(argv: Sequence[str]) -> RenderMode:
    """Pick console mode with ``--console``; the overlay window otherwise."""
    if "--console" in argv:
        log.info("Starting in console mode")
        return RenderMode.CONSOLE
    log.info("Starting in GUI mode (use --console for console output)")
    return RenderMode.GUI


class App:
    """Runs input capture alongside the renderer of the chosen mode."""

    def __init__(self, mode: RenderMode) -> None:
        log.info("Initializing application in %s mode", mode.value)
        self.mode = mode
        self.queue: asyncio.Queue = asyncio.Queue()
        self.input_handler = InputHandler(self.queue)
        self.renderer: ConsoleRenderer | GuiRenderer
        if mode is RenderMode.CONSOLE:
            self.renderer = ConsoleRenderer(self.queue)
        else:
            self.renderer = GuiRenderer()
        self.input_task: asyncio.Task | None = None

    async def _read_input(self) -> None:
        try:
            await self.input_handler.start()
        except Exception as exc:
            log.error("Input handler error: %s", exc)

    async def run(self) -> None:
        """Capture input and render until the renderer finishes."""
        log.info("Starting application")
        self.input_task = asyncio.create_task(self._read_input())
        try:
            if isinstance(self.renderer, ConsoleRenderer):
                await self.renderer.run()
            else:
                await self.renderer.run(self.queue)
        finally:
            self.input_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self.input_task


def main(argv: Sequence[str] | None = None) -> int:
    """Command entry point."""
    logging.basicConfig(level=os.environ.get("KEYSHOW_LOG", "ERROR").upper())
    log.info("Starting keyshow")
    mode = parse_mode(sys.argv[1:] if argv is None else argv)
    try:
        asyncio.run(App(mode).run())
    except KeyboardInterrupt:
        return 0
    except RuntimeError as exc:
        log.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())