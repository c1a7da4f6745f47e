"""Overlay window showing recent key combinations with fading styles."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from keyshow.display import KEY_DISPLAY_DURATION, DisplayedKey, KeyDisplay, ModifierTracker
from keyshow.keys import KeyEvent

log = logging.getLogger(__name__)

Color = tuple[int, int, int, int]

WHITE: Color = (255, 255, 255, 255)
GLOW_COLOR: Color = (70, 130, 255, 150)
STROKE_WIDTH = 1.5
GLOW_WIDTH = 2.5
GLOW_SECONDS = 0.5

_FRAME_INTERVAL = 0.1
_BACKGROUND = (0, 0, 0)
_MARGIN = 2
_SPACING_X = 5
_SPACING_Y = 2
_PAD_X = 2
_PAD_Y = 1
_MIN_WIDTH = 32
_MIN_HEIGHT = 24
_GLOW_EXPAND = 3
_WINDOW_GEOMETRY = "640x56"


@dataclass(frozen=True)
class KeyStyle:
    """How one shown key is drawn."""

    background: Color
    text_color: Color
    stroke: Color
    font_size: float
    recent: bool
    glow: bool


def age_factor(age: float, duration: float = KEY_DISPLAY_DURATION) -> float:
    """Fade factor from 1 for a new key down to 0 at the display duration."""
    return max(1.0 - age / duration, 0.0)


def _alpha(scale: float, factor: float) -> int:
    return max(0, min(255, int(scale * factor)))


def _is_single_glyph(text: str) -> bool:
    return len(text.encode()) == 1 and text.isalnum()


def key_style(index: int, count: int, age: float, text: str) -> KeyStyle:
    """Style of the key at a position among ``count`` keys, ``age`` seconds old."""
    factor = age_factor(age)
    recent = index == count - 1
    if recent:
        background = (70, 130, 200, _alpha(220.0, factor))
        text_color = WHITE
        size = 16.0
    else:
        background = (50, 90, 150, _alpha(160.0, factor))
        text_color = (220, 220, 220, _alpha(200.0, factor))
        size = 13.0
    font_size = size + 2.0 if _is_single_glyph(text) else size - 2.0
    return KeyStyle(
        background=background,
        text_color=text_color,
        stroke=(255, 255, 255, _alpha(120.0, factor)),
        font_size=font_size,
        recent=recent,
        glow=recent and age < GLOW_SECONDS,
    )


def _blend(color: Color, background: tuple[int, int, int] = _BACKGROUND) -> str:
    opacity = color[3] / 255
    channels = (
        round(value * opacity + base * (1 - opacity))
        for value, base in zip(color[:3], background)
    )
    return "#" + "".join(f"{channel:02x}" for channel in channels)


class OverlayState:
    """Keys shown in the overlay together with the held modifiers."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self.display = KeyDisplay(clock=clock)
        self.modifiers = ModifierTracker()

    def handle(self, event: KeyEvent) -> None:
        """Apply one event: track modifiers, show pressed keys with them."""
        log.info("Received key event: %s", event)
        if event.is_modifier:
            self.modifiers.update(event.key, event.pressed)
        elif event.pressed:
            self.display.add(self.modifiers.combine(event.key))

    def handle_batch(self, events: Iterable[KeyEvent]) -> None:
        """Apply one frame's events: modifier changes first, then key presses."""
        events = list(events)
        for event in events:
            log.info("Received key event: %s", event)
            if event.is_modifier:
                self.modifiers.update(event.key, event.pressed)
        for event in events:
            if not event.is_modifier and event.pressed:
                self.display.add(self.modifiers.combine(event.key))

    def tick(self) -> bool:
        """Drop stale keys; returns whether anything was cleared."""
        cleared = self.display.cleanup()
        if cleared:
            log.info("Cleared old keys from overlay display")
        return cleared

    def styled_keys(self) -> list[tuple[DisplayedKey, KeyStyle]]:
        """Every shown key, oldest first, with the style to draw it in."""
        now = self.display.clock()
        count = len(self.display)
        return [
            (key, key_style(index, count, now - key.timestamp, key.text))
            for index, key in enumerate(self.display)
        ]


class GuiRenderer:
    """Undecorated always-on-top window that draws the overlay state."""

    def __init__(self) -> None:
        self.state = OverlayState()

    async def run(self, queue: asyncio.Queue) -> None:
        """Show keys from the queue until the window is closed."""
        import tkinter
        import tkinter.font

        log.info("Starting overlay window")
        try:
            root = tkinter.Tk()
        except tkinter.TclError as exc:
            raise RuntimeError(f"cannot open overlay window: {exc}") from exc

        closed = asyncio.Event()

        background = _blend((*_BACKGROUND, 255))
        root.title("keyshow")
        root.geometry(_WINDOW_GEOMETRY)
        root.configure(bg=background)
        root.protocol("WM_DELETE_WINDOW", closed.set)
        root.overrideredirect(True)
        for option, value in (("-topmost", True), ("-alpha", 0.85)):
            try:
                root.attributes(option, value)
            except tkinter.TclError:
                log.debug("Window attribute %s not supported", option)
        root.withdraw()
        canvas = tkinter.Canvas(root, bg=background, highlightthickness=0)
        canvas.pack(fill="both", expand=True)
        fonts: dict[int, tkinter.font.Font] = {}

        def font_for(size: float) -> tkinter.font.Font:
            pixels = round(size)
            if pixels not in fonts:
                fonts[pixels] = tkinter.font.Font(
                    root=root, family="TkDefaultFont", size=-pixels, weight="bold"
                )
            return fonts[pixels]

        shown = False
        try:
            while not closed.is_set():
                events = []
                while True:
                    try:
                        events.append(queue.get_nowait())
                    except asyncio.QueueEmpty:
                        break
                self.state.handle_batch(events)
                if len(self.state.display) and not shown:
                    root.deiconify()
                    shown = True
                self.state.tick()
                self._draw(canvas, font_for)
                root.update()
                await asyncio.sleep(_FRAME_INTERVAL)
        except tkinter.TclError:
            log.info("Overlay window closed")
        finally:
            try:
                root.destroy()
            except tkinter.TclError:
                pass

    def _draw(self, canvas, font_for) -> None:
        canvas.delete("all")
        width = max(canvas.winfo_width(), 1)
        x = y = _MARGIN
        row_height = 0
        for key, style in self.state.styled_keys():
            font = font_for(style.font_size)
            box_width = max(font.measure(key.text) + 2 * _PAD_X, _MIN_WIDTH)
            box_height = max(font.metrics("linespace") + 2 * _PAD_Y, _MIN_HEIGHT)
            if x > _MARGIN and x + box_width > width - _MARGIN:
                x = _MARGIN
                y += row_height + _SPACING_Y
                row_height = 0
            canvas.create_rectangle(
                x,
                y,
                x + box_width,
                y + box_height,
                fill=_blend(style.background),
                outline=_blend(style.stroke),
                width=STROKE_WIDTH,
            )
            canvas.create_text(
                x + box_width / 2,
                y + box_height / 2,
                text=key.text,
                fill=_blend(style.text_color),
                font=font,
            )
            if style.glow:
                canvas.create_rectangle(
                    x - _GLOW_EXPAND,
                    y - _GLOW_EXPAND,
                    x + box_width + _GLOW_EXPAND,
                    y + box_height + _GLOW_EXPAND,
                    outline=_blend(GLOW_COLOR),
                    width=GLOW_WIDTH,
                )
            x += box_width + _SPACING_X
            row_height = max(row_height, box_height)