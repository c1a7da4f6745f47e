import asyncio
import io
import itertools

import pytest

from keyshow.console import ConsoleRenderer
from keyshow.keys import KeyEvent


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


def make_renderer(clock=None):
    queue = asyncio.Queue()
    out = io.StringIO()
    renderer = ConsoleRenderer(queue, out=out, clock=clock or FakeClock())
    return queue, out, renderer


def test_header_clears_screen_and_draws_rule():
    _, out, renderer = make_renderer()
    renderer.header()
    text = out.getvalue()
    assert text.startswith("\x1b[2J\x1b[1;1H")
    assert "Press Ctrl+C to exit\n" in text
    assert text.endswith("=" * 50 + "\n")


def test_render_without_keys():
    _, out, renderer = make_renderer()
    renderer.render()
    text = out.getvalue()
    assert text.startswith("\x1b[6;1H")
    assert text.count("\x1b[K\n") == 5
    assert text.endswith("(no recent keys)\n")


def test_process_pending_shows_only_presses():
    queue, out, renderer = make_renderer()
    queue.put_nowait(KeyEvent("A", True, False))
    queue.put_nowait(KeyEvent("A", False, False))
    queue.put_nowait(KeyEvent("SHIFT", True, True))
    assert renderer.process_pending() == 2
    assert queue.empty()
    assert renderer.display.display_text() == "A SHIFT"
    assert "Keys: A SHIFT\n" in out.getvalue()


def test_process_pending_on_empty_queue_writes_nothing():
    _, out, renderer = make_renderer()
    assert renderer.process_pending() == 0
    assert out.getvalue() == ""


def test_render_lists_newest_five_first():
    queue, out, renderer = make_renderer()
    for label in ["A", "B", "C", "D", "E", "F", "G"]:
        queue.put_nowait(KeyEvent(label, True, False))
    renderer.process_pending()
    out.seek(0)
    out.truncate()
    renderer.render()
    text = out.getvalue()
    assert "  1: G\n" in text
    assert "  5: C\n" in text
    assert "  6:" not in text


def test_render_reports_time_since_last_key():
    clock = FakeClock(10.0)
    queue, out, renderer = make_renderer(clock)
    queue.put_nowait(KeyEvent("Q", True, False))
    renderer.process_pending()
    clock.now = 11.5
    out.seek(0)
    out.truncate()
    renderer.render()
    assert "Time since last key: 1.5s\n" in out.getvalue()


@pytest.mark.asyncio
async def test_run_clears_keys_after_quiet_period():
    ticks = itertools.count(0.0, 1.0)
    queue, out, renderer = make_renderer(lambda: next(ticks))
    queue.put_nowait(KeyEvent("A", True, False))
    with pytest.raises(asyncio.TimeoutError):
        await asyncio.wait_for(renderer.run(), 0.3)
    text = out.getvalue()
    assert text.startswith("\x1b[2J")
    assert "Keys: A\n" in text
    assert text.rfind("(no recent keys)") > text.find("Keys: A")
    assert len(renderer.display) == 0