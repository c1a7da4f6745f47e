import pytest

from keyshow.display import DisplayedKey, KeyDisplay, ModifierTracker


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


def test_add_records_timestamp(clock):
    display = KeyDisplay(clock=clock)
    display.add("A")
    assert list(display) == [DisplayedKey("A", 100.0)]
    assert display.last_key_time == 100.0


def test_limit_drops_oldest(clock):
    display = KeyDisplay(max_keys=3, clock=clock)
    for text in ["A", "B", "C", "D", "E"]:
        display.add(text)
    assert len(display) == 3
    assert display.display_text() == "C D E"


def test_default_limit_is_ten(clock):
    display = KeyDisplay(clock=clock)
    for number in range(15):
        display.add(str(number))
    assert len(display) == 10
    assert display.recent(1) == ["14"]


def test_cleanup_empty_returns_false(clock):
    assert KeyDisplay(clock=clock).cleanup() is False


def test_cleanup_within_duration_keeps_keys(clock):
    display = KeyDisplay(duration=3.0, clock=clock)
    display.add("A")
    clock.now += 3.0
    assert display.cleanup() is False
    assert len(display) == 1


def test_cleanup_after_duration_clears(clock):
    display = KeyDisplay(duration=3.0, clock=clock)
    display.add("A")
    display.add("B")
    clock.now += 3.5
    assert display.cleanup() is True
    assert len(display) == 0
    assert display.seconds_since_last() is None
    assert display.cleanup() is False


def test_new_key_extends_display(clock):
    display = KeyDisplay(duration=3.0, clock=clock)
    display.add("A")
    clock.now += 2.0
    display.add("B")
    clock.now += 2.0
    assert display.cleanup() is False
    assert display.display_text() == "A B"


def test_recent_newest_first(clock):
    display = KeyDisplay(clock=clock)
    for text in ["A", "B", "C"]:
        display.add(text)
    assert display.recent(2) == ["C", "B"]
    assert display.recent() == ["C", "B", "A"]


def test_seconds_since_last(clock):
    display = KeyDisplay(clock=clock)
    assert display.seconds_since_last() is None
    display.add("A")
    clock.now += 1.5
    assert display.seconds_since_last() == pytest.approx(1.5)


def test_combine_without_modifiers():
    assert ModifierTracker().combine("A") == "A"


def test_combine_sorts_modifiers():
    tracker = ModifierTracker()
    tracker.update("SHIFT", True)
    tracker.update("CTRL", True)
    assert tracker.combine("A") == "CTRL+SHIFT+A"


def test_release_removes_modifier():
    tracker = ModifierTracker()
    tracker.update("ALT", True)
    tracker.update("ALT", False)
    tracker.update("META", False)
    assert tracker.active == frozenset()
    assert tracker.combine("TAB") == "TAB"


def test_repeated_press_counts_once():
    tracker = ModifierTracker()
    tracker.update("SHIFT", True)
    tracker.update("SHIFT", True)
    assert tracker.active == frozenset({"SHIFT"})