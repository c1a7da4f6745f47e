"""State of the recently pressed keys and the held modifiers."""

from __future__ import annotations

import logging
import time
from collections import deque
from collections.abc import Callable, Iterator
from dataclasses import dataclass

log = logging.getLogger(__name__)

MAX_DISPLAYED_KEYS = 10
KEY_DISPLAY_DURATION = 3.0


@dataclass(frozen=True)
class DisplayedKey:
    """A key label and the clock time it was shown at."""

    text: str
    timestamp: float


class KeyDisplay:
    """A bounded list of recent keys that empties after a quiet period."""

    def __init__(
        self,
        max_keys: int = MAX_DISPLAYED_KEYS,
        duration: float = KEY_DISPLAY_DURATION,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_keys = max_keys
        self.duration = duration
        self.clock = clock
        self.keys: deque[DisplayedKey] = deque(maxlen=max_keys)
        self.last_key_time: float | None = None

    def __len__(self) -> int:
        return len(self.keys)

    def __iter__(self) -> Iterator[DisplayedKey]:
        return iter(self.keys)

    def add(self, text: str) -> None:
        """Show a key, dropping the oldest ones beyond the limit."""
        log.debug("Adding key display: %s", text)
        now = self.clock()
        self.keys.append(DisplayedKey(text, now))
        self.last_key_time = now

    def cleanup(self) -> bool:
        """Clear every key once the last one is older than the duration.

        Returns whether anything was cleared.
        """
        if not self.keys or self.last_key_time is None:
            return False
        if self.clock() - self.last_key_time > self.duration:
            self.keys.clear()
            self.last_key_time = None
            return True
        return False

    def display_text(self) -> str:
        """The shown keys, oldest first, separated by spaces."""
        return " ".join(key.text for key in self.keys)

    def recent(self, count: int = 5) -> list[str]:
        """The labels of the newest keys, newest first."""
        return [key.text for key in reversed(self.keys)][:count]

    def seconds_since_last(self) -> float | None:
        """Seconds since the last key was added, or None if nothing is shown."""
        if self.last_key_time is None:
            return None
        return self.clock() - self.last_key_time


class ModifierTracker:
    """Keeps the set of held modifiers and prefixes them to key labels."""

    def __init__(self) -> None:
        self._active: set[str] = set()

    @property
    def active(self) -> frozenset[str]:
        return frozenset(self._active)

    def update(self, key: str, pressed: bool) -> None:
        """Record a modifier being pressed or released."""
        if pressed:
            self._active.add(key)
        else:
            self._active.discard(key)

    def combine(self, key: str) -> str:
        """Join the held modifiers, sorted, with the key using '+'."""
        if not self._active:
            return key
        return "+".join([*sorted(self._active), key])