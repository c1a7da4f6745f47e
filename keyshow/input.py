"""Discovery of keyboard devices and reading of their key events."""

from __future__ import annotations

import asyncio
import logging
import os
import struct
from pathlib import Path

from keyshow.keys import KEY_A, KEY_ENTER, KEY_SPACE, KeyEvent, make_key_event

log = logging.getLogger(__name__)

EV_KEY = 1
_EVENT = struct.Struct("@llHHi")
_EVENT_SIZE = _EVENT.size
_KEY_MAX = 0x2FF
_READ_BATCH = 64
_RETRY_DELAY = 0.1


def _ioc_read(number: int, size: int) -> int:
    return (2 << 30) | (size << 16) | (ord("E") << 8) | number


def decode_events(data: bytes) -> list[KeyEvent]:
    """Decode raw input-event records, keeping only key events."""
    if len(data) % _EVENT_SIZE:
        raise ValueError(
            f"input data of {len(data)} bytes is not a whole number of events"
        )
    return [
        make_key_event(code, value)
        for _sec, _usec, kind, code, value in _EVENT.iter_unpack(data)
        if kind == EV_KEY
    ]


def supports_keyboard_keys(bitmask: int) -> bool:
    """Tell whether a key capability bitmask has the keys of a keyboard."""
    return all(bitmask >> code & 1 for code in (KEY_A, KEY_ENTER, KEY_SPACE))


def _device_name(fd: int) -> str:
    import fcntl

    buffer = bytearray(256)
    try:
        fcntl.ioctl(fd, _ioc_read(0x06, len(buffer)), buffer, True)
    except OSError:
        return "Unknown"
    return buffer.split(b"\0", 1)[0].decode(errors="replace") or "Unknown"


def is_keyboard_device(path: str | os.PathLike[str]) -> bool:
    """Open an event device and check that it reports keyboard keys."""
    import fcntl

    try:
        fd = os.open(path, os.O_RDONLY | os.O_NONBLOCK)
    except OSError as exc:
        log.debug("Could not open device %s: %s", path, exc)
        return False
    try:
        buffer = bytearray(_KEY_MAX // 8 + 1)
        try:
            fcntl.ioctl(fd, _ioc_read(0x20 + EV_KEY, len(buffer)), buffer, True)
        except OSError as exc:
            log.debug("Could not query keys of %s: %s", path, exc)
            return False
        if not supports_keyboard_keys(int.from_bytes(buffer, "little")):
            return False
        log.info("Found keyboard device: %s (%s)", _device_name(fd), path)
        return True
    finally:
        os.close(fd)


async def _wait_readable(fd: int) -> None:
    loop = asyncio.get_running_loop()
    ready = loop.create_future()

    def wake() -> None:
        if not ready.done():
            ready.set_result(None)

    try:
        loop.add_reader(fd, wake)
    except (PermissionError, NotImplementedError, ValueError):
        # Regular files cannot be polled; they are always readable.
        return
    try:
        await ready
    finally:
        loop.remove_reader(fd)


async def read_device(path: str | os.PathLike[str], queue: asyncio.Queue) -> None:
    """Read key events from one device into the queue until it ends."""
    log.info("Starting to monitor device: %s", path)
    fd = os.open(path, os.O_RDONLY | os.O_NONBLOCK)
    try:
        pending = b""
        while True:
            await _wait_readable(fd)
            try:
                data = os.read(fd, _EVENT_SIZE * _READ_BATCH)
            except BlockingIOError:
                continue
            except OSError as exc:
                log.error("Error reading events from %s: %s", path, exc)
                await asyncio.sleep(_RETRY_DELAY)
                continue
            if not data:
                return
            pending += data
            usable = len(pending) - len(pending) % _EVENT_SIZE
            for event in decode_events(pending[:usable]):
                log.debug("Key event: %s", event)
                queue.put_nowait(event)
            pending = pending[usable:]
    finally:
        os.close(fd)


class InputHandler:
    """Watches every keyboard device and feeds its key events to a queue."""

    input_dir = Path("/dev/input")

    def __init__(self, queue: asyncio.Queue) -> None:
        self.queue = queue

    async def find_keyboard_devices(self) -> list[str]:
        """Return the event devices under the input directory that are keyboards."""
        directory = Path(self.input_dir)
        if not directory.exists():
            return []
        entries = await asyncio.to_thread(lambda: sorted(directory.iterdir()))
        return [
            str(entry)
            for entry in entries
            if entry.name.startswith("event") and is_keyboard_device(entry)
        ]

    async def start(self) -> None:
        """Read all keyboards until every one of them stops."""
        log.info("Starting input handler")
        devices = await self.find_keyboard_devices()
        if not devices:
            log.warning("No keyboard devices found")
            return
        log.info("Found %d keyboard devices", len(devices))
        results = await asyncio.gather(
            *(read_device(path, self.queue) for path in devices),
            return_exceptions=True,
        )
        for path, result in zip(devices, results):
            if isinstance(result, BaseException):
                log.error("Error handling device %s: %s", path, result)