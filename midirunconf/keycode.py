"""Capturing a single key press from the system's keyboards."""

from __future__ import annotations

import fcntl
import logging
import os
import select
import struct
import threading
import time
from contextlib import ExitStack
from dataclasses import dataclass
from pathlib import Path

log = logging.getLogger(__name__)

INPUT_DIR = "/dev/input"
UDEV_DATA_DIR = "/run/udev/data"

EV_KEY = 1
KEY_A = 30
_EV_MAX = 0x1F
_KEY_MAX = 0x2FF

EVENT_FORMAT = "llHHi"
EVENT_SIZE = struct.calcsize(EVENT_FORMAT)


class KeyCaptureError(Exception):
    """Raised when no keyboard can be listened on."""


@dataclass(frozen=True)
class InputEvent:
    """One kernel input event."""

    seconds: int
    microseconds: int
    type: int
    code: int
    value: int


def parse_udev_properties(text: str) -> dict[str, str]:
    """Extract the E: properties of a udev database record."""
    properties = {}
    for line in text.splitlines():
        if line.startswith("E:") and "=" in line:
            key, _, value = line[2:].partition("=")
            properties[key] = value
    return properties


def is_usable_keyboard(properties) -> bool:
    """Tell whether udev properties describe a keyboard worth listening on."""
    if properties.get("ID_INPUT_KEYBOARD") != "1":
        return False
    if properties.get("ID_INPUT_MOUSE") == "1":
        return False
    return "Receiver" not in properties.get("ID_MODEL", "")


def decode_event(data: bytes) -> InputEvent:
    """Decode one raw input event."""
    if len(data) != EVENT_SIZE:
        raise ValueError(f"input event must be {EVENT_SIZE} bytes, got {len(data)}")
    return InputEvent(*struct.unpack(EVENT_FORMAT, data))


def _ioc_read(number: int, size: int) -> int:
    return (2 << 30) | (size << 16) | (ord("E") << 8) | number


def _has_bit(buffer: bytes, bit: int) -> bool:
    return bool(buffer[bit // 8] & (1 << (bit % 8)))


def _query(fd: int, number: int, size: int) -> bytearray:
    buffer = bytearray(size)
    fcntl.ioctl(fd, _ioc_read(number, size), buffer, True)
    return buffer


def _probe(path: Path) -> str | None:
    """Return the device name if it reports the A key, else None."""
    try:
        fd = os.open(path, os.O_RDONLY | os.O_NONBLOCK)
    except OSError:
        return None
    try:
        types = _query(fd, 0x20, _EV_MAX // 8 + 1)
        if not _has_bit(types, EV_KEY):
            return None
        keys = _query(fd, 0x20 + EV_KEY, _KEY_MAX // 8 + 1)
        if not _has_bit(keys, KEY_A):
            return None
        name = _query(fd, 0x06, 256)
        return bytes(name).split(b"\0", 1)[0].decode(errors="replace")
    except OSError:
        return None
    finally:
        os.close(fd)


def _device_properties(path: Path, udev_dir: Path) -> dict[str, str] | None:
    try:
        rdev = os.stat(path).st_rdev
        record = udev_dir / f"c{os.major(rdev)}:{os.minor(rdev)}"
        return parse_udev_properties(record.read_text(errors="replace"))
    except OSError:
        return None


def find_keyboards(input_dir=INPUT_DIR, udev_dir=UDEV_DATA_DIR) -> list[Path]:
    """List the event devices that are real keyboards with an A key."""
    try:
        entries = sorted(Path(input_dir).iterdir())
    except OSError as exc:
        raise KeyCaptureError(f"cannot read {input_dir}: {exc}") from exc

    keyboards = []
    for path in entries:
        if "event" not in path.name:
            continue
        properties = _device_properties(path, Path(udev_dir))
        if properties is None or not is_usable_keyboard(properties):
            continue
        name = _probe(path)
        if name is None:
            continue
        log.info("Listening on: %s (%s)", name, path)
        keyboards.append(path)
    return keyboards


def _read_key_press(fd: int) -> int | None:
    """Drain pending events from fd and return the first pressed key code."""
    while True:
        try:
            data = os.read(fd, EVENT_SIZE * 64)
        except BlockingIOError:
            return None
        if not data:
            return None
        whole = data[: len(data) - len(data) % EVENT_SIZE]
        for fields in struct.iter_unpack(EVENT_FORMAT, whole):
            event = InputEvent(*fields)
            if event.type == EV_KEY and event.value == 1:
                log.info("Key code: %d", event.code)
                return event.code


def get_key(
    stop_event: threading.Event | None = None,
    input_dir=INPUT_DIR,
    udev_dir=UDEV_DATA_DIR,
) -> int | None:
    """Wait for a key press on any keyboard and return its code.

    Returns None if stop_event is set before a key is pressed.
    """
    keyboards = find_keyboards(input_dir, udev_dir)
    if not keyboards:
        raise KeyCaptureError("No keyboard devices found.")

    with ExitStack() as stack:
        poller = select.poll()
        opened = 0
        for path in keyboards:
            try:
                fd = os.open(path, os.O_RDONLY | os.O_NONBLOCK)
            except OSError:
                continue
            stack.callback(os.close, fd)
            poller.register(fd, select.POLLIN)
            opened += 1
        if not opened:
            raise KeyCaptureError("No keyboard devices could be opened.")

        while stop_event is None or not stop_event.is_set():
            for fd, revents in poller.poll(50):
                if revents & select.POLLIN:
                    code = _read_key_press(fd)
                    if code is not None:
                        return code
            time.sleep(0.001)
    return None