"""MIDI input port listing and live message monitoring."""

from __future__ import annotations

import threading
import time
from collections.abc import Iterator, Sequence

import mido

NO_DEVICE_MESSAGE = "Please Select a Device!"

_BACKEND_ERRORS = (OSError, ImportError, RuntimeError, ValueError)


class MidiPortError(Exception):
    """Raised when MIDI ports cannot be listed or opened."""


def list_input_ports() -> list[str]:
    """Return the names of the available MIDI input ports."""
    try:
        return list(mido.get_input_names())
    except _BACKEND_ERRORS as exc:
        raise MidiPortError(f"cannot list MIDI inputs: {exc}") from exc


def format_message(data: Sequence[int], stamp: float) -> str:
    """Describe a MIDI message byte by byte, followed by its time stamp."""
    if not data:
        return ""
    parts = "".join(f"Byte {index} = {int(byte)} | " for index, byte in enumerate(data))
    return f"{parts}stamp = {stamp:f}\n\n"


def _read(port, stop_event: threading.Event) -> Iterator[str]:
    last = None
    try:
        while not stop_event.is_set():
            received = False
            for message in port.iter_pending():
                now = time.monotonic()
                stamp = 0.0 if last is None else now - last
                last = now
                text = format_message(message.bytes(), stamp)
                if text:
                    received = True
                    yield text
            if not received:
                time.sleep(0.001)
    finally:
        port.close()


def listen(port_index: int | None, stop_event: threading.Event) -> Iterator[str]:
    """Open an input port and yield a description of each message received.

    The port is checked and opened at once; messages are yielded until
    stop_event is set.
    """
    if port_index is None or port_index < 0:
        raise MidiPortError(NO_DEVICE_MESSAGE)
    names = list_input_ports()
    if port_index >= len(names):
        raise MidiPortError(f"Port {port_index} does not exist!")
    try:
        port = mido.open_input(names[port_index])
    except _BACKEND_ERRORS as exc:
        raise MidiPortError(f"cannot open {names[port_index]}: {exc}") from exc
    return _read(port, stop_event)