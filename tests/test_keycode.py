import struct
import threading

import pytest

from midirunconf.keycode import (
    EVENT_SIZE,
    InputEvent,
    KeyCaptureError,
    decode_event,
    find_keyboards,
    get_key,
    is_usable_keyboard,
    parse_udev_properties,
)


def test_parse_udev_properties():
    text = "I:12345\nE:ID_INPUT_KEYBOARD=1\nE:ID_MODEL=Board=X\nG:seat\n"
    assert parse_udev_properties(text) == {"ID_INPUT_KEYBOARD": "1", "ID_MODEL": "Board=X"}


@pytest.mark.parametrize(
    "properties, expected",
    [
        ({"ID_INPUT_KEYBOARD": "1"}, True),
        ({"ID_INPUT_KEYBOARD": "1", "ID_MODEL": "Keyboard"}, True),
        ({}, False),
        ({"ID_INPUT_KEYBOARD": "0"}, False),
        ({"ID_INPUT_KEYBOARD": "1", "ID_INPUT_MOUSE": "1"}, False),
        ({"ID_INPUT_KEYBOARD": "1", "ID_MODEL": "USB_Receiver"}, False),
    ],
)
def test_is_usable_keyboard(properties, expected):
    assert is_usable_keyboard(properties) is expected


def test_decode_event_round_trip():
    raw = struct.pack("llHHi", 10, 20, 1, 30, 1)
    assert decode_event(raw) == InputEvent(10, 20, 1, 30, 1)


def test_decode_event_wrong_size():
    with pytest.raises(ValueError):
        decode_event(b"\x00" * (EVENT_SIZE - 1))


def test_find_keyboards_empty_dir(tmp_path):
    assert find_keyboards(tmp_path, tmp_path) == []


def test_find_keyboards_skips_non_devices(tmp_path):
    input_dir = tmp_path / "input"
    udev_dir = tmp_path / "udev"
    input_dir.mkdir()
    udev_dir.mkdir()
    (input_dir / "event0").write_bytes(b"")
    (input_dir / "mouse0").write_bytes(b"")
    (udev_dir / "c0:0").write_text("E:ID_INPUT_KEYBOARD=1\n")
    assert find_keyboards(input_dir, udev_dir) == []


def test_find_keyboards_missing_dir(tmp_path):
    with pytest.raises(KeyCaptureError):
        find_keyboards(tmp_path / "absent", tmp_path)


def test_get_key_without_keyboards(tmp_path):
    with pytest.raises(KeyCaptureError):
        get_key(threading.Event(), tmp_path, tmp_path)