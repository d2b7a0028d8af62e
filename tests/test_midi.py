import threading
from unittest import mock

import mido
import pytest

from midirunconf.midi import (
    MidiPortError,
    format_message,
    list_input_ports,
    listen,
)


def test_format_message_worked_example():
    assert format_message([144, 60, 100], 0.5) == (
        "Byte 0 = 144 | Byte 1 = 60 | Byte 2 = 100 | stamp = 0.500000\n\n"
    )


def test_format_message_empty():
    assert format_message([], 1.0) == ""


def test_format_message_one_field_per_byte():
    data = [176, 7, 127, 0]
    text = format_message(data, 0.0)
    assert text.count("|") == len(data)
    assert text.endswith("\n\n")


def test_list_input_ports():
    with mock.patch("midirunconf.midi.mido.get_input_names", return_value=["A", "B"]):
        assert list_input_ports() == ["A", "B"]


def test_list_input_ports_backend_failure():
    with mock.patch("midirunconf.midi.mido.get_input_names", side_effect=OSError("no backend")):
        with pytest.raises(MidiPortError):
            list_input_ports()


@pytest.mark.parametrize("index", [None, -1])
def test_listen_without_device(index):
    with pytest.raises(MidiPortError, match="Please Select a Device!"):
        listen(index, threading.Event())


def test_listen_port_out_of_range():
    with mock.patch("midirunconf.midi.mido.get_input_names", return_value=["A"]):
        with pytest.raises(MidiPortError):
            listen(5, threading.Event())


def test_listen_yields_messages():
    port = mock.MagicMock()
    port.iter_pending.return_value = [mido.Message("note_on", note=60, velocity=100)]
    stop = threading.Event()
    with mock.patch("midirunconf.midi.mido.get_input_names", return_value=["A"]), \
            mock.patch("midirunconf.midi.mido.open_input", return_value=port) as opener:
        messages = listen(0, stop)
        first = next(messages)
        stop.set()
        messages.close()
    opener.assert_called_once_with("A")
    assert first.startswith("Byte 0 = 144 | Byte 1 = 60 | Byte 2 = 100 | stamp = ")
    assert port.close.called