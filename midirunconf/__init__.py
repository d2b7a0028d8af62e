"""Configure midirun: edit its MIDI-to-keystroke mappings, watch MIDI input and capture key codes."""

__version__ = "0.1.2"

__all__ = ["__version__"]