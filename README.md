# midirunconf

A command-line configuration tool for **midirun**, a daemon that turns
incoming MIDI messages into keystrokes. With it you can:

- read and write the midirun mapping file (`~/.config/midirun/config.toml`),
- list the MIDI input ports and choose which one midirun uses,
- print the raw bytes a MIDI device sends, so you know what to map,
- capture Linux key codes straight from a keyboard,
- tell a running midirun to reload its configuration (`SIGHUP`).

## Installation

```
pip install .
```

MIDI access goes through `mido`, which needs one of its backends installed
(for example `python-rtmidi`).

Key capture reads `/dev/input/event*` and the udev records in
`/run/udev/data`, so your user needs read access to the input devices
(usually through membership of the `input` group).

## The configuration file

```toml
[config]
inputPort = 1

[[mapping]]
name = "Pad 1"
byte0 = 144
byte1 = 36
key = [29, 46]
```

`inputPort` counts from 1. Each `[[mapping]]` matches the first two bytes of a
MIDI message and lists the key codes to press.

## Command line

```
midirun-config [--config PATH] [--pid-file PATH] [--no-restart] COMMAND ...
midirun-config --version
```

Global options:

- `--config PATH` – the file to edit (default `~/.config/midirun/config.toml`).
- `--pid-file PATH` – where the daemon's PID is stored (default `/tmp/midirun.pid`).
- `--no-restart` – write the file but do not send `SIGHUP` to the daemon.

Commands:

| Command | What it does |
|---|---|
| `show` | Prints `Input port: N` and every mapping with its position. |
| `ports` | Lists the MIDI input ports, numbered from 0. |
| `add --byte0 B0 --byte1 B1 [--name NAME] [--keys 29,46]` | Adds a mapping, then applies. |
| `remove INDEX` | Removes the mapping at position `INDEX` (from `show`), then applies. |
| `port INDEX` | Selects the input port by its position in `ports` (`-1` clears it), then applies. |
| `apply` | Rewrites the file from the current mappings, then applies. |
| `listen [PORT]` | Prints each incoming message until Ctrl-C. |
| `capture [--count N]` | Waits for `N` key presses (default 1) and prints their codes, comma separated. |

"Applies" means: write the configuration file, then, unless `--no-restart` is
given, read the PID file and send `SIGHUP` to that process. Applying with no
mappings fails with `ERROR: You don't have any mappings set!` and exit status 1.
If the existing file cannot be read, a message is printed to standard error and
the command carries on with an empty list of mappings, so applying creates a
new file.

`listen` prints each message as

```
Byte 0 = 144 | Byte 1 = 36 | Byte 2 = 100 | stamp = 0.000000
```

where `stamp` is the number of seconds since the previous message (0 for the
first). Without a port it reports `Please Select a Device!`.

Byte values are written to the file as integers; a value that does not start
with a number is an error. Key codes are comma separated, and one trailing
comma is accepted.

## Library use

```python
from pathlib import Path
from midirunconf.config import read_config, write_config, default_config_path
from midirunconf.editor import ConfigEditor, MappingRow

path = default_config_path(Path.home())
config = read_config(path)          # raises ConfigError if unreadable
for entry in config.mappings:
    print(entry.name, entry.b0, entry.b1, entry.keys_text())

editor = ConfigEditor(path)
editor.load()
editor.add_mapping(MappingRow(name="Pad 2", b0="144", b1="37", keys="30"))
editor.select_port(0)
editor.apply(restart=False)         # raises NoMappingsError if there are none
```

Other modules:

- `midirunconf.midi` – `list_input_ports()`, `listen(port_index, stop_event)`
  (a generator of message descriptions) and `format_message(data, stamp)`.
- `midirunconf.keycode` – `get_key(stop_event)` returns the code of the next
  key pressed on any keyboard, or `None` if `stop_event` is set first;
  `find_keyboards()` lists the devices it would listen on.
- `midirunconf.daemon` – `read_pid(path)` and `restart_midirun(pid_path)`.

## What it does not do

There is no graphical window: all editing is done through the `midirun-config`
subcommands or the `ConfigEditor` class. Key capture needs Linux input devices
and does not work on other systems.

## Running the tests

```
pip install .[test]
pytest
```