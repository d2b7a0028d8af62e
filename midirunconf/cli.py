"""Command line front end for editing the midirun configuration."""

from __future__ import annotations

import argparse
import sys
import threading

from .config import ConfigError, format_keys
from .daemon import PID_PATH, DaemonError
from .editor import TITLE, VERSION, ConfigEditor, MappingRow, NoMappingsError
from .keycode import KeyCaptureError, get_key
from .midi import MidiPortError, list_input_ports, listen


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the command."""
    parser = argparse.ArgumentParser(
        prog="midirun-config", description="Edit the midirun MIDI mappings."
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("--config", help="configuration file to edit")
    parser.add_argument("--pid-file", default=PID_PATH, help="daemon PID file")
    parser.add_argument(
        "--no-restart",
        action="store_true",
        help="do not signal the daemon after writing",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("show", help="show the current mappings")
    commands.add_parser("ports", help="list MIDI input ports")

    add = commands.add_parser("add", help="add a mapping and apply")
    add.add_argument("--name", default="")
    add.add_argument("--byte0", required=True)
    add.add_argument("--byte1", required=True)
    add.add_argument("--keys", default="", help="comma separated key codes")

    remove = commands.add_parser("remove", help="remove a mapping and apply")
    remove.add_argument("index", type=int)

    port = commands.add_parser("port", help="select the input port and apply")
    port.add_argument("index", type=int)

    commands.add_parser("apply", help="rewrite the configuration and apply")

    listen_cmd = commands.add_parser("listen", help="print incoming MIDI messages")
    listen_cmd.add_argument("port", type=int, nargs="?", default=None)

    capture = commands.add_parser("capture", help="capture key codes")
    capture.add_argument("--count", type=int, default=1)
    return parser


def _show(editor: ConfigEditor) -> int:
    print(f"Input port: {editor.port_index + 1}")
    for index, row in enumerate(editor.rows):
        print(
            f"{index}: Name: {row.name}, Byte 0: {row.b0}, "
            f"Byte 1: {row.b1}, Keys: {row.keys}"
        )
    return 0


def _ports() -> int:
    try:
        names = list_input_ports()
    except MidiPortError as exc:
        print(exc, file=sys.stderr)
        return 1
    print(f"There are {len(names)} MIDI input sources available.")
    for index, name in enumerate(names):
        print(f"{index}: {name}")
    return 0


def _apply(editor: ConfigEditor, restart: bool) -> int:
    try:
        editor.apply(restart=restart)
    except (NoMappingsError, ConfigError, DaemonError) as exc:
        print(f"{editor.status}\n{exc}", file=sys.stderr)
        return 1
    print(editor.status)
    return 0


def _listen(port: int | None) -> int:
    stop = threading.Event()
    try:
        messages = listen(port, stop)
    except MidiPortError as exc:
        print(exc, file=sys.stderr)
        return 1
    try:
        for text in messages:
            print(text, end="", flush=True)
    except KeyboardInterrupt:
        stop.set()
    finally:
        messages.close()
    return 0


def _capture(count: int) -> int:
    codes = []
    try:
        while len(codes) < count:
            code = get_key()
            if code is None:
                break
            codes.append(code)
    except KeyCaptureError as exc:
        print(exc, file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        pass
    print(format_keys(codes))
    return 0


def main(argv=None) -> int:
    """Run the command and return its exit status."""
    args = build_parser().parse_args(argv)

    if args.command == "ports":
        return _ports()
    if args.command == "listen":
        return _listen(args.port)
    if args.command == "capture":
        return _capture(args.count)

    editor = ConfigEditor(args.config, args.pid_file)
    editor.load()
    if editor.status != TITLE:
        print(editor.status, file=sys.stderr)
    restart = not args.no_restart

    if args.command == "show":
        return _show(editor)
    if args.command == "add":
        editor.add_mapping(
            MappingRow(name=args.name, b0=args.byte0, b1=args.byte1, keys=args.keys)
        )
        return _apply(editor, restart)
    if args.command == "remove":
        try:
            editor.remove_mapping(args.index)
        except IndexError as exc:
            print(exc, file=sys.stderr)
            return 1
        return _apply(editor, restart)
    if args.command == "port":
        try:
            editor.select_port(args.index)
        except ValueError as exc:
            print(exc, file=sys.stderr)
            return 1
        return _apply(editor, restart)
    return _apply(editor, restart)


if __name__ == "__main__":
    sys.exit(main())