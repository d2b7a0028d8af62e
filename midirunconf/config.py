"""Reading and writing the midirun TOML configuration."""

from __future__ import annotations

import os
import re
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

import tomli_w

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


class ConfigError(Exception):
    """Raised when a configuration cannot be read, parsed or rendered."""

    def __init__(self, message: str, input_port: int | None = None) -> None:
        super().__init__(message)
        self.input_port = input_port


@dataclass
class ConfigEntry:
    """One MIDI message to key-sequence mapping."""

    name: str = ""
    b0: str = ""
    b1: str = ""
    keys: list[int] = field(default_factory=list)

    def keys_text(self) -> str:
        """Return the key codes as comma separated text."""
        return format_keys(self.keys)


@dataclass
class Config:
    """A whole configuration: the selected input port and the mappings."""

    input_port: int = -1
    mappings: list[ConfigEntry] = field(default_factory=list)


def _to_int(text: str, what: str) -> int:
    """Parse a leading integer the way a C string-to-int conversion does."""
    match = _INT_PREFIX.match(text)
    if match is None:
        raise ConfigError(f"invalid number for {what}: {text!r}")
    value = int(match.group(1))
    if not _INT_MIN <= value <= _INT_MAX:
        raise ConfigError(f"number out of range for {what}: {text!r}")
    return value


def parse_keys(text: str) -> list[int]:
    """Split comma separated key codes; a single trailing comma is allowed."""
    if not text:
        return []
    items = text.split(",")
    if items[-1] == "":
        items.pop()
    return [_to_int(item, "key") for item in items]


def format_keys(keys) -> str:
    """Join key codes with commas."""
    return ",".join(str(key) for key in keys)


def default_config_path(home=None) -> Path:
    """Return the configuration path under the given (or current) home."""
    base = Path(home) if home is not None else Path(os.path.expanduser("~"))
    return base / ".config" / "midirun" / "config.toml"


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _entry_from_table(table: dict) -> ConfigEntry:
    entry = ConfigEntry()
    name = table.get("name")
    if isinstance(name, str):
        entry.name = name
    byte0 = table.get("byte0")
    if _is_int(byte0):
        entry.b0 = str(byte0)
    byte1 = table.get("byte1")
    if _is_int(byte1):
        entry.b1 = str(byte1)
    keys = table.get("key")
    if isinstance(keys, list):
        entry.keys = [key for key in keys if _is_int(key)]
    return entry


def read_config(path) -> Config:
    """Read a configuration file.

    Raises ConfigError if the file is missing or unparsable, or if it has no
    array of mappings (the error then carries the input port it did find).
    """
    try:
        with open(path, "rb") as handle:
            data = tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
        raise ConfigError(f"TOML parse error: {exc}") from exc

    section = data.get("config")
    port = section.get("inputPort") if isinstance(section, dict) else None
    input_port = port if _is_int(port) else -1

    mappings = data.get("mapping")
    if not isinstance(mappings, list):
        raise ConfigError("`mapping` is not an array of tables.", input_port=input_port)

    entries = [_entry_from_table(item) for item in mappings if isinstance(item, dict)]
    return Config(input_port=input_port, mappings=entries)


def render_config(config: Config) -> str:
    """Render a configuration as TOML text."""
    document: dict = {"config": {"inputPort": config.input_port}}
    tables = [
        {
            "name": entry.name,
            "byte0": _to_int(entry.b0, "byte0"),
            "byte1": _to_int(entry.b1, "byte1"),
            "key": list(entry.keys),
        }
        for entry in config.mappings
    ]
    if tables:
        document["mapping"] = tables
    return tomli_w.dumps(document)


def write_config(config: Config, path) -> None:
    """Render a configuration and write it to a file."""
    text = render_config(config)
    try:
        Path(path).write_text(text, encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"could not write {path}: {exc}") from exc