"""Editing the list of mappings and applying it to the midirun daemon."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .config import (
    Config,
    ConfigEntry,
    ConfigError,
    default_config_path,
    parse_keys,
    read_config,
    write_config,
)
from .daemon import PID_PATH, restart_midirun

log = logging.getLogger(__name__)

VERSION = "0.1.2-beta"
TITLE = f"Midirun Config v{VERSION}"

STATUS_PARSING = "Parsing Data..."
STATUS_CREATING = "Creating config file..."
STATUS_WRITTEN = "Config file written, restarting midirun..."
STATUS_NO_MAPPINGS = "ERROR: You don't have any mappings set!"
STATUS_IMPORT_FAILED = (
    "Could not import current config, pressing apply will create a new one."
)
STATUS_PARSE_FAILED = (
    "Error parsing config (config most likely doesn't exist), pressing "
    "apply will create a new one."
)


class NoMappingsError(Exception):
    """Raised when applying a configuration that has no mappings."""


@dataclass
class MappingRow:
    """One editable mapping, held as the text of its fields."""

    name: str = ""
    b0: str = ""
    b1: str = ""
    keys: str = ""

    @classmethod
    def from_entry(cls, entry: ConfigEntry) -> MappingRow:
        """Build a row showing the given configuration entry."""
        return cls(name=entry.name, b0=entry.b0, b1=entry.b1, keys=entry.keys_text())

    def to_entry(self) -> ConfigEntry:
        """Turn the row's text into a configuration entry."""
        return ConfigEntry(
            name=self.name, b0=self.b0, b1=self.b1, keys=parse_keys(self.keys)
        )


class ConfigEditor:
    """Holds the mappings being edited, the selected port and a status line."""

    def __init__(self, config_path=None, pid_path=PID_PATH) -> None:
        self.config_path = (
            Path(config_path) if config_path is not None else default_config_path()
        )
        self.pid_path = pid_path
        self.rows: list[MappingRow] = []
        self.port_index = -1
        self.status = TITLE

    def _select_from_config(self, input_port: int) -> None:
        self.port_index = input_port - 1 if input_port >= 1 else -1

    def load(self) -> list[MappingRow]:
        """Read the configuration file into rows; failures only set the status."""
        self.rows = []
        try:
            config = read_config(self.config_path)
        except ConfigError as exc:
            log.warning("%s", exc)
            if exc.input_port is not None:
                self._select_from_config(exc.input_port)
                self.status = STATUS_IMPORT_FAILED
            else:
                self.status = STATUS_PARSE_FAILED
            return self.rows
        self._select_from_config(config.input_port)
        self.rows = [MappingRow.from_entry(entry) for entry in config.mappings]
        return self.rows

    def add_mapping(self, row: MappingRow | None = None) -> MappingRow:
        """Append a mapping row (an empty one by default) and return it."""
        if row is None:
            row = MappingRow()
        self.rows.append(row)
        return row

    def remove_mapping(self, index: int) -> MappingRow:
        """Remove and return the row at the given position."""
        if not 0 <= index < len(self.rows):
            raise IndexError(f"no mapping at position {index}")
        return self.rows.pop(index)

    def select_port(self, index: int) -> None:
        """Select the input port by position; -1 clears the selection."""
        if index < -1:
            raise ValueError(f"invalid port position: {index}")
        self.port_index = index

    def collect(self) -> list[ConfigEntry]:
        """Turn every row into a configuration entry."""
        if not self.rows:
            self.status = STATUS_NO_MAPPINGS
            raise NoMappingsError("You don't have any mappings set!")
        entries = [row.to_entry() for row in self.rows]
        for entry in entries:
            log.info(
                "Name: %s, Byte 0: %s, Byte 1: %s, Keys: %s",
                entry.name,
                entry.b0,
                entry.b1,
                entry.keys_text(),
            )
        return entries

    def apply(self, restart: bool = True) -> Config:
        """Write the configuration file and, if asked, signal the daemon."""
        self.status = STATUS_PARSING
        entries = self.collect()
        self.status = STATUS_CREATING
        config = Config(input_port=self.port_index + 1, mappings=entries)
        write_config(config, self.config_path)
        self.status = STATUS_WRITTEN
        if restart:
            restart_midirun(self.pid_path)
        return config