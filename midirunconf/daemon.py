"""Signalling the running midirun daemon to reload its configuration."""

from __future__ import annotations

import logging
import os
import re
import signal

log = logging.getLogger(__name__)

PID_PATH = "/tmp/midirun.pid"

_PID_PREFIX = re.compile(r"\s*([+-]?\d+)")


class DaemonError(Exception):
    """Raised when the daemon cannot be found or signalled."""


def read_pid(path=PID_PATH) -> int:
    """Read the daemon's process id from its PID file."""
    try:
        with open(path, encoding="utf-8") as handle:
            text = handle.read()
    except OSError as exc:
        raise DaemonError("Failed to open PID file.") from exc
    match = _PID_PREFIX.match(text)
    if match is None or int(match.group(1)) <= 0:
        raise DaemonError("Invalid PID.")
    return int(match.group(1))


def restart_midirun(pid_path=PID_PATH) -> int:
    """Send SIGHUP to the daemon and return its process id."""
    pid = read_pid(pid_path)
    try:
        os.kill(pid, signal.SIGHUP)
    except OSError as exc:
        raise DaemonError(f"kill: {exc}") from exc
    log.info("Sent SIGHUP to daemon (PID %d).", pid)
    return pid