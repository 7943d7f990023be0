"""Tally constants: exit codes, loop timing, and filesystem layout."""

from __future__ import annotations

from enum import IntEnum

# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------


class ExitCode(IntEnum):
    SUCCESS = 0
    ERROR = 1
    CONFIG_ERROR = 2
    ENV_ERROR = 3
    INTERRUPTED = 130


# ---------------------------------------------------------------------------
# Filesystem layout
# ---------------------------------------------------------------------------

TALLY_DIR_NAME = ".tally"
CONFIG_FILENAME = "config.toml"
LOG_FILENAME = "tally.log"

# ---------------------------------------------------------------------------
# Event loop
# ---------------------------------------------------------------------------

DEFAULT_POLL_TIMEOUT_MS = 50  # bounded input wait per iteration (~20 Hz idle)
MIN_POLL_TIMEOUT_MS = 1
MAX_POLL_TIMEOUT_MS = 1000
READ_CHUNK_BYTES = 32  # one read; longer bursts span several reads
ESCAPE_TIMEOUT_MS = 25  # wait for the rest of a split escape sequence

QUIT_CHAR = "q"
COUNTER_LABEL = "Counter"
