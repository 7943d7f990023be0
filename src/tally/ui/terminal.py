"""
Real terminal backend.

``terminal_session`` puts stdin into cbreak mode (no line buffering, no
echo) and always restores the saved attributes on the way out, whether the
loop ended with ``q`` or with an exception. ``TerminalSurface`` draws
through a rich ``Live`` display on the alternate screen, and
``KeyboardInput`` provides the bounded poll over stdin.
"""

from __future__ import annotations

import errno
import logging
import os
import select
import sys
import termios
import tty
from collections import deque
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TextIO

from rich.console import Console, RenderableType
from rich.live import Live
from rich.text import Text

from tally.core.constants import ESCAPE_TIMEOUT_MS, READ_CHUNK_BYTES
from tally.core.exceptions import TerminalError
from tally.ui.keys import KeyEvent, decode_key, split_keys

logger = logging.getLogger(__name__)


@contextmanager
def terminal_session(stream: TextIO | None = None) -> Iterator[int]:
    """Switch the terminal on ``stream`` (default stdin) to cbreak mode; yield its fd."""
    stream = stream or sys.stdin
    if not stream.isatty():
        raise TerminalError("Tally needs an interactive terminal (stdin is not a TTY)")

    fd = stream.fileno()
    saved = termios.tcgetattr(fd)
    tty.setcbreak(fd)
    logger.debug("Terminal fd=%d in cbreak mode", fd)
    try:
        yield fd
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)
        logger.debug("Terminal fd=%d restored", fd)


class KeyboardInput:
    """Bounded-wait key reader over a raw terminal file descriptor."""

    def __init__(self, fd: int) -> None:
        self._fd = fd
        self._pending: deque[bytes] = deque()
        self._partial = b""

    def _ready(self, timeout: float) -> bool:
        ready, _, _ = select.select([self._fd], [], [], timeout)
        return bool(ready)

    def poll(self, timeout: float) -> bool:
        if self._pending or self._partial:
            return True
        return self._ready(timeout)

    def read(self) -> KeyEvent:
        while not self._pending:
            if self._partial and not self._ready(ESCAPE_TIMEOUT_MS / 1000):
                # nothing completes it: a bare Escape press or a truncated sequence
                self._pending.append(self._partial)
                self._partial = b""
                break
            data = os.read(self._fd, READ_CHUNK_BYTES)
            if not data:
                raise OSError(errno.EIO, "Terminal input closed")
            keys, self._partial = split_keys(self._partial + data)
            self._pending.extend(keys)
        return decode_key(self._pending.popleft())


class TerminalSurface:
    """
    Full-screen drawing surface backed by ``rich.live.Live``.

    Use as a context manager: entering switches to the alternate screen and
    hides the cursor, leaving restores both.
    """

    def __init__(self, console: Console) -> None:
        self._console = console
        self._live = Live(
            console=console,
            screen=True,
            auto_refresh=False,
            redirect_stdout=False,
            redirect_stderr=False,
        )

    def __enter__(self) -> TerminalSurface:
        self._live.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._live.stop()

    @property
    def size(self) -> tuple[int, int]:
        width, height = self._console.size
        return width, height

    def draw(self, renderable: RenderableType) -> None:
        self._live.update(renderable, refresh=True)

    def clear(self) -> None:
        self._live.update(Text(""), refresh=True)
        self._console.clear()
