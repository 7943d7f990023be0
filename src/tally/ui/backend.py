"""
Collaborator protocols for the event loop.

The View only talks to a ``Surface`` (where frames are drawn) and an
``InputSource`` (where key presses come from). The real terminal backend
lives in ``tally.ui.terminal``; tests substitute headless implementations.
"""

from __future__ import annotations

from typing import Protocol

from rich.console import RenderableType

from tally.ui.keys import KeyEvent


class Surface(Protocol):
    @property
    def size(self) -> tuple[int, int]:
        """Full drawing area as (width, height)."""
        ...

    def draw(self, renderable: RenderableType) -> None: ...

    def clear(self) -> None: ...


class InputSource(Protocol):
    def poll(self, timeout: float) -> bool:
        """Wait at most ``timeout`` seconds; True if a key press is ready."""
        ...

    def read(self) -> KeyEvent: ...
