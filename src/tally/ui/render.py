"""Counter rendering. Pure: output depends only on the value and the area."""

from __future__ import annotations

from rich import box
from rich.panel import Panel
from rich.text import Text

from tally.core.constants import COUNTER_LABEL


def counter_text(value: int) -> str:
    return f"{COUNTER_LABEL}: {value}"


def render_counter(value: int, width: int | None = None, height: int | None = None) -> Panel:
    """A bordered box holding ``Counter: <value>``, filling the given area."""
    return Panel(
        Text(counter_text(value)),
        box=box.SQUARE,
        expand=True,
        width=width,
        height=height,
        padding=0,
    )
