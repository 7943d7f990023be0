"""Key events: decoding raw terminal bytes and mapping keys to requests."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from tally.core.actions import TransitionRequest
from tally.core.constants import QUIT_CHAR


class Key(Enum):
    UP = "up"
    DOWN = "down"
    CHAR = "char"
    OTHER = "other"


@dataclass(frozen=True)
class KeyEvent:
    """A key press. ``char`` is set only for ``Key.CHAR``."""

    key: Key
    char: str = ""


# CSI (normal cursor mode) and SS3 (application cursor mode) arrow sequences
_ESCAPE_SEQUENCES: dict[bytes, Key] = {
    b"\x1b[A": Key.UP,
    b"\x1bOA": Key.UP,
    b"\x1b[B": Key.DOWN,
    b"\x1bOB": Key.DOWN,
}


def decode_key(data: bytes) -> KeyEvent:
    """Decode the bytes of one key press read from the terminal."""
    if key := _ESCAPE_SEQUENCES.get(data):
        return KeyEvent(key)
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        return KeyEvent(Key.OTHER)
    if len(text) == 1 and text.isprintable():
        return KeyEvent(Key.CHAR, text)
    return KeyEvent(Key.OTHER)


def map_key(event: KeyEvent) -> TransitionRequest | None:
    """Up → INCREMENT, Down → DECREMENT, anything else → no request."""
    if event.key is Key.UP:
        return TransitionRequest.INCREMENT
    if event.key is Key.DOWN:
        return TransitionRequest.DECREMENT
    return None


def is_quit(event: KeyEvent) -> bool:
    return event.key is Key.CHAR and event.char == QUIT_CHAR


def split_keys(data: bytes) -> tuple[list[bytes], bytes]:
    """
    Split bytes read from the terminal into one byte string per key press.

    Returns the complete presses and the unfinished tail, if any. The tail is
    a sequence cut off by the read boundary (a trailing ``ESC``, ``ESC O``,
    an open CSI sequence or a partial UTF-8 character); the caller keeps it
    and prepends it to the next read.
    """
    keys: list[bytes] = []
    i = 0
    while i < len(data):
        end = _key_end(data, i)
        if end is None:
            return keys, data[i:]
        keys.append(data[i:end])
        i = end
    return keys, b""


def _key_end(data: bytes, start: int) -> int | None:
    """End offset of the key press starting at ``start``; None if incomplete."""
    lead = data[start]
    if lead == 0x1B:
        if start + 1 >= len(data):
            return None
        intro = data[start + 1]
        if intro == ord("O"):
            return start + 3 if start + 2 < len(data) else None
        if intro == ord("["):
            # CSI: parameter/intermediate bytes, then one final byte in 0x40-0x7E
            i = start + 2
            while i < len(data) and not 0x40 <= data[i] <= 0x7E:
                i += 1
            return i + 1 if i < len(data) else None
        return start + 1
    if lead >= 0xF0:
        width = 4
    elif lead >= 0xE0:
        width = 3
    elif lead >= 0xC0:
        width = 2
    else:
        width = 1
    end = start + width
    return end if end <= len(data) else None
