"""Transition requests: the only commands the Store understands."""

from __future__ import annotations

from enum import Enum


class TransitionRequest(Enum):
    """Command token sent through the Dispatcher. Value is the signed delta."""

    INCREMENT = 1
    DECREMENT = -1

    @property
    def delta(self) -> int:
        return self.value
