"""
Counter store.

The Store is the single owner of the counter value. Only ``apply`` changes
it, and only the Dispatcher calls ``apply``. Readers take a copy through
``snapshot`` so a half-applied update is never observed.

The counter is a plain Python ``int``: it is unbounded and never wraps or
saturates.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from tally.core.actions import TransitionRequest
from tally.core.exceptions import StatePoisonedError


class Store:
    """Owns CounterState and applies transition requests to it."""

    def __init__(self) -> None:
        self._count = 0
        self._lock = threading.Lock()
        self._poisoned = False

    @property
    def count(self) -> int:
        """Raw counter value. Read it inside ``locked()`` or use ``snapshot()``."""
        return self._count

    @property
    def poisoned(self) -> bool:
        return self._poisoned

    def apply(self, request: TransitionRequest) -> None:
        """Apply one transition in place. Caller must hold the store lock."""
        if not isinstance(request, TransitionRequest):
            raise TypeError(f"Unknown transition request: {request!r}")
        self._count += request.delta

    @contextmanager
    def locked(self) -> Iterator[Store]:
        """
        Hold the store lock for the duration of the block.

        If the block raises, the store is poisoned: the state can no longer be
        trusted and every later acquisition raises StatePoisonedError.
        """
        with self._lock:
            if self._poisoned:
                raise StatePoisonedError("Counter state is poisoned by an earlier failed update")
            try:
                yield self
            except BaseException:
                self._poisoned = True
                raise

    def snapshot(self) -> int:
        """Return a copy of the current counter value."""
        with self.locked():
            return self._count
