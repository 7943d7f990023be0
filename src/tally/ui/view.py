"""
View: the event loop.

Each iteration reads the counter from the Store, redraws it, then waits up
to the poll timeout for one key press. ``q`` ends the loop; Up and Down are
turned into transition requests and dispatched before the next redraw.

States::

    RUNNING ──q──▶ TERMINATING (surface cleared, run() returns)

Any error raised by the surface, the input source or the dispatcher ends
the loop immediately and propagates to the caller.
"""

from __future__ import annotations

import logging
from enum import Enum

from tally.core.constants import DEFAULT_POLL_TIMEOUT_MS
from tally.core.dispatcher import Dispatcher
from tally.ui.backend import InputSource, Surface
from tally.ui.keys import is_quit, map_key
from tally.ui.render import render_counter

logger = logging.getLogger(__name__)


class LoopState(Enum):
    RUNNING = "running"
    TERMINATING = "terminating"


class View:
    def __init__(
        self,
        surface: Surface,
        input_source: InputSource,
        dispatcher: Dispatcher,
        poll_timeout: float = DEFAULT_POLL_TIMEOUT_MS / 1000,
    ) -> None:
        self._surface = surface
        self._input = input_source
        self._dispatcher = dispatcher
        self._store = dispatcher.store
        self._poll_timeout = poll_timeout
        self.state = LoopState.RUNNING
        self.iterations = 0

    def draw(self) -> None:
        """Render the current counter value."""
        value = self._store.snapshot()
        width, height = self._surface.size
        self._surface.draw(render_counter(value, width=width, height=height))

    def step(self) -> LoopState:
        """Run one iteration of the loop and return the resulting state."""
        self.iterations += 1
        self.draw()

        if not self._input.poll(self._poll_timeout):
            return self.state

        event = self._input.read()
        if is_quit(event):
            logger.info("Quit requested after %d iteration(s)", self.iterations)
            self.state = LoopState.TERMINATING
            return self.state

        request = map_key(event)
        if request is not None:
            self._dispatcher.dispatch(request)
        return self.state

    def run(self) -> None:
        """Loop until ``q`` is pressed, then clear the surface."""
        logger.info("Event loop started (poll timeout %.3fs)", self._poll_timeout)
        while self.step() is LoopState.RUNNING:
            pass
        self._surface.clear()
        logger.info("Event loop stopped, counter=%d", self._store.snapshot())
