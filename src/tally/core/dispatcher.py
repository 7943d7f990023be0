"""Dispatcher: the single gateway through which the counter is mutated."""

from __future__ import annotations

import logging

from tally.core.actions import TransitionRequest
from tally.core.store import Store

logger = logging.getLogger(__name__)


class Dispatcher:
    def __init__(self, store: Store) -> None:
        self._store = store

    @property
    def store(self) -> Store:
        return self._store

    def dispatch(self, request: TransitionRequest) -> None:
        """Apply ``request`` to the store under exclusive access."""
        with self._store.locked() as store:
            store.apply(request)
            value = store.count
        logger.debug("Dispatched %s -> %d", request.name, value)
