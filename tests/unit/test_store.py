"""Unit tests for tally.core.store and tally.core.dispatcher."""

from __future__ import annotations

import threading

import pytest

from tally.core.actions import TransitionRequest
from tally.core.dispatcher import Dispatcher
from tally.core.exceptions import StatePoisonedError
from tally.core.store import Store


def _dispatcher() -> Dispatcher:
    return Dispatcher(Store())


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class TestStore:
    def test_fresh_store_starts_at_zero(self) -> None:
        assert Store().snapshot() == 0

    def test_apply_increment(self) -> None:
        store = Store()
        store.apply(TransitionRequest.INCREMENT)
        assert store.snapshot() == 1

    def test_apply_decrement_goes_negative(self) -> None:
        store = Store()
        store.apply(TransitionRequest.DECREMENT)
        assert store.snapshot() == -1

    @pytest.mark.parametrize("n,m", [(0, 0), (5, 0), (0, 4), (7, 3), (2, 9)])
    def test_n_increments_then_m_decrements(self, n: int, m: int) -> None:
        store = Store()
        for _ in range(n):
            store.apply(TransitionRequest.INCREMENT)
        for _ in range(m):
            store.apply(TransitionRequest.DECREMENT)
        assert store.snapshot() == n - m

    def test_counter_is_unbounded(self) -> None:
        store = Store()
        with store.locked():
            store._count = 2**31 - 1
        store.apply(TransitionRequest.INCREMENT)
        assert store.snapshot() == 2**31

    def test_request_deltas(self) -> None:
        assert TransitionRequest.INCREMENT.delta == 1
        assert TransitionRequest.DECREMENT.delta == -1

    @pytest.mark.parametrize("request_", list(TransitionRequest))
    def test_apply_moves_by_request_delta(self, request_: TransitionRequest) -> None:
        store = Store()
        store.apply(request_)
        store.apply(request_)
        assert store.snapshot() == 2 * request_.delta


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------


class TestDispatcher:
    def test_three_increments(self) -> None:
        d = _dispatcher()
        for _ in range(3):
            d.dispatch(TransitionRequest.INCREMENT)
        assert d.store.snapshot() == 3

    def test_three_increments_five_decrements(self) -> None:
        d = _dispatcher()
        for _ in range(3):
            d.dispatch(TransitionRequest.INCREMENT)
        for _ in range(5):
            d.dispatch(TransitionRequest.DECREMENT)
        assert d.store.snapshot() == -2

    def test_lock_released_after_dispatch(self) -> None:
        d = _dispatcher()
        d.dispatch(TransitionRequest.INCREMENT)
        assert not d.store._lock.locked()

    def test_concurrent_dispatch_loses_no_updates(self) -> None:
        d = _dispatcher()
        per_thread = 500

        def worker(request: TransitionRequest) -> None:
            for _ in range(per_thread):
                d.dispatch(request)

        threads = [threading.Thread(target=worker, args=(TransitionRequest.INCREMENT,)) for _ in range(6)]
        threads += [threading.Thread(target=worker, args=(TransitionRequest.DECREMENT,)) for _ in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert d.store.snapshot() == (6 - 2) * per_thread


# ---------------------------------------------------------------------------
# Poisoning
# ---------------------------------------------------------------------------


class TestPoisoning:
    def test_failed_update_poisons_store(self) -> None:
        store = Store()
        with pytest.raises(RuntimeError):
            with store.locked():
                raise RuntimeError("holder died")
        assert store.poisoned is True
        assert not store._lock.locked()

    def test_snapshot_after_poison_raises(self) -> None:
        store = Store()
        with pytest.raises(RuntimeError):
            with store.locked():
                raise RuntimeError("holder died")
        with pytest.raises(StatePoisonedError):
            store.snapshot()

    def test_dispatch_after_poison_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        d = _dispatcher()

        def broken_apply(request: TransitionRequest) -> None:
            raise RuntimeError("apply failed")

        monkeypatch.setattr(d.store, "apply", broken_apply)
        with pytest.raises(RuntimeError):
            d.dispatch(TransitionRequest.INCREMENT)

        monkeypatch.undo()
        with pytest.raises(StatePoisonedError):
            d.dispatch(TransitionRequest.INCREMENT)

    def test_unknown_request_rejected(self) -> None:
        d = _dispatcher()
        with pytest.raises(TypeError):
            d.dispatch("increment")  # type: ignore[arg-type]
        assert d.store.poisoned is True
