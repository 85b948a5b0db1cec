"""Tests for SerialDispatcher ordering, blocking and shutdown."""

from __future__ import annotations

import logging
import threading
import time
from typing import TYPE_CHECKING

import pytest

from corelog.dispatcher import SerialDispatcher

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture
def dispatcher() -> Iterator[SerialDispatcher]:
    d = SerialDispatcher(name="test-serial")
    yield d
    d.close()


class TestOrdering:
    def test_fifo_from_one_thread(self, dispatcher: SerialDispatcher) -> None:
        seen: list[int] = []
        for i in range(200):
            dispatcher.post(seen.append, i)
        dispatcher.flush()
        assert seen == list(range(200))

    def test_per_thread_order_preserved(self, dispatcher: SerialDispatcher) -> None:
        """Turns from each thread keep their relative order."""
        seen: list[tuple[int, int]] = []

        def producer(tid: int) -> None:
            for i in range(100):
                dispatcher.post(seen.append, (tid, i))

        threads = [threading.Thread(target=producer, args=(t,)) for t in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        dispatcher.flush()

        assert len(seen) == 400
        for tid in range(4):
            assert [i for t, i in seen if t == tid] == list(range(100))

    def test_turns_never_overlap(self, dispatcher: SerialDispatcher) -> None:
        active = 0
        overlaps = 0
        lock = threading.Lock()

        def turn() -> None:
            nonlocal active, overlaps
            with lock:
                active += 1
                if active > 1:
                    overlaps += 1
            time.sleep(0.001)
            with lock:
                active -= 1

        threads = [
            threading.Thread(target=lambda: [dispatcher.post(turn) for _ in range(10)])
            for _ in range(4)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        dispatcher.flush()
        assert overlaps == 0

    def test_runs_on_worker_thread(self, dispatcher: SerialDispatcher) -> None:
        name = dispatcher.post_and_wait(lambda: threading.current_thread().name)
        assert name == "test-serial"


class TestPostAndWait:
    def test_returns_result(self, dispatcher: SerialDispatcher) -> None:
        assert dispatcher.post_and_wait(lambda a, b=0: a + b, 2, b=3) == 5

    def test_observes_earlier_posts(self, dispatcher: SerialDispatcher) -> None:
        box: list[int] = []
        dispatcher.post(lambda: (time.sleep(0.05), box.append(1)))
        assert dispatcher.post_and_wait(lambda: list(box)) == [1]

    def test_reraises(self, dispatcher: SerialDispatcher) -> None:
        def boom() -> None:
            raise RuntimeError("bad turn")

        with pytest.raises(RuntimeError, match="bad turn"):
            dispatcher.post_and_wait(boom)

    def test_inline_on_worker_thread(self, dispatcher: SerialDispatcher) -> None:
        """A turn waiting on the dispatcher must not deadlock itself."""
        result = dispatcher.post_and_wait(lambda: dispatcher.post_and_wait(lambda: 42))
        assert result == 42


class TestFailures:
    def test_failed_post_is_logged_and_worker_survives(
        self,
        dispatcher: SerialDispatcher,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        def boom() -> None:
            raise ValueError("fire and forget")

        with caplog.at_level(logging.WARNING, logger="corelog"):
            dispatcher.post(boom)
            dispatcher.flush()
        assert any("failed" in r.message for r in caplog.records)
        assert dispatcher.post_and_wait(lambda: "alive") == "alive"


class TestClose:
    def test_close_drains_queue(self) -> None:
        d = SerialDispatcher()
        seen: list[int] = []
        d.post(lambda: time.sleep(0.05))
        for i in range(10):
            d.post(seen.append, i)
        d.close()
        assert seen == list(range(10))
        assert d.closed

    def test_close_is_idempotent(self) -> None:
        d = SerialDispatcher()
        d.close()
        d.close()

    def test_posts_after_close_run_inline(self) -> None:
        d = SerialDispatcher()
        d.close()
        seen: list[str] = []
        d.post(lambda: seen.append(threading.current_thread().name))
        assert seen == [threading.current_thread().name]
        assert d.post_and_wait(lambda: 7) == 7

    def test_worker_posts_during_close_are_drained(self) -> None:
        d = SerialDispatcher()
        seen: list[str] = []

        def first() -> None:
            time.sleep(0.05)
            d.post(seen.append, "posted-by-worker")

        d.post(first)
        d.close()
        assert seen == ["posted-by-worker"]
