"""Single-worker FIFO executor that orders every side effect of the logger.

All sink writes, counter updates and configuration changes run as discrete
turns on one background thread. Turns submitted in call order complete in
that order, and no two turns ever run concurrently.

``post()`` is fire-and-forget. ``post_and_wait()`` blocks the caller until
its turn has run, which makes it a synchronization point with every turn
submitted before it.

The queue is unbounded: a slow destination makes the queue grow rather than
drop messages.
"""

from __future__ import annotations

import logging
import queue
import threading
from concurrent.futures import Future
from typing import TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger("corelog")

T = TypeVar("T")

_STOP = object()


class _Turn:
    __slots__ = ("fn", "args", "kwargs", "future")

    def __init__(
        self,
        fn: Callable[..., Any],
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
        future: Future[Any] | None,
    ) -> None:
        self.fn = fn
        self.args = args
        self.kwargs = kwargs
        self.future = future

    def run(self) -> None:
        if self.future is None:
            try:
                self.fn(*self.args, **self.kwargs)
            except Exception:  # Intentional: a failed turn must not stop the worker
                logger.warning("Logger turn %r failed", self.fn, exc_info=True)
            return

        if not self.future.set_running_or_notify_cancel():
            return
        try:
            result = self.fn(*self.args, **self.kwargs)
        except BaseException as exc:
            self.future.set_exception(exc)
        else:
            self.future.set_result(result)


class SerialDispatcher:
    """Run submitted callables one at a time, in submission order.

    Args:
        name: Name of the worker thread.
    """

    def __init__(self, name: str = "corelog-serial") -> None:
        self._queue: queue.SimpleQueue[Any] = queue.SimpleQueue()
        self._closed = False
        self._close_lock = threading.Lock()
        # Serializes turns that run inline on caller threads after close().
        self._inline_lock = threading.RLock()
        self._thread = threading.Thread(target=self._run, daemon=True, name=name)
        self._thread.start()

    @property
    def closed(self) -> bool:
        return self._closed

    def on_worker_thread(self) -> bool:
        """Whether the calling thread is the dispatcher's worker."""
        return threading.current_thread() is self._thread

    def post(self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> None:
        """Enqueue *fn* without waiting for it.

        Exceptions raised by *fn* are logged on the ``corelog`` logger and
        otherwise discarded.
        """
        self._submit(_Turn(fn, args, kwargs, None))

    def post_and_wait(self, fn: Callable[..., T], /, *args: Any, **kwargs: Any) -> T:
        """Enqueue *fn* and block until it has run.

        Called from the worker thread itself, *fn* runs inline.

        Returns:
            The value returned by *fn*.

        Raises:
            Exception: Whatever *fn* raised.
        """
        if self.on_worker_thread():
            return fn(*args, **kwargs)
        future: Future[T] = Future()
        self._submit(_Turn(fn, args, kwargs, future))
        return future.result()

    def flush(self) -> None:
        """Block until every previously submitted turn has completed."""
        self.post_and_wait(_noop)

    def close(self, timeout: float | None = None) -> None:
        """Drain the queue and stop the worker. Idempotent.

        Turns submitted after ``close()`` run inline on the submitting
        thread, one at a time, so nothing is lost.

        Args:
            timeout: Seconds to wait for the worker to drain; ``None`` waits
                indefinitely.
        """
        with self._close_lock:
            if self._closed:
                return
            self._closed = True
            self._queue.put(_STOP)
        if not self.on_worker_thread():
            self._thread.join(timeout)

    def _submit(self, turn: _Turn) -> None:
        with self._close_lock:
            # The worker drains whatever it posts to itself while stopping.
            if not self._closed or self.on_worker_thread():
                self._queue.put(turn)
                return
        # The worker may still be finishing turns queued before close().
        self._thread.join()
        with self._inline_lock:
            turn.run()

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            if item is _STOP:
                break
            item.run()
        while True:
            try:
                item = self._queue.get_nowait()
            except queue.Empty:
                return
            item.run()


def _noop() -> None:
    return None
