"""Structured fan-out over a thread pool with first-error cancellation.

:class:`TaskGroup` owns a :class:`~concurrent.futures.ThreadPoolExecutor` for
the duration of a ``with`` block. Tasks are spawned inside the block and the
block only exits once every task has finished. The first task to fail (in
completion order) sets the shared cancellation event, pending tasks are
cancelled, tasks already running are awaited, and the recorded error is
raised from ``__exit__``.

Examples
--------
>>> with TaskGroup(max_workers=2) as group:
...     futures = [group.spawn(pow, n, 2) for n in range(4)]
>>> [future.result() for future in futures]
[0, 1, 4, 9]
"""

from __future__ import annotations

import logging
import threading
import typing as typ
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait

from .errors import BuildCancelledError

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from types import TracebackType

T = typ.TypeVar("T")

logger = logging.getLogger(__name__)


class TaskGroup:
    """Run tasks concurrently and fail fast on the first error."""

    def __init__(
        self,
        max_workers: int | None = None,
        cancel_event: threading.Event | None = None,
    ) -> None:
        """Create a task group.

        Parameters
        ----------
        max_workers : int, optional
            Size of the thread pool; ``None`` uses the executor default.
        cancel_event : threading.Event, optional
            Event shared with the caller. Setting it stops tasks that have not
            started yet; a failing task sets it for the caller to observe.
        """
        self.max_workers = max_workers
        self.cancel_event = cancel_event or threading.Event()
        self._executor: ThreadPoolExecutor | None = None
        self._futures: list[Future[typ.Any]] = []
        self._lock = threading.Lock()
        self._error: BaseException | None = None

    @property
    def error(self) -> BaseException | None:
        """Return the first recorded task error, if any."""
        return self._error

    def __enter__(self) -> TaskGroup:
        self._executor = ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="mdsite"
        )
        return self

    def spawn(self, fn: cabc.Callable[..., T], *args: typ.Any) -> Future[T]:
        """Submit ``fn(*args)`` to the pool and return its future.

        Raises
        ------
        RuntimeError
            If called outside the ``with`` block.
        """
        if self._executor is None:
            msg = "TaskGroup.spawn() called outside of its context"
            raise RuntimeError(msg)
        future = self._executor.submit(self._guarded, fn, *args)
        future.add_done_callback(self._record)
        self._futures.append(future)
        return future

    def _guarded(self, fn: cabc.Callable[..., T], *args: typ.Any) -> T:
        if self.cancel_event.is_set():
            name = getattr(fn, "__qualname__", repr(fn))
            msg = f"build cancelled before {name} started"
            raise BuildCancelledError(msg)
        return fn(*args)

    def _record(self, future: Future[typ.Any]) -> None:
        if future.cancelled():
            return
        error = future.exception()
        if error is None:
            return
        with self._lock:
            if self._error is None:
                self._error = error
                logger.debug("task failed, cancelling group: %s", error)
        self.cancel_event.set()

    def _cancel_pending(self) -> None:
        self.cancel_event.set()
        for future in self._futures:
            future.cancel()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        executor = self._executor
        if executor is None:
            return
        try:
            if exc is not None:
                self._cancel_pending()
            else:
                done, _pending = wait(self._futures, return_when=FIRST_EXCEPTION)
                if self._error is not None or any(
                    not f.cancelled() and f.exception() is not None for f in done
                ):
                    self._cancel_pending()
        except BaseException:
            self._cancel_pending()
            raise
        finally:
            executor.shutdown(wait=True, cancel_futures=True)
            self._executor = None
        if exc is None and self._error is not None:
            raise self._error


__all__ = ["TaskGroup"]
