"""Loads the indirect objects of a document in the background.

Reading the cross-reference table of a large document takes a while, so the
object store is populated on a background thread while the foreground keeps
serving the shell.  Progress reports and the final hand-over of the store are
marshalled onto the foreground through a dispatcher, so the store is never
touched from both sides at once.  Only one load may run at a time per
:class:`LoadCoordinator`.
"""

from __future__ import annotations

import queue
import threading
import time
from enum import Enum
from functools import partial
from typing import Callable, Protocol

from .core.exceptions import LoadCancelledError
from .core.progress import NullProgress, ProgressSink
from .core.reader import ObjectReader
from .core.store import ObjectStore, populate_store
from .core.utils import get_logger

__all__ = [
    "Dispatcher",
    "ForegroundQueue",
    "ForegroundProgress",
    "StoreConsumer",
    "LoadState",
    "LoadCoordinator",
]

LOGGER = get_logger(__name__)

Dispatcher = Callable[[Callable[[], None]], None]


class ForegroundQueue:
    """FIFO of callbacks executed by whichever thread drains it."""

    def __init__(self) -> None:
        self._queue: queue.Queue[Callable[[], None]] = queue.Queue()

    def post(self, callback: Callable[[], None]) -> None:
        self._queue.put(callback)

    def process_pending(self, timeout: float | None = None) -> int:
        """Run queued callbacks on the calling thread.

        Waits up to ``timeout`` seconds for the first callback (no wait when
        ``timeout`` is ``None``) and returns the number of callbacks run.
        """

        try:
            if timeout is None:
                callback = self._queue.get_nowait()
            else:
                callback = self._queue.get(timeout=timeout)
        except queue.Empty:
            return 0
        processed = 0
        while True:
            callback()
            processed += 1
            try:
                callback = self._queue.get_nowait()
            except queue.Empty:
                return processed

    def run_until(
        self,
        predicate: Callable[[], bool],
        timeout: float | None = None,
        *,
        interval: float = 0.05,
    ) -> bool:
        """Drain the queue until ``predicate()`` holds or ``timeout`` expires."""

        deadline = None if timeout is None else time.monotonic() + timeout
        while not predicate():
            wait = interval
            if deadline is not None:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    return predicate()
                wait = min(interval, remaining)
            self.process_pending(timeout=wait)
        return True

    def __len__(self) -> int:
        return self._queue.qsize()


class ForegroundProgress:
    """Forwards progress reports to ``sink`` through ``dispatcher``."""

    def __init__(self, sink: ProgressSink, dispatcher: Dispatcher) -> None:
        self._sink = sink
        self._dispatcher = dispatcher

    def set_total(self, total: int) -> None:
        self._dispatcher(partial(self._sink.set_total, total))

    def set_value(self, value: int) -> None:
        self._dispatcher(partial(self._sink.set_value, value))

    def set_message(self, message: str) -> None:
        self._dispatcher(partial(self._sink.set_message, message))

    def close(self) -> None:
        self._dispatcher(self._sink.close)


class StoreConsumer(Protocol):
    """Receives the outcome of a load on the foreground."""

    def update(self, store: ObjectStore) -> None:
        ...

    def load_failed(self, error: Exception) -> None:
        ...


class LoadState(Enum):
    IDLE = "idle"
    LOADING = "loading"


class LoadCoordinator:
    """Runs at most one document load at a time.

    ``dispatcher`` runs a callable on the foreground (for instance
    :meth:`ForegroundQueue.post`); ``progress_factory`` creates the progress
    indicator for each load.
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        progress_factory: Callable[[], ProgressSink] = NullProgress,
    ) -> None:
        self._dispatcher = dispatcher
        self._progress_factory = progress_factory
        self._lock = threading.Lock()
        self._state = LoadState.IDLE
        self._cancel_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def state(self) -> LoadState:
        with self._lock:
            return self._state

    @property
    def is_busy(self) -> bool:
        return self.state is LoadState.LOADING

    def load_document(self, target: StoreConsumer, reader: ObjectReader) -> bool:
        """Start loading ``reader`` into a new store for ``target``.

        Returns ``False`` without doing anything when a load is already in
        progress, ``True`` once the background load has been started.
        """

        with self._lock:
            if self._state is LoadState.LOADING:
                LOGGER.info("Load rejected: another document is still loading")
                return False
            self._state = LoadState.LOADING
            self._cancel_event = threading.Event()
            cancel_event = self._cancel_event

        try:
            progress = self._progress_factory()
            thread = threading.Thread(
                target=self._run,
                args=(target, reader, progress, cancel_event),
                name="pdfinspect-loader",
                daemon=True,
            )
            self._thread = thread
            thread.start()
        except BaseException:
            self._set_idle()
            raise
        LOGGER.info("Started loading document in the background")
        return True

    def cancel(self) -> bool:
        """Ask the running load to stop; returns ``False`` when idle."""

        with self._lock:
            if self._state is not LoadState.LOADING:
                return False
            self._cancel_event.set()
        LOGGER.info("Cancellation requested")
        return True

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the background part of the current load has ended."""

        thread = self._thread
        if thread is None:
            return True
        thread.join(timeout)
        return not thread.is_alive()

    def _run(
        self,
        target: StoreConsumer,
        reader: ObjectReader,
        progress: ProgressSink,
        cancel_event: threading.Event,
    ) -> None:
        store: ObjectStore | None = None
        error: Exception | None = None
        try:
            store = populate_store(
                ObjectStore(reader),
                ForegroundProgress(progress, self._dispatcher),
                cancel_event,
            )
        except LoadCancelledError as exc:
            LOGGER.info("Loading cancelled")
            error = exc
        except Exception as exc:
            LOGGER.error("Loading failed: %s", exc)
            store = None
            error = exc
        finally:
            self._dispatcher(partial(self._finish, target, progress, store, error))

    def _finish(
        self,
        target: StoreConsumer,
        progress: ProgressSink,
        store: ObjectStore | None,
        error: Exception | None,
    ) -> None:
        try:
            progress.set_message("Updating viewer")
            if error is None and store is not None:
                target.update(store)
            else:
                self._report_failure(target, error)
        except Exception:
            LOGGER.exception("Viewer update failed")
            raise
        finally:
            try:
                progress.close()
            finally:
                self._set_idle()

    @staticmethod
    def _report_failure(target: StoreConsumer, error: Exception | None) -> None:
        handler = getattr(target, "load_failed", None)
        if handler is None:
            LOGGER.error("No failure handler on %r for: %s", target, error)
            return
        handler(error)

    def _set_idle(self) -> None:
        with self._lock:
            self._state = LoadState.IDLE
