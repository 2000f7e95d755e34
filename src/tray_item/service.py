"""Single-owner worker that applies units of work to the tray state."""

from __future__ import annotations

import logging
import queue
import threading
import time
from concurrent.futures import Future
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Optional, TypeVar, Union

from .clicks import ClickOutcome
from .errors import ReentrantCallError, ServiceUnavailableError
from .state import TrayRendering, TrayState

if TYPE_CHECKING:  # pragma: no cover
    from .backend import TrayBackend

LOGGER = logging.getLogger("tray_item.service")

T = TypeVar("T")
UnitOfWork = Callable[[TrayState], Any]


@dataclass
class _WorkItem:
    unit: UnitOfWork
    future: "Future[Any]"
    refresh: bool


_STOP = object()


class TrayService:
    """Own a :class:`TrayState` and apply submitted work to it serially.

    Every mutation and every icon activation runs on the worker thread, one
    at a time, in submission order. Callers on other threads interact only
    through :meth:`submit`, :meth:`call` and :meth:`activate`.
    """

    def __init__(
        self,
        state: TrayState,
        backend: "TrayBackend",
        *,
        clock: Callable[[], float] = time.monotonic,
        join_timeout: float = 2.0,
        name: str = "tray-service",
    ) -> None:
        self._state = state
        self._backend = backend
        self._clock = clock
        self._join_timeout = join_timeout
        self._name = name
        self._queue: "queue.Queue[Union[_WorkItem, object]]" = queue.Queue()
        self._lock = threading.Lock()
        self._started = False
        self._closed = False
        self._worker: Optional[threading.Thread] = None
        self._ready = threading.Event()
        self._startup_error: Optional[BaseException] = None
        self._aborted = False

    @property
    def running(self) -> bool:
        """Return whether the service accepts work."""
        with self._lock:
            return self._started and not self._closed

    @property
    def backend(self) -> "TrayBackend":
        return self._backend

    def start(self) -> None:
        """Launch the worker and wait until the backend is up."""
        with self._lock:
            if self._closed:
                raise ServiceUnavailableError("Tray service has been stopped")
            if self._started:
                return
            self._started = True
            worker = threading.Thread(target=self._run, name=self._name, daemon=True)
            self._worker = worker
        worker.start()
        self._ready.wait()
        error = self._startup_error
        if error is not None:
            with self._lock:
                self._closed = True
            worker.join(timeout=self._join_timeout)
            self._fail_pending()
            raise ServiceUnavailableError(
                f"Tray backend failed to start: {error}"
            ) from error
        with self._lock:
            closed = self._closed
        if closed:
            LOGGER.debug("Tray service %r stopped during startup", self._name)
            return
        LOGGER.info("Tray service %r started", self._name)

    def stop(self) -> None:
        """Stop accepting work, drain queued units and stop the backend."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            started = self._started
            if started:
                self._queue.put(_STOP)
        if not started:
            return
        LOGGER.info("Stopping tray service %r", self._name)
        worker = self._worker
        if worker is not None and worker is not threading.current_thread():
            worker.join(timeout=self._join_timeout)
            if worker.is_alive():
                LOGGER.warning(
                    "Tray service worker did not exit within %.1fs", self._join_timeout
                )
        try:
            self._backend.stop()
        except Exception:
            LOGGER.exception("Tray backend failed to stop cleanly")

    def submit(self, unit: UnitOfWork, *, refresh: bool = True) -> "Future[Any]":
        """Queue ``unit(state)`` for the worker and return its future.

        ``refresh`` asks the worker to redraw the tray once the unit ran.
        """
        future: "Future[Any]" = Future()
        with self._lock:
            if not self._started or self._closed:
                raise ServiceUnavailableError("Tray service is not running")
            self._queue.put(_WorkItem(unit=unit, future=future, refresh=refresh))
        return future

    def call(
        self,
        unit: Callable[[TrayState], T],
        *,
        refresh: bool = True,
        timeout: Optional[float] = None,
    ) -> T:
        """Submit ``unit`` and block until the worker has applied it."""
        if self.on_worker_thread():
            raise ReentrantCallError(
                "Blocking tray calls cannot be made from the tray service worker"
            )
        return self.submit(unit, refresh=refresh).result(timeout)

    def activate(self, now: Optional[float] = None) -> "Future[ClickOutcome]":
        """Deliver a click on the icon; the timestamp is taken immediately."""
        when = self._clock() if now is None else now
        return self.submit(lambda state: state.activate(when), refresh=False)

    def render(self) -> TrayRendering:
        """Return a rendering snapshot taken on the worker."""
        return self.call(lambda state: state.render(), refresh=False)

    def flush(self, timeout: Optional[float] = None) -> None:
        """Block until every previously submitted unit has been applied."""
        self.call(lambda state: None, refresh=False, timeout=timeout)

    def on_worker_thread(self) -> bool:
        return self._worker is not None and threading.current_thread() is self._worker

    def _run(self) -> None:
        try:
            self._backend.start(self._state.render(), self.activate)
        except Exception as exc:
            LOGGER.exception("Tray backend failed to start")
            self._startup_error = exc
            self._ready.set()
            return
        self._ready.set()
        stopped = False
        try:
            while True:
                item = self._queue.get()
                if item is _STOP:
                    stopped = True
                    break
                self._apply(item)  # type: ignore[arg-type]
        finally:
            if not stopped and not self._aborted:
                self._abort()
        LOGGER.debug("Tray service worker %r exiting", self._name)

    def _apply(self, item: _WorkItem) -> None:
        if not item.future.set_running_or_notify_cancel():
            return
        error: Optional[BaseException] = None
        result: Any = None
        try:
            result = item.unit(self._state)
        except Exception as exc:
            LOGGER.exception("Unhandled exception in tray unit of work")
            error = exc
        except BaseException:
            self._abort()
            item.future.set_exception(
                ServiceUnavailableError("Tray service worker exited while applying work")
            )
            raise
        if item.refresh:
            self._refresh()
        if error is not None:
            item.future.set_exception(error)
        else:
            item.future.set_result(result)

    def _refresh(self) -> None:
        try:
            self._backend.refresh(self._state.render())
        except Exception:
            LOGGER.exception("Tray backend failed to refresh")

    def _close(self) -> None:
        with self._lock:
            self._closed = True

    def _abort(self) -> None:
        self._aborted = True
        LOGGER.error("Tray service worker %r exited unexpectedly", self._name)
        self._close()
        self._fail_pending()
        try:
            self._backend.stop()
        except Exception:
            LOGGER.exception("Tray backend failed to stop cleanly")

    def _fail_pending(self) -> None:
        while True:
            try:
                item = self._queue.get_nowait()
            except queue.Empty:
                return
            if isinstance(item, _WorkItem) and item.future.set_running_or_notify_cancel():
                item.future.set_exception(
                    ServiceUnavailableError("Tray service stopped before applying work")
                )
