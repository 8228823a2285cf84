"""Recursive mutexes, condition variables and threads with timeouts in milliseconds."""

from __future__ import annotations

import threading
from collections import deque
from typing import Any, Callable, Optional

from .errors import ErrorCode, PtkError

TIME_NO_WAIT = 0
TIME_WAIT_FOREVER = None


class Mutex:
    """A recursive mutex.

    ``lock`` takes a timeout in milliseconds: ``TIME_NO_WAIT`` (0) tries
    once, ``TIME_WAIT_FOREVER`` (None) blocks until the lock is free.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()

    def lock(self, timeout_ms: Optional[int] = TIME_WAIT_FOREVER) -> None:
        if timeout_ms is None or timeout_ms < 0:
            self._lock.acquire()
            return
        if timeout_ms == 0:
            if not self._lock.acquire(blocking=False):
                raise PtkError(ErrorCode.WOULD_BLOCK)
            return
        if not self._lock.acquire(timeout=timeout_ms / 1000):
            raise PtkError(ErrorCode.TIMEOUT)

    def unlock(self) -> None:
        try:
            self._lock.release()
        except RuntimeError as exc:
            raise PtkError(ErrorCode.CONFIGURATION_ERROR, f"cannot unlock mutex: {exc}") from exc

    def __enter__(self) -> "Mutex":
        self.lock()
        return self

    def __exit__(self, *args) -> None:
        self.unlock()


class ConditionVariable:
    """A condition variable usable with any :class:`Mutex`.

    The mutex must be held exactly once by the waiting thread.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._waiters: deque[threading.Lock] = deque()

    def signal(self) -> None:
        """Wake one waiting thread, if any."""
        with self._guard:
            if self._waiters:
                self._waiters.popleft().release()

    def wait(self, mutex: Mutex, timeout_ms: Optional[int] = TIME_WAIT_FOREVER) -> None:
        """Release ``mutex``, wait for a signal, then take ``mutex`` again.

        Raises a TIMEOUT :class:`PtkError` if no signal came in time; the
        mutex is held again in either case.
        """
        if mutex is None:
            raise PtkError(ErrorCode.NULL_PTR, "no mutex given")
        waiter = threading.Lock()
        waiter.acquire()
        with self._guard:
            self._waiters.append(waiter)
        mutex.unlock()
        signalled = False
        try:
            if timeout_ms is None or timeout_ms < 0:
                signalled = waiter.acquire()
            else:
                signalled = waiter.acquire(timeout=timeout_ms / 1000)
        finally:
            mutex.lock()
            if not signalled:
                with self._guard:
                    try:
                        self._waiters.remove(waiter)
                    except ValueError:
                        signalled = True
        if not signalled:
            raise PtkError(ErrorCode.TIMEOUT)


class Thread:
    """A thread that starts at once and runs ``func(data)``."""

    def __init__(self, func: Callable[[Any], Any], data: Any = None) -> None:
        if func is None or not callable(func):
            raise PtkError(ErrorCode.NULL_PTR, "no thread function given")
        self._thread = threading.Thread(target=func, args=(data,))
        try:
            self._thread.start()
        except RuntimeError as exc:
            raise PtkError(ErrorCode.NO_RESOURCES, f"cannot start thread: {exc}") from exc

    @property
    def alive(self) -> bool:
        return self._thread.is_alive()

    def join(self) -> None:
        """Wait for the thread to finish."""
        self._thread.join()