"""Wall-clock time and process interrupt handling."""

from __future__ import annotations

import signal
import time
from typing import Callable, Optional

from .errors import ErrorCode, PtkError

_handler: Optional[Callable[[], None]] = None


def _signals() -> list[signal.Signals]:
    sigs = [signal.SIGINT, signal.SIGTERM]
    if hasattr(signal, "SIGHUP"):
        sigs.append(signal.SIGHUP)
    return sigs


def _dispatch(signum, frame) -> None:
    if _handler is not None:
        _handler()


def now_ms() -> int:
    """Milliseconds since the Unix epoch."""
    return time.time_ns() // 1_000_000


def set_interrupt_handler(handler: Optional[Callable[[], None]]) -> None:
    """Call ``handler`` on SIGINT, SIGTERM and (where present) SIGHUP.

    Passing ``None`` restores the default actions for those signals.
    """
    global _handler
    _handler = handler
    action = _dispatch if handler is not None else signal.SIG_DFL
    try:
        for sig in _signals():
            signal.signal(sig, action)
    except (ValueError, OSError) as exc:
        if handler is not None:
            raise PtkError(ErrorCode.CONFIGURATION_ERROR, f"cannot install signal handler: {exc}") from exc