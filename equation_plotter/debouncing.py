"""Latest-call debouncing for pan/zoom driven resampling."""

from __future__ import annotations

import asyncio
import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple

logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


@dataclass
class _PendingCall:
    args: Tuple[Any, ...]
    kwargs: dict[str, Any]


class Debouncer:
    """Collapse bursts of calls into one delayed call with the latest arguments.

    Plotly emits a relayout event for every intermediate axis range while the
    user drags; resampling for each of them is wasted work. A ``Debouncer``
    remembers only the most recent call and runs it ``delay_ms`` after the
    first call of the burst.

    The timer is scheduled on the running asyncio loop when there is one (a
    notebook kernel) and on a daemon ``threading.Timer`` otherwise. A failing
    callback is logged and does not prevent later calls.

    Parameters
    ----------
    callback:
        Callable to execute with the latest arguments.
    delay_ms:
        Delay in milliseconds between the first call of a burst and execution.
    """

    def __init__(self, callback: Callable[..., Any], *, delay_ms: int) -> None:
        if delay_ms <= 0:
            raise ValueError("delay_ms must be > 0")
        self._callback = callback
        self._delay_s = delay_ms / 1000.0

        self._pending: Optional[_PendingCall] = None
        self._lock = threading.Lock()
        self._timer: Optional[Any] = None

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        with self._lock:
            self._pending = _PendingCall(args=args, kwargs=dict(kwargs))
            if self._timer is None:
                self._schedule_locked()

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._pending is not None

    def _schedule_locked(self) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            timer = threading.Timer(self._delay_s, self.flush)
            timer.daemon = True
            self._timer = timer
            timer.start()
            return

        self._timer = loop.call_later(self._delay_s, self.flush)

    def cancel(self) -> None:
        """Drop the pending call, if any."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._pending = None

    def flush(self) -> None:
        """Run the pending call now (no-op when nothing is pending)."""
        with self._lock:
            self._timer = None
            call, self._pending = self._pending, None

        if call is None:
            return
        try:
            self._callback(*call.args, **call.kwargs)
        except Exception:
            logger.exception("Debouncer callback failed")


__all__ = ["Debouncer"]
