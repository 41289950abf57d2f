"""Latest-request-wins sequencing for re-issued renders.

Interactive callers re-render on every keystroke. A slow render for old text
must never overwrite the result of a newer one, so every request gets a
monotonically increasing id and only the highest id seen is ever applied.

Example:
    >>> sequencer = RenderSequencer(on_result=show)
    >>> sequencer.submit(converter.render, text, font)
"""

from __future__ import annotations

import concurrent.futures
import logging
import threading
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class RenderSequencer:
    """Issue request ids and accept only the most recent outcome."""

    def __init__(self, max_workers: int = 1, on_result: Callable[[int, Any], None] | None = None) -> None:
        self._lock = threading.Lock()
        self._issued = 0
        self._applied = 0
        self._latest: Any = None
        self._pending: dict[int, concurrent.futures.Future] = {}
        self._executor = concurrent.futures.ThreadPoolExecutor(max_workers=max_workers)
        self._on_result = on_result

    def issue(self) -> int:
        with self._lock:
            self._issued += 1
            return self._issued

    @property
    def current_id(self) -> int:
        return self._issued

    @property
    def latest(self) -> Any:
        """The last accepted outcome, or None."""
        return self._latest

    def accept(self, request_id: int, outcome: Any) -> bool:
        """Apply ``outcome`` if ``request_id`` is the newest request issued.

        Returns:
            True if the outcome was applied, False if it is stale.
        """
        with self._lock:
            if request_id != self._issued or request_id <= self._applied:
                logger.debug("Discarding stale render %d (latest is %d)", request_id, self._issued)
                return False
            self._applied = request_id
            self._latest = outcome
        if self._on_result is not None:
            self._on_result(request_id, outcome)
        return True

    def submit(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> tuple[int, concurrent.futures.Future]:
        """Run ``fn`` in the background as the newest request.

        Older requests that have not started yet are cancelled. The finished
        result is routed through :meth:`accept`.
        """
        request_id = self.issue()
        with self._lock:
            stale = list(self._pending.items())
        # cancel() runs done callbacks inline, and _finish takes the lock.
        for old_id, future in stale:
            if future.cancel():
                logger.debug("Cancelled pending render %d", old_id)

        future = self._executor.submit(fn, *args, **kwargs)
        with self._lock:
            self._pending[request_id] = future
        future.add_done_callback(lambda done: self._finish(request_id, done))
        return request_id, future

    def _finish(self, request_id: int, future: concurrent.futures.Future) -> None:
        with self._lock:
            self._pending.pop(request_id, None)
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            logger.warning("Render %d failed: %s", request_id, exc)
            return
        self.accept(request_id, future.result())

    def shutdown(self, wait: bool = True, cancel_pending: bool = False) -> None:
        """Stop the worker pool; queued renders still run unless ``cancel_pending``."""
        self._executor.shutdown(wait=wait, cancel_futures=cancel_pending)

    def __enter__(self) -> RenderSequencer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()
