"""Detached background execution for publish effects.

``BackgroundRunner`` wraps a ``ThreadPoolExecutor``.  ``submit`` returns a
``Future`` immediately and the caller never waits on it; the worker logs
how the unit of work ended before the future resolves.  Nothing submitted
here can raise into the submitting thread.

There is no retry and no cancellation of running work: a failed effect
ends in its own terminal state (``error`` / ``failed`` rows).
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Any

from presswire.result import Err

logger = logging.getLogger(__name__)


class BackgroundRunner:
    """Fire-and-forget runner for effect dispatchers."""

    def __init__(self, max_workers: int = 4) -> None:
        self._pool = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="presswire-effect",
        )
        self._pending: set[Future] = set()
        self._lock = threading.Lock()

    def submit(self, name: str, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Future:
        """Start ``fn`` in the background and return its handle without waiting."""
        future = self._pool.submit(self._run, name, fn, args, kwargs)
        with self._lock:
            self._pending = {f for f in self._pending if not f.done()}
            self._pending.add(future)
        logger.debug("Submitted background effect %s", name)
        return future

    def _run(
        self,
        name: str,
        fn: Callable[..., Any],
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Any:
        try:
            result = fn(*args, **kwargs)
        except Exception as exc:
            logger.error("Background effect %s raised: %s", name, exc, exc_info=True)
            raise
        if isinstance(result, Err):
            logger.warning("Background effect %s failed: %s", name, result.describe())
        else:
            logger.info("Background effect %s completed", name)
        return result

    @property
    def pending(self) -> int:
        """Number of submitted effects that have not finished yet."""
        with self._lock:
            return sum(1 for f in self._pending if not f.done())

    def drain(self, timeout: float | None = None) -> bool:
        """Block until all submitted work finishes.

        Only for shutdown and tests; the publish path never calls this.

        Returns:
            True if everything finished within ``timeout``.
        """
        while True:
            with self._lock:
                pending = [f for f in self._pending if not f.done()]
            if not pending:
                return True
            _done, not_done = wait(pending, timeout=timeout)
            if not_done:
                return False

    def shutdown(self, wait_for_pending: bool = True) -> None:
        self._pool.shutdown(wait=wait_for_pending)
