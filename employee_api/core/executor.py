"""Bounded worker pool used for asynchronous reads."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable

from .config import REJECTION_POLICIES

logger = logging.getLogger(__name__)


class TaskRejectedError(RuntimeError):
    """Raised when the pool is saturated and the policy is ``abort``."""


class BoundedExecutor:
    """ThreadPoolExecutor with a cap on running + queued submissions.

    ``core_pool_size`` threads do the work; at most ``max_pool_size +
    queue_capacity`` submissions may be in flight at once. What happens
    beyond that depends on ``rejection_policy``:

    - ``abort``: raise :class:`TaskRejectedError`
    - ``caller_runs``: run the task in the submitting thread
    - ``block``: wait until a slot frees up
    """

    def __init__(
        self,
        core_pool_size: int,
        max_pool_size: int,
        queue_capacity: int,
        *,
        rejection_policy: str = "abort",
        thread_name_prefix: str = "Async-",
    ) -> None:
        if rejection_policy not in REJECTION_POLICIES:
            raise ValueError(f"Unknown rejection policy: {rejection_policy}")
        if core_pool_size < 1 or max_pool_size < core_pool_size or queue_capacity < 0:
            raise ValueError("Invalid pool sizing")
        self.rejection_policy = rejection_policy
        self.capacity = max_pool_size + queue_capacity
        self._slots = threading.BoundedSemaphore(self.capacity)
        self._executor = ThreadPoolExecutor(max_workers=core_pool_size, thread_name_prefix=thread_name_prefix)

    def submit(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Future:
        if self.rejection_policy == "block":
            self._slots.acquire()
        elif not self._slots.acquire(blocking=False):
            if self.rejection_policy == "caller_runs":
                logger.debug("Pool saturated; running %s in caller thread", getattr(fn, "__name__", fn))
                return self._run_in_caller(fn, *args, **kwargs)
            logger.warning("Pool saturated (%d in flight); rejecting task", self.capacity)
            raise TaskRejectedError("Async executor is saturated, try again later")
        try:
            return self._executor.submit(self._run_and_release, fn, args, kwargs)
        except BaseException:
            self._slots.release()
            raise

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "BoundedExecutor":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.shutdown(wait=True)

    def _run_and_release(self, fn: Callable[..., Any], args: tuple, kwargs: dict) -> Any:
        # slot is released before the future resolves
        try:
            return fn(*args, **kwargs)
        finally:
            self._slots.release()

    @staticmethod
    def _run_in_caller(fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Future:
        future: Future = Future()
        future.set_running_or_notify_cancel()
        try:
            result = fn(*args, **kwargs)
        except Exception as exc:
            future.set_exception(exc)
        else:
            future.set_result(result)
        return future
