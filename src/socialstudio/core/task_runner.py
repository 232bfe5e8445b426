# -*- coding: utf-8 -*-
"""Background task runner handing out futures for long-running operations."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Any, Callable


CompletionCallback = Callable[[str, Any], None]
ErrorCallback = Callable[[str, BaseException], None]

logger = logging.getLogger(__name__)


def completed_future(value: Any) -> Future:
    future: Future = Future()
    future.set_result(value)
    return future


def failed_future(exc: BaseException) -> Future:
    future: Future = Future()
    future.set_exception(exc)
    return future


class TaskRunner:
    """Run named tasks on a thread pool; each task resolves its future exactly once."""

    def __init__(self, max_workers: int = 4, thread_name_prefix: str = "socialstudio") -> None:
        self.max_workers = int(max_workers)
        self._executor = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix=thread_name_prefix)
        self._futures: list[Future] = []
        self._lock = threading.Lock()
        self._active = 0
        self._peak_active = 0
        self._closed = False

        self.task_completed: CompletionCallback | None = None
        self.task_failed: ErrorCallback | None = None

    def submit(self, name: str, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Future:
        """Schedule ``func`` and return its future."""
        with self._lock:
            if self._closed:
                raise RuntimeError("TaskRunner is shut down")
            future = self._executor.submit(self._run_task, name, func, args, kwargs)
            self._futures.append(future)
        return future

    def _run_task(self, name: str, func: Callable[..., Any], args: tuple, kwargs: dict) -> Any:
        with self._lock:
            self._active += 1
            self._peak_active = max(self._peak_active, self._active)
        try:
            logger.debug("Task %s started", name)
            result = func(*args, **kwargs)
        except Exception as exc:
            logger.warning("Task %s failed: %s", name, exc)
            if self.task_failed is not None:
                self.task_failed(name, exc)
            raise
        else:
            logger.debug("Task %s finished", name)
            if self.task_completed is not None:
                self.task_completed(name, result)
            return result
        finally:
            with self._lock:
                self._active = max(0, self._active - 1)

    def wait_for_all(self, timeout: float | None = None) -> None:
        futures = self._snapshot_futures()
        if futures:
            wait(futures, timeout=timeout)

    def active_tasks(self) -> int:
        with self._lock:
            return self._active

    def peak_active_tasks(self) -> int:
        with self._lock:
            return self._peak_active

    def shutdown(self, wait_for_tasks: bool = True) -> None:
        with self._lock:
            self._closed = True
        self._executor.shutdown(wait=wait_for_tasks, cancel_futures=False)

    def _snapshot_futures(self) -> list[Future]:
        with self._lock:
            return list(self._futures)
