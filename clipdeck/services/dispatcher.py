"""Fire-and-forget execution of history mutations off the GUI thread"""

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable
from loguru import logger


class TaskDispatcher:
    """Runs store mutations on a single background worker, in submission order"""

    def __init__(self, name: str = "history-worker"):
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=name)
        self._lock = threading.RLock()
        self._closed = False

        logger.info(f"TaskDispatcher initialized ({name})")

    def submit(self, task: Callable, *args, **kwargs) -> Future:
        """
        Queue a task and return immediately

        Args:
            task: Callable to run on the worker
            *args: Positional arguments for the task
            **kwargs: Keyword arguments for the task

        Returns:
            Future resolving to the task result, or None if the task failed
        """
        with self._lock:
            if self._closed:
                logger.warning(f"Dispatcher closed, dropping task {getattr(task, '__name__', task)}")
                future: Future = Future()
                future.set_result(None)
                return future

            return self._executor.submit(self._run, task, *args, **kwargs)

    @staticmethod
    def _run(task: Callable, *args, **kwargs):
        name = getattr(task, '__name__', repr(task))
        try:
            return task(*args, **kwargs)
        except Exception as e:
            logger.error(f"Background task {name} failed: {e}")
            return None

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting tasks and optionally wait for queued ones"""
        with self._lock:
            if self._closed:
                return
            self._closed = True

        self._executor.shutdown(wait=wait)
        logger.info("TaskDispatcher stopped")
