"""A fixed-size pool of worker threads fed from a shared task queue."""

from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Callable, Deque

logger = logging.getLogger(__name__)


class ThreadPool:
    """Runs submitted callables on a fixed number of worker threads.

    Tasks are taken in submission order. On shutdown the workers finish
    every task already queued before they exit.
    """

    def __init__(self, num_threads: int = 4) -> None:
        self._tasks: Deque[Callable[[], object]] = deque()
        self._condition = threading.Condition()
        self._stopped = False
        self._workers = [
            threading.Thread(target=self._work, name=f"pool-worker-{n}", daemon=True)
            for n in range(num_threads)
        ]
        for worker in self._workers:
            worker.start()

    def _work(self) -> None:
        while True:
            with self._condition:
                self._condition.wait_for(lambda: self._stopped or self._tasks)
                if self._stopped and not self._tasks:
                    return
                task = self._tasks.popleft()
            try:
                task()
            except Exception:
                logger.exception("Task raised an exception")

    def enqueue(self, task: Callable[[], object]) -> None:
        """Queue a task; raises RuntimeError once the pool has been shut down."""
        with self._condition:
            if self._stopped:
                raise RuntimeError("Enqueue on stopped ThreadPool")
            self._tasks.append(task)
            self._condition.notify()

    def shutdown(self) -> None:
        """Stop accepting tasks, drain the queue and join every worker."""
        with self._condition:
            self._stopped = True
            self._condition.notify_all()
        current = threading.current_thread()
        for worker in self._workers:
            if worker is not current:
                worker.join()

    def __enter__(self) -> "ThreadPool":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()