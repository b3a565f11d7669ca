"""
Bounded-concurrency task queue with dynamic fan-out.
"""
from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, List, Optional

from site_fetch.logger import get_logger

Task = Callable[[], Awaitable[None]]


class TaskQueue:
    """
    FIFO queue of zero-argument coroutine functions, run by ``concurrency`` workers.

    The queue's unfinished-task counter is the outstanding-work counter: it
    only drops when a task has finished running, so :meth:`run_until_idle`
    also waits for tasks that are in flight and may still submit more work.
    A failing task is logged and does not affect its siblings.
    """

    def __init__(self, concurrency: int) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        self.concurrency = concurrency
        self.logger = get_logger("scheduler")
        self._queue: Optional[asyncio.Queue[Task]] = None
        self._pending: List[Task] = []
        self.failed = 0

    def submit(self, task: Task) -> None:
        """Enqueue *task*; never suspends."""
        if self._queue is None:
            self._pending.append(task)
        else:
            self._queue.put_nowait(task)

    async def run_until_idle(self) -> None:
        """Run workers until nothing is queued or executing."""
        queue: asyncio.Queue[Task] = asyncio.Queue()
        for task in self._pending:
            queue.put_nowait(task)
        self._pending.clear()
        self._queue = queue
        workers = [asyncio.create_task(self._worker(queue)) for _ in range(self.concurrency)]
        try:
            await queue.join()
        finally:
            for w in workers:
                w.cancel()
            await asyncio.gather(*workers, return_exceptions=True)
            self._queue = None

    async def _worker(self, queue: asyncio.Queue[Task]) -> None:
        while True:
            task = await queue.get()
            try:
                await task()
            except asyncio.CancelledError:
                raise
            except Exception:
                self.failed += 1
                self.logger.exception("Task failed")
            finally:
                queue.task_done()
