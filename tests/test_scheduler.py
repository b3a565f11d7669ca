from __future__ import annotations

import asyncio

import pytest

from site_fetch.crawler.scheduler import TaskQueue


@pytest.mark.asyncio()
async def test_runs_all_submitted_tasks():
    queue = TaskQueue(concurrency=2)
    done: list[int] = []

    def make(i: int):
        async def task() -> None:
            await asyncio.sleep(0)
            done.append(i)
        return task

    for i in range(5):
        queue.submit(make(i))
    await queue.run_until_idle()

    assert sorted(done) == [0, 1, 2, 3, 4]


@pytest.mark.asyncio()
async def test_idle_with_nothing_submitted():
    queue = TaskQueue(concurrency=3)
    await asyncio.wait_for(queue.run_until_idle(), timeout=1.0)


@pytest.mark.asyncio()
async def test_waits_for_dynamic_fan_out():
    """Tasks submitted by running tasks are part of the same run."""
    queue = TaskQueue(concurrency=2)
    visited: list[int] = []

    def node(depth: int):
        async def task() -> None:
            await asyncio.sleep(0.01)
            visited.append(depth)
            if depth < 3:
                queue.submit(node(depth + 1))
                queue.submit(node(depth + 1))
        return task

    queue.submit(node(0))
    await queue.run_until_idle()

    # 1 + 2 + 4 + 8 tasks
    assert len(visited) == 15
    assert visited.count(3) == 8


@pytest.mark.asyncio()
async def test_concurrency_cap():
    queue = TaskQueue(concurrency=3)
    active = 0
    peak = 0

    async def task() -> None:
        nonlocal active, peak
        active += 1
        peak = max(peak, active)
        await asyncio.sleep(0.02)
        active -= 1

    for _ in range(10):
        queue.submit(task)
    await queue.run_until_idle()

    assert peak == 3


@pytest.mark.asyncio()
async def test_start_order_is_fifo():
    queue = TaskQueue(concurrency=1)
    started: list[str] = []

    def make(name: str):
        async def task() -> None:
            started.append(name)
            await asyncio.sleep(0)
        return task

    for name in "abcd":
        queue.submit(make(name))
    await queue.run_until_idle()

    assert started == list("abcd")


@pytest.mark.asyncio()
async def test_failing_task_is_isolated():
    queue = TaskQueue(concurrency=2)
    done: list[str] = []

    async def boom() -> None:
        raise RuntimeError("boom")

    async def ok() -> None:
        await asyncio.sleep(0.01)
        done.append("ok")

    queue.submit(boom)
    queue.submit(ok)
    queue.submit(ok)
    await queue.run_until_idle()

    assert done == ["ok", "ok"]
    assert queue.failed == 1


def test_rejects_non_positive_concurrency():
    with pytest.raises(ValueError):
        TaskQueue(concurrency=0)
