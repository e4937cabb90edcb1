import asyncio

import pytest

from rdb_autoresize.autoresizer.errors import MalformedMetricError, PreflightError
from rdb_autoresize.autoresizer.scheduler import Scheduler


@pytest.mark.asyncio
async def test_tick_runs_single_cycle():
    calls = []

    async def cycle():
        calls.append(1)

    scheduler = Scheduler(60)
    assert await scheduler.tick(cycle) is True
    assert calls == [1]
    assert scheduler.cycles_run == 1


@pytest.mark.asyncio
async def test_tick_isolates_errors():
    async def cycle():
        raise RuntimeError("boom")

    scheduler = Scheduler(60)
    assert await scheduler.tick(cycle) is False
    assert scheduler.cycles_failed == 1


@pytest.mark.asyncio
async def test_tick_propagates_fatal_errors():
    async def cycle():
        raise PreflightError("no way forward")

    with pytest.raises(PreflightError):
        await Scheduler(60).tick(cycle)


@pytest.mark.asyncio
async def test_loop_continues_after_failed_cycles():
    scheduler = Scheduler(0.01)
    calls = []

    async def cycle():
        calls.append(1)
        if len(calls) == 4:
            scheduler.stop()
        if len(calls) % 2:
            raise MalformedMetricError("bad shape")

    await asyncio.wait_for(scheduler.run(cycle), timeout=2)

    assert len(calls) == 4
    assert scheduler.cycles_failed == 2


@pytest.mark.asyncio
async def test_first_tick_is_immediate_and_stop_interrupts_wait():
    stop = asyncio.Event()
    scheduler = Scheduler(3600, stop)
    calls = []

    async def cycle():
        calls.append(1)

    task = asyncio.ensure_future(scheduler.run(cycle))
    await asyncio.sleep(0.05)
    assert calls == [1]

    stop.set()
    await asyncio.wait_for(task, timeout=1)
    assert calls == [1]


@pytest.mark.asyncio
async def test_cycles_never_overlap():
    scheduler = Scheduler(0.01)
    running = []
    overlaps = []

    async def cycle():
        if running:
            overlaps.append(1)
        running.append(1)
        await asyncio.sleep(0.03)
        running.pop()
        if scheduler.cycles_run >= 3:
            scheduler.stop()

    await asyncio.wait_for(scheduler.run(cycle), timeout=2)
    assert overlaps == []
    assert scheduler.cycles_run == 3


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        Scheduler(0)
