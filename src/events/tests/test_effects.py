import asyncio

import pytest

from src.errors import BestEffortFailure
from src.events.effects import EffectLog, EffectOutcome, SideEffectRunner


async def succeed():
    await asyncio.sleep(0)


async def fail():
    raise RuntimeError("smtp down")


@pytest.mark.asyncio
async def test_spawn_records_outcomes():
    runner = SideEffectRunner(EffectLog())

    runner.spawn("ok", succeed())
    runner.spawn("broken", fail())
    await runner.drain()

    entries = {entry.name: entry for entry in runner.effect_log.entries()}
    assert entries["ok"].succeeded
    assert not entries["broken"].succeeded
    assert isinstance(entries["broken"].failure, BestEffortFailure)
    assert isinstance(entries["broken"].failure.cause, RuntimeError)


@pytest.mark.asyncio
async def test_spawn_does_not_block_caller():
    runner = SideEffectRunner(EffectLog())
    release = asyncio.Event()

    async def wait_for_release():
        await release.wait()

    task = runner.spawn("slow", wait_for_release())

    assert not task.done()
    release.set()
    await runner.drain()
    assert task.done()
    assert runner.effect_log.failures() == []


def test_effect_log_is_bounded():
    log = EffectLog(max_entries=2)
    for name in ("a", "b", "c"):
        log.record(EffectOutcome(name=name, succeeded=True))

    assert [entry.name for entry in log.entries()] == ["b", "c"]
