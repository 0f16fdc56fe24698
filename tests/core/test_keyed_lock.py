"""Tests for KeyedLock: per-key mutual exclusion and idle cleanup."""

import asyncio

from tasklist.core.keyed_lock import KeyedLock


async def test_same_key_critical_sections_never_overlap():
    locks = KeyedLock()
    inside = 0
    peak = 0

    async def worker():
        nonlocal inside, peak
        async with locks.hold(("alice", "2026-03-14")):
            inside += 1
            peak = max(peak, inside)
            await asyncio.sleep(0)
            await asyncio.sleep(0)
            inside -= 1

    await asyncio.gather(*(worker() for _ in range(20)))
    assert peak == 1


async def test_different_keys_run_concurrently():
    locks = KeyedLock()
    both_inside = asyncio.Event()
    entered = 0

    async def worker(key):
        nonlocal entered
        async with locks.hold(key):
            entered += 1
            if entered == 2:
                both_inside.set()
            await asyncio.wait_for(both_inside.wait(), timeout=1)

    await asyncio.gather(worker("alice"), worker("bob"))
    assert both_inside.is_set()


async def test_idle_keys_are_dropped():
    locks = KeyedLock()
    async with locks.hold("alice"):
        assert len(locks) == 1
    assert len(locks) == 0


async def test_entry_dropped_after_exception():
    locks = KeyedLock()
    try:
        async with locks.hold("alice"):
            raise RuntimeError("boom")
    except RuntimeError:
        pass
    assert len(locks) == 0
