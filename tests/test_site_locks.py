import asyncio

import pytest

from heritage_folders.services.site_locks import SiteLockRegistry


def test_one_lock_per_site():
    locks = SiteLockRegistry()

    assert locks.get_lock(1) is locks.get_lock(1)
    assert locks.get_lock(1) is not locks.get_lock(2)
    assert len(locks) == 2


def test_registry_grows_only_with_new_sites():
    locks = SiteLockRegistry()

    for _ in range(50):
        for site_id in (1, 2, 3):
            locks.get_lock(site_id)

    assert len(locks) == 3


@pytest.mark.asyncio
async def test_same_site_writers_do_not_interleave():
    locks = SiteLockRegistry()
    events = []

    async def writer(name):
        async with locks.hold(1):
            events.append(f"{name}-start")
            await asyncio.sleep(0)
            events.append(f"{name}-end")

    await asyncio.gather(writer("a"), writer("b"))

    assert events == ["a-start", "a-end", "b-start", "b-end"]


@pytest.mark.asyncio
async def test_different_sites_do_not_contend():
    locks = SiteLockRegistry()
    entered = asyncio.Event()

    async def holder():
        async with locks.hold(1):
            await entered.wait()

    task = asyncio.create_task(holder())
    await asyncio.sleep(0)

    async with locks.hold(2):
        entered.set()
    await asyncio.wait_for(task, timeout=1)
