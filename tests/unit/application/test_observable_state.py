# nosec B101

import asyncio

import pytest

from application.state import ObservableState


@pytest.mark.asyncio
async def test_changes_yield_current_then_updates():
    state = ObservableState(1)
    stream = state.changes()

    assert await anext(stream) == 1
    state.set(2)
    state.set(3)

    assert await asyncio.wait_for(anext(stream), timeout=1) == 2
    assert await asyncio.wait_for(anext(stream), timeout=1) == 3
    await stream.aclose()


@pytest.mark.asyncio
async def test_setting_equal_value_does_not_notify():
    state = ObservableState('a')
    stream = state.changes()
    await anext(stream)

    state.set('a')

    with pytest.raises(asyncio.TimeoutError):
        await asyncio.wait_for(anext(stream), timeout=0.05)


@pytest.mark.asyncio
async def test_wait_for_returns_matching_value():
    state = ObservableState(0)

    async def bump():
        for value in range(1, 5):
            await asyncio.sleep(0)
            state.set(value)

    waiter = asyncio.create_task(state.wait_for(lambda v: v >= 3))
    await bump()

    assert await asyncio.wait_for(waiter, timeout=1) == 3
    assert not state._subscribers
