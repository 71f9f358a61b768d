import asyncio

import pytest

from bookmybook.domain.exceptions import StoreError
from bookmybook.domain.ports.subscription import Subscription


def test_bursts_are_coalesced_to_latest():
    async def scenario():
        subscription: Subscription[int] = Subscription()
        for value in (1, 2, 3):
            subscription.push(value)
        return await subscription.next(timeout=1)

    assert asyncio.run(scenario()) == 3


def test_cancel_stops_iteration_and_calls_on_cancel_once():
    cancelled = []

    async def scenario():
        subscription: Subscription[int] = Subscription(on_cancel=lambda: cancelled.append(True))
        subscription.push(1)
        received = [value async for value in _take_then_cancel(subscription)]
        subscription.cancel()
        return received

    async def _take_then_cancel(subscription):
        async for value in subscription:
            yield value
            subscription.cancel()

    assert asyncio.run(scenario()) == [1]
    assert cancelled == [True]


def test_context_manager_cancels():
    cancelled = []

    async def scenario():
        async with Subscription(on_cancel=lambda: cancelled.append(True)) as subscription:
            subscription.push("a")
            assert await subscription.next(timeout=1) == "a"
        return subscription

    subscription = asyncio.run(scenario())
    assert subscription.cancelled
    assert cancelled == [True]


def test_error_is_raised_after_pending_value():
    async def scenario():
        subscription: Subscription[int] = Subscription()
        subscription.push(7)
        subscription.fail(StoreError("watch broke"))
        first = await subscription.next(timeout=1)
        with pytest.raises(StoreError):
            await subscription.next(timeout=1)
        return first, subscription.cancelled

    assert asyncio.run(scenario()) == (7, True)


def test_map_transforms_and_propagates_cancel():
    cancelled = []

    async def scenario():
        source: Subscription[list[int]] = Subscription(on_cancel=lambda: cancelled.append(True))
        source.push([3, 1, 2])
        derived = source.map(sorted)
        first = await derived.next(timeout=1)
        source.push([9, 8])
        second = await derived.next(timeout=1)
        derived.cancel()
        return first, second, source.cancelled

    assert asyncio.run(scenario()) == ([1, 2, 3], [8, 9], True)
    assert cancelled == [True]


def test_next_times_out_without_updates():
    async def scenario():
        subscription: Subscription[int] = Subscription()
        with pytest.raises(asyncio.TimeoutError):
            await subscription.next(timeout=0.01)
        subscription.push(5)
        return await subscription.next(timeout=1)

    assert asyncio.run(scenario()) == 5
