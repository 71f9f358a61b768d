"""
Subscription - cancellable stream of live query snapshots.

Usage:
    async with store.subscribe("messages", filters) as subscription:
        async for snapshot in subscription:
            ...

The consumer owns the subscription and must cancel it (or leave the
``async with`` block) when it no longer needs updates; otherwise the
underlying live connection stays open.

Every item is a FULL result set, so bursts are coalesced: a slow consumer
always receives the latest snapshot and never a backlog of stale ones.
push()/fail() must be called from the event loop thread; adapters that
receive updates on other threads hop over with loop.call_soon_threadsafe.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")


class Subscription(Generic[T]):
    def __init__(self, on_cancel: Optional[Callable[[], None]] = None):
        self._on_cancel = on_cancel
        self._latest: Any = None
        self._has_value = False
        self._error: Optional[BaseException] = None
        self._closed = False
        self._event = asyncio.Event()
        self._child: Optional[tuple[Subscription[Any], Callable[[Any], Any]]] = None

    @property
    def cancelled(self) -> bool:
        return self._closed

    def push(self, value: T) -> None:
        """Deliver a new full snapshot, replacing any undelivered one."""
        if self._closed:
            return
        if self._child is not None:
            child, transform = self._child
            try:
                child.push(transform(value))
            except Exception as exc:
                child.fail(exc)
            return
        self._latest = value
        self._has_value = True
        self._event.set()

    def fail(self, error: BaseException) -> None:
        """Terminate the stream with an error raised to the consumer."""
        if self._closed:
            return
        if self._child is not None:
            self._child[0].fail(error)
            return
        self._error = error
        self._event.set()

    def cancel(self) -> None:
        """Stop receiving updates and release the underlying live query."""
        if self._closed:
            return
        self._closed = True
        self._event.set()
        if self._child is not None:
            self._child[0].cancel()
        if self._on_cancel is not None:
            try:
                self._on_cancel()
            except Exception as exc:
                logger.warning(f"Error while cancelling subscription: {exc}")

    def map(self, transform: Callable[[T], U]) -> Subscription[U]:
        """Derive a subscription whose snapshots are transform(snapshot).

        Cancelling the derived subscription cancels this one.
        """
        child: Subscription[U] = Subscription(on_cancel=self.cancel)
        self._child = (child, transform)
        if self._has_value:
            value, self._latest, self._has_value = self._latest, None, False
            self.push(value)
        if self._error is not None:
            error, self._error = self._error, None
            child.fail(error)
        return child

    def __aiter__(self) -> Subscription[T]:
        return self

    async def __anext__(self) -> T:
        while True:
            if self._closed:
                raise StopAsyncIteration
            if self._has_value:
                value, self._latest, self._has_value = self._latest, None, False
                return value
            if self._error is not None:
                error = self._error
                self.cancel()
                raise error
            self._event.clear()
            await self._event.wait()

    async def next(self, timeout: Optional[float] = None) -> T:
        """Await the next snapshot, optionally bounded by a timeout."""
        if timeout is None:
            return await self.__anext__()
        return await asyncio.wait_for(self.__anext__(), timeout)

    async def __aenter__(self) -> Subscription[T]:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.cancel()
