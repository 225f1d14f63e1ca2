"""
Live queries: query results that are re-emitted whenever the table changes.

The store owns one InvalidationTracker. Every running ``async for`` over a
LiveQuery registers a subscription in the tracker; every mutation the store
performs inside ``tracker.write()`` re-evaluates all subscriptions and hands
the newest snapshot to each subscriber before the mutation's caller resumes.
"""
from __future__ import annotations

import asyncio
import logging
import sqlite3
from contextlib import asynccontextmanager
from typing import (
    AsyncIterator,
    Awaitable,
    Callable,
    Generic,
    Optional,
    Set,
    TypeVar,
)

T = TypeVar("T")

Query = Callable[[sqlite3.Connection], T]
QueryRunner = Callable[[Query], Awaitable[object]]

logger = logging.getLogger(__name__)

_UNSET = object()


class _QueryFailure:
    __slots__ = ("error",)

    def __init__(self, error: BaseException) -> None:
        self.error = error


class Subscription:
    """One active consumer of a live query."""

    def __init__(self, query: Query, label: str) -> None:
        self.query = query
        self.label = label
        self._pending = _UNSET
        self._ready = asyncio.Event()
        self._last = _UNSET

    def offer(self, value) -> None:
        # Identical consecutive snapshots are not re-emitted
        if value == self._last:
            return
        self._last = value
        self._publish(value)

    def fail(self, error: BaseException) -> None:
        self._last = _UNSET
        self._publish(_QueryFailure(error))

    def _publish(self, value) -> None:
        # Only the newest snapshot is kept for a slow consumer
        self._pending = value
        self._ready.set()

    async def next(self):
        """Wait for and return the newest unread snapshot."""
        await self._ready.wait()
        self._ready.clear()
        value, self._pending = self._pending, _UNSET
        if isinstance(value, _QueryFailure):
            raise value.error
        return value


class InvalidationTracker:
    """Registry of active subscriptions for a single store."""

    def __init__(self, run_query: QueryRunner) -> None:
        self._run_query = run_query
        self._subscriptions: Set[Subscription] = set()
        self._lock: Optional[asyncio.Lock] = None
        self._loop_id: Optional[int] = None

    def _ensure_lock(self) -> asyncio.Lock:
        """Get or create the write lock for the current event loop."""
        loop_id = id(asyncio.get_running_loop())
        if self._lock is None or self._loop_id != loop_id:
            self._lock = asyncio.Lock()
            self._loop_id = loop_id
        return self._lock

    @property
    def subscription_count(self) -> int:
        return len(self._subscriptions)

    @asynccontextmanager
    async def write(self) -> AsyncIterator[None]:
        """Serialize a mutation and refresh every subscription after it."""
        async with self._ensure_lock():
            try:
                yield
            finally:
                # A cancelled caller may still have changed the table
                await self._refresh_all()

    async def subscribe(self, query: Query, label: str) -> Subscription:
        subscription = Subscription(query, label)
        async with self._ensure_lock():
            self._subscriptions.add(subscription)
            logger.trace(
                "Subscribed live query %s (active=%s)",
                label,
                len(self._subscriptions),
            )
            try:
                await self._evaluate(subscription)
            except BaseException:
                self._subscriptions.discard(subscription)
                raise
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        self._subscriptions.discard(subscription)
        logger.trace(
            "Unsubscribed live query %s (active=%s)",
            subscription.label,
            len(self._subscriptions),
        )

    async def _refresh_all(self) -> None:
        for subscription in list(self._subscriptions):
            await self._evaluate(subscription)

    async def _evaluate(self, subscription: Subscription) -> None:
        try:
            value = await self._run_query(subscription.query)
        except Exception as exc:
            logger.error("Live query %s failed", subscription.label, exc_info=True)
            subscription.fail(exc)
        else:
            subscription.offer(value)


class LiveQuery(Generic[T]):
    """
    An async iterable over the successive results of one query.

    Each ``async for`` opens its own subscription: the first value is the
    current result, later values follow every mutation that changes it.
    Leaving the loop or cancelling the consuming task ends the subscription.
    """

    def __init__(self, tracker: InvalidationTracker, query: Query, label: str) -> None:
        self._tracker = tracker
        self._query = query
        self.label = label

    def __aiter__(self) -> AsyncIterator[T]:
        return self._stream()

    async def _stream(self) -> AsyncIterator[T]:
        subscription = await self._tracker.subscribe(self._query, self.label)
        try:
            while True:
                yield await subscription.next()
        finally:
            self._tracker.unsubscribe(subscription)

    async def first(self, predicate: Optional[Callable[[T], bool]] = None) -> T:
        """Return the first emitted value, optionally the first matching ``predicate``."""
        stream = self._stream()
        try:
            async for value in stream:
                if predicate is None or predicate(value):
                    return value
        finally:
            await stream.aclose()
        raise RuntimeError(f"Live query {self.label} ended without a value")

    def __repr__(self) -> str:
        return f"LiveQuery({self.label!r})"
