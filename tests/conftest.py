"""Shared fixtures: a fresh on-disk store per test."""

import asyncio
from pathlib import Path

import pytest

from inventory.models.item import Item
from inventory.repositories.item_store import ItemStore
from inventory.repositories.items_repository import OfflineItemsRepository


@pytest.fixture
def db_path(tmp_path: Path) -> str:
    return str(tmp_path / "item_database.db")


@pytest.fixture
def store(db_path: str):
    item_store = ItemStore(db_path)
    yield item_store
    item_store.close()


@pytest.fixture
def repository(store: ItemStore) -> OfflineItemsRepository:
    return OfflineItemsRepository(store)


@pytest.fixture
def pen() -> Item:
    return Item(id=1, name="Pen", price=200.0, quantity=30)


@pytest.fixture
def game() -> Item:
    return Item(id=2, name="Game", price=100.0, quantity=20)


class StreamCollector:
    """Consumes a live query in the background and records every emission."""

    def __init__(self, stream) -> None:
        self.values: list = []
        self.error = None
        self._changed = asyncio.Event()
        self._task = asyncio.get_running_loop().create_task(self._run(stream))

    async def _run(self, stream) -> None:
        try:
            async for value in stream:
                self.values.append(value)
                self._changed.set()
        except Exception as exc:
            self.error = exc
            self._changed.set()

    @property
    def latest(self):
        return self.values[-1]

    async def wait_for_count(self, count: int, timeout: float = 5.0):
        async def _wait() -> None:
            while len(self.values) < count:
                if self.error is not None:
                    raise self.error
                self._changed.clear()
                await self._changed.wait()

        await asyncio.wait_for(_wait(), timeout)
        return self.values[count - 1]

    async def wait_for_latest(self, expected, timeout: float = 5.0):
        async def _wait() -> None:
            while not self.values or self.values[-1] != expected:
                if self.error is not None:
                    raise self.error
                self._changed.clear()
                await self._changed.wait()

        await asyncio.wait_for(_wait(), timeout)
        return self.values[-1]

    async def stop(self) -> None:
        self._task.cancel()
        await asyncio.gather(self._task, return_exceptions=True)


@pytest.fixture
async def collect():
    collectors: list[StreamCollector] = []

    def _collect(stream) -> StreamCollector:
        collector = StreamCollector(stream)
        collectors.append(collector)
        return collector

    yield _collect
    for collector in collectors:
        await collector.stop()
