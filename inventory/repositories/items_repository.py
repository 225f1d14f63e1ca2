"""
Repository seam between the presentation layer and the item store.

View models depend on ItemsRepository only; OfflineItemsRepository passes
every call straight through to an ItemStore.
"""
import logging
from abc import ABC, abstractmethod
from typing import Optional

from inventory.db.live_query import LiveQuery
from inventory.models.item import Item
from inventory.repositories.item_store import ItemStore

logger = logging.getLogger(__name__)


class ItemsRepository(ABC):
    """Insert, update, delete and observe Items."""

    @abstractmethod
    def get_all_items_stream(self) -> LiveQuery[list[Item]]:
        """Every item, ordered by name, re-emitted on each change."""

    @abstractmethod
    def get_item_stream(self, item_id: int) -> LiveQuery[Optional[Item]]:
        """One item by id, re-emitted on each change; ``None`` when absent."""

    @abstractmethod
    async def insert_item(self, item: Item) -> Optional[int]:
        ...

    @abstractmethod
    async def delete_item(self, item: Item) -> int:
        ...

    @abstractmethod
    async def update_item(self, item: Item) -> int:
        ...


class OfflineItemsRepository(ItemsRepository):
    def __init__(self, item_store: ItemStore) -> None:
        logger.trace("Initializing OfflineItemsRepository")
        self._store = item_store

    def get_all_items_stream(self) -> LiveQuery[list[Item]]:
        return self._store.get_all_items()

    def get_item_stream(self, item_id: int) -> LiveQuery[Optional[Item]]:
        return self._store.get_item(item_id)

    async def insert_item(self, item: Item) -> Optional[int]:
        return await self._store.insert(item)

    async def delete_item(self, item: Item) -> int:
        return await self._store.delete(item)

    async def update_item(self, item: Item) -> int:
        return await self._store.update(item)
