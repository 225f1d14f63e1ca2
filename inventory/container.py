"""
Dependency container.

AppDataContainer builds the ItemStore and its repository on first access and
hands out the same instances afterwards. ``get_container()`` gives the whole
process one shared container.
"""
import logging
import threading
from abc import ABC, abstractmethod
from typing import Optional

from inventory.db.database import resolve_db_path
from inventory.repositories.item_store import ItemStore
from inventory.repositories.items_repository import ItemsRepository, OfflineItemsRepository

logger = logging.getLogger(__name__)


class AppContainer(ABC):
    """Provides the dependencies the view models need."""

    @property
    @abstractmethod
    def items_repository(self) -> ItemsRepository:
        ...


class AppDataContainer(AppContainer):
    """Container backed by the on-disk SQLite store."""

    def __init__(self, db_path: Optional[str] = None) -> None:
        self.db_path = db_path or resolve_db_path()
        self._lock = threading.Lock()
        self._item_store: Optional[ItemStore] = None
        self._items_repository: Optional[ItemsRepository] = None

    @property
    def item_store(self) -> ItemStore:
        if self._item_store is None:
            with self._lock:
                if self._item_store is None:
                    logger.info("Creating item store at %s", self.db_path)
                    self._item_store = ItemStore(self.db_path)
        return self._item_store

    @property
    def items_repository(self) -> ItemsRepository:
        if self._items_repository is None:
            store = self.item_store
            with self._lock:
                if self._items_repository is None:
                    self._items_repository = OfflineItemsRepository(store)
        return self._items_repository

    def close(self) -> None:
        with self._lock:
            store, self._item_store = self._item_store, None
            self._items_repository = None
        if store is not None:
            store.close()


_container: Optional[AppDataContainer] = None
_container_lock = threading.Lock()


def get_container() -> AppDataContainer:
    """Return the process-wide container, creating it on first call."""
    global _container
    if _container is None:
        with _container_lock:
            if _container is None:
                logger.info("Creating application container")
                _container = AppDataContainer()
    return _container


def reset_container() -> None:
    """Close and forget the process-wide container."""
    global _container
    with _container_lock:
        container, _container = _container, None
    if container is not None:
        container.close()
