"""
Store for Item persistence.
All SQL for the `items` table lives here.

SQLite work runs on a single dedicated worker thread, so disk I/O never
blocks the event loop and no two mutations ever interleave.
"""
import asyncio
import logging
import sqlite3
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional, TypeVar

from inventory.core.logging_config import log_db_timing
from inventory.db.database import get_connection, get_db, init_db, resolve_db_path
from inventory.db.live_query import InvalidationTracker, LiveQuery
from inventory.models.item import Item

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ItemStore:
    def __init__(self, db_path: Optional[str] = None) -> None:
        self._db_path = db_path or resolve_db_path()
        logger.trace("Initializing ItemStore path=%s", self._db_path)
        self._executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="item-store"
        )
        self._conn: Optional[sqlite3.Connection] = None
        self._closed = threading.Event()
        self._tracker = InvalidationTracker(self._run)

    @property
    def db_path(self) -> str:
        return self._db_path

    @property
    def active_subscriptions(self) -> int:
        return self._tracker.subscription_count

    # ------------------------------------------------------------------
    # Worker plumbing
    # ------------------------------------------------------------------

    def _connection(self) -> sqlite3.Connection:
        # Only ever called on the worker thread
        if self._conn is None:
            self._conn = get_connection(self._db_path)
            init_db(self._conn)
        return self._conn

    async def _run(self, func: Callable[[sqlite3.Connection], T]) -> T:
        if self._closed.is_set():
            raise RuntimeError("ItemStore is closed")
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            self._executor, lambda: func(self._connection())
        )

    def close(self) -> None:
        """Stop the worker thread and close the connection."""
        if self._closed.is_set():
            return
        self._closed.set()
        logger.info("Closing ItemStore path=%s", self._db_path)
        self._executor.submit(self._close_connection)
        self._executor.shutdown(wait=True)

    def _close_connection(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    # ------------------------------------------------------------------
    # Read (live)
    # ------------------------------------------------------------------

    def get_item(self, item_id: int) -> LiveQuery[Optional[Item]]:
        """Live view of one row; emits ``None`` while the row is absent."""
        return LiveQuery(
            self._tracker,
            lambda conn: self._select_by_id(conn, item_id),
            f"items[id={item_id}]",
        )

    def get_all_items(self) -> LiveQuery[list[Item]]:
        """Live view of every row, ordered by name ascending."""
        return LiveQuery(self._tracker, self._select_all, "items[*]")

    @log_db_timing
    def _select_by_id(self, conn: sqlite3.Connection, item_id: int) -> Optional[Item]:
        row = conn.execute(
            "SELECT * FROM items WHERE id = ?", (item_id,)
        ).fetchone()
        return Item.from_row(row) if row else None

    @log_db_timing
    def _select_all(self, conn: sqlite3.Connection) -> list[Item]:
        rows = conn.execute("SELECT * FROM items ORDER BY name ASC").fetchall()
        return [Item.from_row(r) for r in rows]

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def insert(self, item: Item) -> Optional[int]:
        """
        Insert ``item``; an id of 0 lets SQLite assign one.
        A row with the same id is left untouched and ``None`` is returned.
        """
        async with self._tracker.write():
            item_id = await self._run(lambda conn: self._insert(conn, item))
        if item_id is None:
            logger.warning("Item id=%s already exists, insert ignored", item.id)
        else:
            logger.info("Item inserted id=%s", item_id)
        return item_id

    async def update(self, item: Item) -> int:
        """Overwrite the row matching ``item.id``. Returns rows affected."""
        async with self._tracker.write():
            count = await self._run(lambda conn: self._update(conn, item))
        if count:
            logger.info("Item updated id=%s", item.id)
        else:
            logger.warning("Item id=%s not found for update", item.id)
        return count

    async def delete(self, item: Item) -> int:
        """Remove the row matching ``item.id``. Returns rows affected."""
        async with self._tracker.write():
            count = await self._run(lambda conn: self._delete(conn, item))
        if count:
            logger.info("Item deleted id=%s", item.id)
        else:
            logger.warning("Item id=%s not found for deletion", item.id)
        return count

    @log_db_timing
    def _insert(self, conn: sqlite3.Connection, item: Item) -> Optional[int]:
        with get_db(conn):
            cursor = conn.execute(
                """
                INSERT OR IGNORE INTO items (id, name, price, quantity)
                VALUES (?, ?, ?, ?)
                """,
                (item.id or None, item.name, item.price, item.quantity),
            )
        return cursor.lastrowid if cursor.rowcount > 0 else None

    @log_db_timing
    def _update(self, conn: sqlite3.Connection, item: Item) -> int:
        with get_db(conn):
            cursor = conn.execute(
                "UPDATE items SET name = ?, price = ?, quantity = ? WHERE id = ?",
                (item.name, item.price, item.quantity, item.id),
            )
        return cursor.rowcount

    @log_db_timing
    def _delete(self, conn: sqlite3.Connection, item: Item) -> int:
        with get_db(conn):
            cursor = conn.execute("DELETE FROM items WHERE id = ?", (item.id,))
        return cursor.rowcount
