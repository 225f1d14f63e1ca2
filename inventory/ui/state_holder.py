"""
Base class for per-screen state holders.

A ViewModel owns an immutable UI state snapshot, publishes each new snapshot
to listeners, and owns the asyncio tasks that feed it from live queries.
Closing the view model cancels those tasks, which ends their subscriptions.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Coroutine, Generic, List, Optional, Set, Tuple, TypeVar

S = TypeVar("S")

Listener = Callable[[S], None]

logger = logging.getLogger(__name__)


class ViewModel(Generic[S]):
    def __init__(self, initial_state: S) -> None:
        self._state = initial_state
        self._listeners: List[Listener] = []
        self._tasks: Set[asyncio.Task] = set()
        self._waiters: List[Tuple[Callable[[S], bool], asyncio.Future]] = []
        self._closed = False

    @property
    def ui_state(self) -> S:
        return self._state

    @property
    def closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------------
    # State publication
    # ------------------------------------------------------------------

    def _set_state(self, state: S) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)
        pending = []
        for predicate, future in self._waiters:
            if future.done():
                continue
            if predicate(state):
                future.set_result(state)
            else:
                pending.append((predicate, future))
        self._waiters = pending

    def add_listener(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with every new state; returns a remover."""
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    async def wait_for(
        self,
        predicate: Callable[[S], bool],
        timeout: Optional[float] = None,
    ) -> S:
        """Wait until the state satisfies ``predicate`` and return it."""
        if predicate(self._state):
            return self._state
        future: asyncio.Future = asyncio.get_running_loop().create_future()
        self._waiters.append((predicate, future))
        return await asyncio.wait_for(future, timeout)

    # ------------------------------------------------------------------
    # Task scope
    # ------------------------------------------------------------------

    def launch(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task:
        """Run ``coro`` for as long as this view model is open."""
        if self._closed:
            raise RuntimeError(f"{type(self).__name__} is closed")
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is None:
            return
        logger.error(
            "%s background task failed", type(self).__name__, exc_info=error
        )
        # Surface the failure to anyone waiting on state
        for _, future in self._waiters:
            if not future.done():
                future.set_exception(error)
        self._waiters = []

    def close(self) -> None:
        """Cancel every subscription this view model owns."""
        if self._closed:
            return
        self._closed = True
        logger.trace("Closing %s (%s tasks)", type(self).__name__, len(self._tasks))
        for task in list(self._tasks):
            task.cancel()
        for _, future in self._waiters:
            future.cancel()
        self._waiters = []

    async def aclose(self) -> None:
        """Cancel like ``close`` and wait for the tasks to finish unwinding."""
        tasks = list(self._tasks)
        self.close()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
