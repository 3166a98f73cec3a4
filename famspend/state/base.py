"""Shared lifecycle for client-side read models.

A read model is mounted, loads asynchronously, is replaced wholesale on every
refetch and is discarded on unmount. Each async read captures ``token`` before
its first await and commits through ``_commit``; a commit whose token no longer
matches (the model was unmounted, or remounted) is dropped. Network calls are
never aborted, only their results are ignored.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Coroutine

logger = logging.getLogger(__name__)


class ReadModel:
    def __init__(self) -> None:
        self._generation = 0
        self._mounted = False
        self._listeners: list[Callable[[], None]] = []
        self._tasks: set[asyncio.Task] = set()

    @property
    def mounted(self) -> bool:
        return self._mounted

    @property
    def token(self) -> int:
        return self._generation

    def is_current(self, token: int) -> bool:
        return self._mounted and token == self._generation

    async def mount(self) -> None:
        self._generation += 1
        self._mounted = True
        await self._on_mount()

    def unmount(self) -> None:
        if not self._mounted:
            return
        self._mounted = False
        self._generation += 1
        self._on_unmount()

    async def _on_mount(self) -> None:
        pass

    def _on_unmount(self) -> None:
        pass

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, token: int, **changes: Any) -> bool:
        if not self.is_current(token):
            logger.debug(f"{type(self).__name__}: dropped stale write {sorted(changes)}")
            return False
        for name, value in changes.items():
            setattr(self, name, value)
        for listener in list(self._listeners):
            listener()
        return True

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def settle(self) -> None:
        """Wait for background reloads started by change notifications."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))
