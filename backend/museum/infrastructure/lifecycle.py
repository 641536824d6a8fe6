"""Lifecycle Scope — owner of background tasks, cancelled as one unit.

Invariants:
    - launch() on a closed scope raises ScopeClosedError and never schedules the coroutine
    - close() cancels outstanding tasks in reverse launch order, awaiting each
      before cancelling the next (deterministic teardown)
    - close() is idempotent
    - A task failing with an exception is logged, never silently dropped

Design Decisions:
    - Explicit scope objects passed to components instead of implicit context:
      whoever owns the UI surface (or the process) owns the scope
"""

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

from museum.core.errors import ScopeClosedError

logger = logging.getLogger(__name__)


class LifecycleScope:
    """Tracks tasks launched on behalf of one owner."""

    def __init__(self, name: str = "scope"):
        self.name = name
        self._tasks: list[asyncio.Task] = []
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def active_tasks(self) -> list[asyncio.Task]:
        return [t for t in self._tasks if not t.done()]

    def launch(
        self, coro: Coroutine[Any, Any, Any], name: str | None = None,
    ) -> asyncio.Task:
        """Schedule coro on the running loop, bound to this scope."""
        if self._closed:
            coro.close()
            raise ScopeClosedError(self.name)
        task = asyncio.create_task(coro, name=name)
        self._tasks.append(task)
        task.add_done_callback(self._on_task_done)
        return task

    async def close(self) -> None:
        """Cancel and await every outstanding task, newest first."""
        if self._closed:
            return
        self._closed = True
        for task in reversed(list(self._tasks)):
            if not task.done():
                task.cancel()
            await asyncio.gather(task, return_exceptions=True)
        self._tasks.clear()
        logger.debug("Scope %s closed", self.name)

    def _on_task_done(self, task: asyncio.Task) -> None:
        if task in self._tasks:
            self._tasks.remove(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "Task %s failed in scope %s", task.get_name(), self.name,
                exc_info=exc,
            )
