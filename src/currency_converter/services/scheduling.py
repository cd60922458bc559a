"""Cancellable timers and tracked background tasks for event-driven controllers."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Coroutine
from typing import Any

from currency_converter.logging_config import get_logger

logger = get_logger(__name__)


class TaskTracker:
    """Keeps strong references to spawned tasks so they can be joined or cancelled."""

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task[Any]] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def spawn(
        self, coro: Coroutine[Any, Any, Any], *, name: str | None = None
    ) -> asyncio.Task[Any]:
        task = asyncio.get_running_loop().create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "background_task_failed",
                task=task.get_name(),
                error=str(exc),
                exc_info=exc,
            )

    def cancel_all(self) -> None:
        for task in list(self._tasks):
            task.cancel()

    async def join(self) -> None:
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)


class SingleSlotTimer:
    """A timer with room for one pending fire.

    Arming replaces any pending fire. Only the pending handle is cancelled:
    a callback that already fired keeps running as a tracked task.
    """

    def __init__(
        self,
        tracker: TaskTracker,
        delay: float,
        callback: Callable[[], Awaitable[None]],
        *,
        name: str,
    ) -> None:
        self._tracker = tracker
        self._callback = callback
        self.delay = delay
        self.name = name
        self._handle: asyncio.TimerHandle | None = None

    @property
    def armed(self) -> bool:
        return self._handle is not None

    @property
    def remaining(self) -> float:
        if self._handle is None:
            return 0.0
        return max(self._handle.when() - asyncio.get_running_loop().time(), 0.0)

    def arm(self) -> None:
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        self._tracker.spawn(self._run(), name=self.name)

    async def _run(self) -> None:
        await self._callback()
