"""Fire-and-forget task runner.

Used for work that must not delay or fail the response, such as the admin
notification sent after a subscription. Tasks are kept in a set so they are
not garbage-collected mid-flight, failures are logged from the done callback
and pending tasks are drained when the application shuts down.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Any, Coroutine

logger = logging.getLogger(__name__)


class BackgroundTaskRunner:
    """Owns detached asyncio tasks for one application instance."""

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task[Any]] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def schedule(self, coroutine: Coroutine[Any, Any, Any], *, name: str) -> asyncio.Task[Any]:
        """Start ``coroutine`` without awaiting it.

        Args:
            coroutine: Work to run on the current event loop.
            name: Label used in logs.

        Returns:
            The created task (callers normally ignore it).
        """
        task = asyncio.create_task(coroutine, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        logger.debug("background.scheduled", extra={"task_name": name, "pending": len(self._tasks)})
        return task

    def _on_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        with contextlib.suppress(asyncio.CancelledError):
            exc = task.exception()
            if exc is not None:
                logger.error(
                    "background.task_failed",
                    extra={
                        "task_name": task.get_name(),
                        "error_type": type(exc).__name__,
                        "error_msg": str(exc),
                    },
                )

    async def drain(self, timeout_seconds: float = 10.0) -> None:
        """Wait for pending tasks, cancelling whatever outlives the timeout."""
        if not self._tasks:
            return

        pending_now = list(self._tasks)
        logger.info(
            "background.drain",
            extra={"pending": len(pending_now), "timeout_s": timeout_seconds},
        )
        _, still_pending = await asyncio.wait(pending_now, timeout=timeout_seconds)
        if not still_pending:
            return

        for task in still_pending:
            task.cancel()
        await asyncio.gather(*still_pending, return_exceptions=True)
