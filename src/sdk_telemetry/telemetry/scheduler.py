"""Debounced flush timer."""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable

from sdk_telemetry.core.constants import DEFAULT_DEBOUNCE_SECONDS
from sdk_telemetry.utils.logging import get_logger

logger = get_logger(__name__)


class DebouncedFlushScheduler:
    """Run *callback* once activity has been quiet for *delay_seconds*.

    Every :meth:`arm` cancels the outstanding timer and starts a new one,
    so the callback fires a fixed delay after the **most recent** arm.  At
    most one timer is outstanding.  There is no maximum wait: a steady
    stream of arms keeps deferring the callback.

    Args:
        callback: Async callable invoked when the timer fires.  It runs
            unconditionally; deciding whether there is work is its job.
        delay_seconds: Quiet period before the callback fires.
        loop: Event loop to schedule on.  Defaults to the running loop at
            the time of each :meth:`arm`.
    """

    def __init__(
        self,
        callback: Callable[[], Awaitable[Any]],
        delay_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        *,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._callback = callback
        self._delay = delay_seconds
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None
        self._running: set[asyncio.Task[None]] = set()

    @property
    def delay_seconds(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        """Whether a timer is currently armed."""
        return self._handle is not None

    @property
    def due_at(self) -> float | None:
        """Loop time at which the armed timer fires, or ``None``."""
        return self._handle.when() if self._handle is not None else None

    def arm(self) -> None:
        """(Re)start the timer, replacing any pending one."""
        loop = self._loop or asyncio.get_running_loop()
        if self._handle is not None:
            self._handle.cancel()
        self._handle = loop.call_later(self._delay, self._fire, loop)

    def cancel(self) -> None:
        """Disarm the pending timer, if any.  Already-fired callbacks keep running."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    async def wait_idle(self) -> None:
        """Wait for every fired callback that is still running."""
        while self._running:
            await asyncio.gather(*self._running, return_exceptions=True)

    def _fire(self, loop: asyncio.AbstractEventLoop) -> None:
        self._handle = None
        task = loop.create_task(self._run())
        self._running.add(task)
        task.add_done_callback(self._running.discard)

    async def _run(self) -> None:
        try:
            await self._callback()
        except Exception:
            logger.warning("debounced_flush_error", exc_info=True)
