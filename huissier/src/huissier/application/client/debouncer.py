"""
Debouncer - cancellable delayed task keyed by the latest input value.
"""

import asyncio
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar

from huissier.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class Debouncer(Generic[T]):
    """
    Run an async callback once input has been stable for a delay.

    Each schedule() cancels the in-flight task before starting a new
    one, so at most one delayed task exists and it always carries the
    latest value.
    """

    def __init__(
        self,
        delay_seconds: float,
        callback: Callable[[T], Awaitable[Any]],
    ):
        self.delay_seconds = delay_seconds
        self.callback = callback
        self._task: Optional[asyncio.Task] = None
        self._value: Optional[T] = None

    @property
    def pending(self) -> bool:
        """True while a delayed task is waiting or running."""
        return self._task is not None and not self._task.done()

    @property
    def value(self) -> Optional[T]:
        """Value carried by the most recent schedule() call."""
        return self._value

    def schedule(self, value: T) -> None:
        """Replace any pending task with one for the given value."""
        self.cancel()
        self._value = value
        self._task = asyncio.get_running_loop().create_task(self._run(value))

    def cancel(self) -> None:
        """Drop the pending task, if any."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def wait(self) -> None:
        """Wait for the pending task to finish (tests, shutdown)."""
        task = self._task
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _run(self, value: T) -> None:
        await asyncio.sleep(self.delay_seconds)
        try:
            await self.callback(value)
        except Exception as e:
            # Nobody awaits this task; report instead of losing the error
            logger.error(f"Debounced callback failed for {value!r}: {e}")
