"""
Tracura - Trailing-Edge Debouncer

Coalesces rapid calls into one: each call cancels the pending one, waits for
a quiet period and only then runs. Results that arrive after a newer call
(or a cancel) are discarded.
"""
import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Debouncer:
    """
    Cancellable trailing-edge debounce for coroutine functions.

    Must be used from a running event loop.
    """

    def __init__(self, delay_seconds: float):
        """
        Initialize Debouncer.

        Args:
            delay_seconds: Quiet period before the call runs
        """
        if delay_seconds < 0:
            raise ValueError(f"Delay cannot be negative: {delay_seconds}")
        self.delay_seconds = delay_seconds
        self._task: asyncio.Task | None = None
        self._generation = 0

    @property
    def pending(self) -> bool:
        """True while a scheduled call has not finished."""
        return self._task is not None and not self._task.done()

    def call(
        self,
        func: Callable[..., Awaitable[T]],
        *args: Any,
        on_result: Callable[[T], None] | None = None,
    ) -> "asyncio.Task[T | None]":
        """
        Schedule func(*args) after the quiet period, replacing any pending call.

        Args:
            func: Coroutine function to run
            on_result: Applied to the result only if no newer call was made

        Returns:
            Task resolving to the result. A newer call or cancel() cancels
            the task, so awaiting it raises asyncio.CancelledError. It
            resolves to None only if func suppresses that cancellation.
        """
        self.cancel()
        generation = self._generation
        self._task = asyncio.create_task(self._run(generation, func, args, on_result))
        return self._task

    async def _run(self, generation, func, args, on_result):
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)
        result = await func(*args)
        if generation != self._generation:
            logger.debug("Discarding stale debounced result")
            return None
        if on_result is not None:
            on_result(result)
        return result

    def cancel(self) -> None:
        """Cancel the pending call; an in-flight result will be ignored."""
        self._generation += 1
        if self._task is not None and not self._task.done():
            self._task.cancel()
            logger.debug("Debounced call cancelled")
        self._task = None
