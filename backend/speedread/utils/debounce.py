"""
Debounce
Cancel-and-restart scheduling of recomputations on an asyncio loop.
"""
import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Optional


logger = logging.getLogger(__name__)


class Debouncer:
    """
    Runs a function once input has been quiet for a window.

    Each schedule() call cancels the pending run, if any, and starts a new
    one. Only the latest call runs; superseded calls resolve to None.
    """

    def __init__(self, window_ms: int):
        self.window = window_ms / 1000
        self._task: Optional[asyncio.Task] = None
        self._superseded: set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def cancel(self) -> None:
        if self.pending:
            self._superseded.add(self._task)
            self._task.cancel()
        self._task = None

    async def _run(self, func: Callable[..., Any], args: tuple, kwargs: dict) -> Any:
        await asyncio.sleep(self.window)
        result = func(*args, **kwargs)
        if inspect.isawaitable(result):
            result = await result
        return result

    def schedule(self, func: Callable[..., Any], *args, **kwargs) -> Awaitable[Any]:
        """
        Schedule func after the quiescence window.

        Returns an awaitable resolving to func's result, or None when a later
        call superseded this one.
        """
        if self.pending:
            logger.debug("Superseding pending debounced call")
        self.cancel()
        task = asyncio.ensure_future(self._run(func, args, kwargs))
        self._task = task
        return self._wait(task)

    async def _wait(self, task: asyncio.Task) -> Any:
        try:
            return await task
        except asyncio.CancelledError:
            if task in self._superseded:
                return None
            raise
        finally:
            self._superseded.discard(task)
            if self._task is task:
                self._task = None
