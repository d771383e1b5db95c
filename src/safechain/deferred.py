"""Deferred values: detection, settling, and the memoised pending handle."""

from __future__ import annotations

import asyncio
import inspect
from typing import Any, Awaitable, Generator

from safechain.config import log_swallowed_errors
from safechain.log import get_logger

_log = get_logger(__name__)

# Strong references to fire-and-forget tasks until they finish.
_background: set[asyncio.Future[Any]] = set()


def is_deferred(value: object) -> bool:
    """Return True for anything that can be awaited."""
    return inspect.isawaitable(value)


async def settle(value: Any) -> Any:
    """Await *value* until it is no longer awaitable."""
    while inspect.isawaitable(value):
        value = await value
    return value


def _running_loop() -> asyncio.AbstractEventLoop | None:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


class Deferred:
    """Awaitable that runs the wrapped work once, however often it is awaited.

    When created inside a running event loop the work starts immediately as a
    task. Otherwise it starts on the first ``await``, in the awaiting loop.
    """

    __slots__ = ("_awaitable", "_future")

    def __init__(self, awaitable: Awaitable[Any]) -> None:
        self._awaitable: Awaitable[Any] | None = awaitable
        self._future: asyncio.Future[Any] | None = None
        if _running_loop() is not None:
            self._start()

    def _start(self) -> asyncio.Future[Any]:
        if self._future is None:
            awaitable, self._awaitable = self._awaitable, None
            self._future = asyncio.ensure_future(awaitable)  # type: ignore[arg-type]
        return self._future

    def done(self) -> bool:
        return self._future is not None and self._future.done()

    def __await__(self) -> Generator[Any, None, Any]:
        return self._start().__await__()

    def __del__(self) -> None:
        # Never started: close it so it is not reported as never awaited.
        if inspect.iscoroutine(self._awaitable):
            self._awaitable.close()

    def __repr__(self) -> str:
        state = "done" if self.done() else ("running" if self._future is not None else "idle")
        return f"Deferred({state})"


def discard(value: Awaitable[Any], *, operator: str) -> None:
    """Let an observer's awaitable run on its own without waiting for it.

    Outside a running loop a coroutine is closed instead, since nothing
    could ever drive it.
    """
    if _running_loop() is None:
        if inspect.iscoroutine(value):
            value.close()
        return
    future = asyncio.ensure_future(value)
    _background.add(future)

    def _forget(done: asyncio.Future[Any]) -> None:
        _background.discard(done)
        if done.cancelled():
            return
        exc = done.exception()
        if exc is not None and log_swallowed_errors():
            _log.warning(
                "safechain.discarded_awaitable_failed",
                operator=operator,
                error=repr(exc),
            )

    future.add_done_callback(_forget)


__all__ = ["Deferred", "discard", "is_deferred", "settle"]
