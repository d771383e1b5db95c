"""SafeChain: chainable wrapper over a captured success value or failure.

Every operator returns a new chain built by :meth:`SafeChain._next`:

* on a resolved chain the step runs now; a raised exception becomes the new
  chain's failure, an awaitable makes the new chain deferred, anything else
  becomes its value;
* on a deferred chain the step is queued behind the predecessor's pending
  handle and runs on the settled result.

Once a chain is deferred every chain derived from it is deferred too, and
its terminal calls (``is_ok``, ``is_error``, ``unwrap``, ``unwrap_or``)
return coroutines instead of plain values.
"""

from __future__ import annotations

import warnings
from typing import Any, Awaitable, Callable, Coroutine, Generic, TypeVar

from safechain.config import log_swallowed_errors
from safechain.deferred import Deferred, discard, is_deferred, settle
from safechain.log import get_logger
from safechain.result import Result, SafeResult

T = TypeVar("T")
U = TypeVar("U")

_log = get_logger(__name__)


class SafeChain(Generic[T]):
    """A captured result plus, once anything async happened, a pending handle.

    Chains are not constructed directly; use :func:`safechain.safe` or one of
    the ``safe_*`` constructors.
    """

    __slots__ = ("_pending", "_result")

    def __init__(self) -> None:
        self._result: SafeResult[Any] = SafeResult()
        self._pending: Deferred | None = None

    @property
    def is_deferred(self) -> bool:
        """True when terminal calls on this chain must be awaited."""
        return self._pending is not None

    # ------------------------------------------------------------------
    # State transition
    # ------------------------------------------------------------------

    def _next(self, step: Callable[[Result[Any]], Any]) -> SafeChain[Any]:
        chain: SafeChain[Any] = SafeChain()
        if self._pending is not None:
            chain._pending = Deferred(chain._resume(self._pending, self._result, step))
            return chain
        try:
            outcome = step(self._result.get())
        except Exception as exc:
            chain._result.fail(exc)
            return chain
        if is_deferred(outcome):
            chain._pending = Deferred(chain._settle_into(outcome))
        else:
            chain._result.ok(outcome)
        return chain

    async def _resume(
        self,
        pending: Deferred,
        previous: SafeResult[Any],
        step: Callable[[Result[Any]], Any],
    ) -> None:
        await pending
        try:
            outcome = step(previous.get())
        except Exception as exc:
            self._result.fail(exc)
            return
        await self._settle_into(outcome)

    async def _settle_into(self, outcome: Any) -> None:
        try:
            value = await settle(outcome)
        except Exception as exc:
            self._result.fail(exc)
        else:
            self._result.ok(value)

    # ------------------------------------------------------------------
    # Value-affecting operators
    # ------------------------------------------------------------------

    def map(self, transform: Callable[[T], U]) -> SafeChain[U]:
        """Replace the value with ``transform(value)``; failures pass through."""

        def step(result: Result[Any]) -> Any:
            return transform(result.unwrap())

        return self._next(step)

    def flat_map(self, transform: Callable[[T], SafeChain[U]]) -> SafeChain[U]:
        """Like :meth:`map`, but adopt the outcome of the chain ``transform`` returns."""

        def step(result: Result[Any]) -> Any:
            inner = transform(result.unwrap())
            if isinstance(inner, SafeChain):
                return inner.unwrap()
            return inner

        return self._next(step)

    def effect(self, consumer: Callable[[T], Any]) -> SafeChain[T]:
        """Run ``consumer(value)`` for its side effect and keep the value.

        An awaitable returned by *consumer* is waited for. Its failure, or an
        exception raised by *consumer*, becomes the chain's failure.
        """

        def step(result: Result[Any]) -> Any:
            value = result.unwrap()
            outcome = consumer(value)
            if is_deferred(outcome):
                return _keep(outcome, value)
            return value

        return self._next(step)

    def recover(self, handler: Callable[[Exception], U]) -> SafeChain[T | U]:
        """Turn a failure into the value ``handler(error)``; values pass through."""

        def step(result: Result[Any]) -> Any:
            if result.is_ok():
                return result.value
            return handler(result.error)

        return self._next(step)

    # ------------------------------------------------------------------
    # Observational operators
    # ------------------------------------------------------------------

    def tap(self, observer: Callable[[Result[T]], Any]) -> SafeChain[T]:
        """Show ``observer`` a snapshot of the result (``Ok`` or ``Err``).

        Whatever the observer raises or returns is ignored.
        """

        def step(result: Result[Any]) -> Any:
            _observe("tap", observer, result)
            return result.unwrap()

        return self._next(step)

    def tap_error(self, observer: Callable[[Exception], Any]) -> SafeChain[T]:
        """Show ``observer`` the error, if there is one. Its outcome is ignored."""

        def step(result: Result[Any]) -> Any:
            if result.is_err():
                _observe("tap_error", observer, result.error)
            return result.unwrap()

        return self._next(step)

    # ------------------------------------------------------------------
    # Deprecated aliases
    # ------------------------------------------------------------------

    def if_ok(self, consumer: Callable[[T], Any]) -> SafeChain[T]:
        """Deprecated alias of :meth:`effect`."""
        warnings.warn("if_ok() is deprecated, use effect()", DeprecationWarning, stacklevel=2)
        return self.effect(consumer)

    def if_error(self, observer: Callable[[Exception], Any]) -> SafeChain[T]:
        """Deprecated alias of :meth:`tap_error`."""
        warnings.warn("if_error() is deprecated, use tap_error()", DeprecationWarning, stacklevel=2)
        return self.tap_error(observer)

    # ------------------------------------------------------------------
    # Terminal operations
    # ------------------------------------------------------------------

    def is_ok(self) -> bool | Coroutine[Any, Any, bool]:
        return self._terminal(_read_is_ok)

    def is_error(self) -> bool | Coroutine[Any, Any, bool]:
        return self._terminal(_read_is_error)

    def unwrap(self) -> T | Coroutine[Any, Any, T]:
        """Return the value, or raise the captured error."""
        return self._terminal(_read_value)

    def unwrap_or(self, default: U) -> T | U | Coroutine[Any, Any, T | U]:
        """Return the value, or *default* when the chain holds a failure."""
        return self._terminal(lambda cell: cell.get().unwrap_or(default))

    def to_awaitable(self) -> Coroutine[Any, Any, T]:
        """Return a coroutine for the value (or error), even on a resolved chain."""
        return self._await_terminal(_read_value)

    def _terminal(self, read: Callable[[SafeResult[Any]], Any]) -> Any:
        if self._pending is None:
            return read(self._result)
        return self._await_terminal(read)

    async def _await_terminal(self, read: Callable[[SafeResult[Any]], Any]) -> Any:
        if self._pending is not None:
            await self._pending
        return read(self._result)

    def __repr__(self) -> str:
        if self._pending is not None and not self._pending.done():
            return "SafeChain(<pending>)"
        return f"SafeChain({self._result.get()!r})"


async def _keep(awaitable: Awaitable[Any], value: Any) -> Any:
    await settle(awaitable)
    return value


def _observe(operator: str, observer: Callable[[Any], Any], argument: Any) -> None:
    try:
        outcome = observer(argument)
    except Exception as exc:
        if log_swallowed_errors():
            _log.warning("safechain.observer_failed", operator=operator, error=repr(exc))
        return
    if is_deferred(outcome):
        discard(outcome, operator=operator)


def _read_is_ok(cell: SafeResult[Any]) -> bool:
    return not cell.is_error


def _read_is_error(cell: SafeResult[Any]) -> bool:
    return cell.is_error


def _read_value(cell: SafeResult[Any]) -> Any:
    return cell.get().unwrap()


__all__ = ["SafeChain"]
