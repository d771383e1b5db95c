"""Entry points that create a SafeChain."""

from __future__ import annotations

from typing import Any, Callable, TypeVar, overload

from safechain.chain import SafeChain

T = TypeVar("T")

_MISSING: Any = object()


def safe_empty() -> SafeChain[None]:
    """Return a resolved chain holding ``None``."""
    return SafeChain()


def safe_value(value: T) -> SafeChain[T]:
    """Wrap *value*. An awaitable value makes the chain deferred."""
    return safe_empty().map(lambda _: value)


def safe_exec(fn: Callable[[], T]) -> SafeChain[T]:
    """Call *fn* once, now, capturing its return value or exception."""
    return safe_empty().map(lambda _: fn())


@overload
def safe() -> SafeChain[None]: ...
@overload
def safe(init: Callable[[], T]) -> SafeChain[T]: ...
@overload
def safe(init: T) -> SafeChain[T]: ...


def safe(init: Any = _MISSING) -> SafeChain[Any]:
    """Create a chain from nothing, from a callable, or from a plain value.

    Example::

        safe(2).map(lambda x: x * 2).map(lambda x: x + 3).unwrap()  # 7
        safe(load_config).recover(lambda err: DEFAULTS).unwrap()
    """
    if init is _MISSING:
        return safe_empty()
    if callable(init):
        return safe_exec(init)
    return safe_value(init)


__all__ = ["safe", "safe_empty", "safe_exec", "safe_value"]
