"""Pipeline builders over SafeChain.

Two styles are supported:

* :func:`pipe` takes plain one-argument functions and maps the input
  through each of them;
* :func:`safe_pipe` takes chain transformers, built with the operator
  helpers of this module (``map``, ``flat_map``, ``tap``, ``effect``,
  ``tap_error``, ``recover``), so any operator can be a pipeline stage.

Usage::

    normalise = safe_pipe(
        map(str.strip),
        effect(audit),
        map(parse),
        recover(lambda err: None),
    )
    normalise("  42 ").unwrap()
"""

from __future__ import annotations

from typing import Any, Callable

from safechain.chain import SafeChain
from safechain.constructors import safe

Transformer = Callable[[SafeChain[Any]], SafeChain[Any]]


def map(transform: Callable[[Any], Any]) -> Transformer:  # noqa: A001
    return lambda chain: chain.map(transform)


def flat_map(transform: Callable[[Any], SafeChain[Any]]) -> Transformer:
    return lambda chain: chain.flat_map(transform)


def tap(observer: Callable[[Any], Any]) -> Transformer:
    return lambda chain: chain.tap(observer)


def effect(consumer: Callable[[Any], Any]) -> Transformer:
    return lambda chain: chain.effect(consumer)


def tap_error(observer: Callable[[Exception], Any]) -> Transformer:
    return lambda chain: chain.tap_error(observer)


def recover(handler: Callable[[Exception], Any]) -> Transformer:
    return lambda chain: chain.recover(handler)


def pipe(*transforms: Callable[[Any], Any]) -> Callable[[Any], SafeChain[Any]]:
    """Compose plain functions into ``input -> SafeChain``, mapping left to right."""
    if not transforms:
        raise ValueError("pipe() needs at least one transform")

    def run(value: Any) -> SafeChain[Any]:
        chain = safe(value)
        for transform in transforms:
            chain = chain.map(transform)
        return chain

    return run


def safe_pipe(*transformers: Transformer) -> Callable[[Any], SafeChain[Any]]:
    """Compose chain transformers into ``input -> SafeChain``."""
    if not transformers:
        raise ValueError("safe_pipe() needs at least one transformer")

    def run(value: Any) -> SafeChain[Any]:
        chain = safe(value)
        for transformer in transformers:
            chain = transformer(chain)
        return chain

    return run


__all__ = [
    "Transformer",
    "effect",
    "flat_map",
    "map",
    "pipe",
    "recover",
    "safe_pipe",
    "tap",
    "tap_error",
]
