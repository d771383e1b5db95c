"""Unit tests for pipe, safe_pipe and the transformer helpers."""

from __future__ import annotations

import asyncio
from unittest.mock import MagicMock

import pytest

from safechain import Ok, SafeChain, pipe, safe, safe_pipe
from safechain.pipeline import effect, flat_map, map, recover, tap, tap_error


async def add_later(x: int) -> int:
    await asyncio.sleep(0)
    return x + 1


class TestPipe:
    def test_applies_functions_left_to_right(self) -> None:
        run = pipe(lambda x: x * 2, lambda x: x + 3)
        chain = run(5)
        assert isinstance(chain, SafeChain)
        assert chain.unwrap() == 13

    def test_single_function(self) -> None:
        assert pipe(str)(7).unwrap() == "7"

    def test_short_circuits(self) -> None:
        later = MagicMock()

        def explode(_: int) -> int:
            raise RuntimeError("boom")

        chain = pipe(lambda x: x, explode, later)(1)
        assert chain.is_error() is True
        later.assert_not_called()

    def test_async_stage_makes_rest_deferred(self) -> None:
        seen: list[int] = []

        def record(x: int) -> int:
            seen.append(x)
            return x

        chain = pipe(add_later, record, lambda x: x * 10)(1)
        assert chain.is_deferred is True
        assert asyncio.run(chain.unwrap()) == 20
        assert seen == [2]

    def test_callable_input_is_executed(self) -> None:
        fn = MagicMock(return_value=4)
        assert pipe(lambda x: x + 1)(fn).unwrap() == 5
        fn.assert_called_once_with()

    def test_raising_callable_input_short_circuits(self) -> None:
        stage = MagicMock()

        def explode() -> int:
            raise LookupError("no input")

        chain = pipe(stage)(explode)
        assert chain.is_error() is True
        stage.assert_not_called()

    def test_requires_a_stage(self) -> None:
        with pytest.raises(ValueError):
            pipe()

    def test_reusable(self) -> None:
        run = pipe(lambda x: x + 1)
        assert [run(i).unwrap() for i in range(3)] == [1, 2, 3]

    def test_exported_from_package(self) -> None:
        import safechain.pipeline

        assert pipe is safechain.pipeline.pipe


class TestSafePipe:
    def test_threads_through_transformers(self) -> None:
        run = safe_pipe(map(lambda x: x * 2), map(lambda x: x + 3))
        assert run(5).unwrap() == 13

    def test_callable_input_is_executed(self) -> None:
        assert safe_pipe(map(lambda x: x + 1))(lambda: 1).unwrap() == 2

    def test_async_callable_input(self) -> None:
        async def load() -> int:
            await asyncio.sleep(0)
            return 20

        chain = safe_pipe(map(lambda x: x + 1))(load)
        assert chain.is_deferred is True
        assert asyncio.run(chain.unwrap()) == 21

    def test_all_operator_helpers(self) -> None:
        observed = MagicMock()
        consumed = MagicMock()
        errors = MagicMock()
        run = safe_pipe(
            map(lambda x: x * 2),
            flat_map(lambda x: safe(x + 1)),
            tap(observed),
            effect(consumed),
            tap_error(errors),
            recover(lambda _: -1),
        )
        assert run(3).unwrap() == 7
        observed.assert_called_once_with(Ok(7))
        consumed.assert_called_once_with(7)
        errors.assert_not_called()

    def test_recovers_failure(self) -> None:
        def explode(_: int) -> int:
            raise ValueError("bad input")

        errors = MagicMock()
        run = safe_pipe(map(explode), tap_error(errors), recover(lambda err: f"fallback: {err}"))
        assert run(1).unwrap() == "fallback: bad input"
        errors.assert_called_once()

    def test_async_transformer(self) -> None:
        run = safe_pipe(map(add_later), map(add_later), map(lambda x: x * 2))
        assert asyncio.run(run(0).unwrap()) == 4

    def test_async_failure_skips_later_stages(self) -> None:
        async def reject(_: int) -> int:
            raise RuntimeError("async boom")

        later = MagicMock()
        run = safe_pipe(map(reject), map(later))
        with pytest.raises(RuntimeError, match="async boom"):
            asyncio.run(run(1).unwrap())
        later.assert_not_called()

    def test_requires_a_stage(self) -> None:
        with pytest.raises(ValueError):
            safe_pipe()
