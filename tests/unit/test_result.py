"""Unit tests for Ok / Err snapshots and the SafeResult cell."""

from __future__ import annotations

import pytest

from safechain import CapturedValueError, Err, Ok, SafeResult


class TestOkErr:
    def test_ok_accessors(self) -> None:
        ok = Ok(3)
        assert ok.value == 3
        assert ok.error is None
        assert ok.is_ok() and not ok.is_err()
        assert ok.unwrap() == 3
        assert ok.unwrap_or(0) == 3

    def test_err_accessors(self) -> None:
        exc = ValueError("bad")
        err = Err(exc)
        assert err.error is exc
        assert err.value is None
        assert err.is_err() and not err.is_ok()
        assert err.unwrap_or(0) == 0
        with pytest.raises(ValueError, match="bad"):
            err.unwrap()

    def test_err_normalises_non_exceptions(self) -> None:
        err = Err("plain string")
        assert isinstance(err.error, CapturedValueError)
        assert str(err.error) == "plain string"

    def test_equality(self) -> None:
        exc = ValueError("x")
        assert Ok(1) == Ok(1)
        assert Ok(1) != Ok(2)
        assert Err(exc) == Err(exc)
        assert Err(exc) != Err(ValueError("x"))
        assert Ok(None) != Err(exc)

    def test_err_equality_is_by_identity(self) -> None:
        first, second = KeyError("k"), KeyError("k")
        assert Err(first) != Err(second)
        assert Err(first) == Err(first)
        assert Err("same text") != Err("same text")

    def test_repr(self) -> None:
        assert repr(Ok("a")) == "Ok('a')"
        assert repr(Err(KeyError("k"))) == "Err(KeyError('k'))"


class TestSafeResult:
    def test_fresh_cell_is_ok_none(self) -> None:
        cell: SafeResult[None] = SafeResult()
        assert cell.get() == Ok(None)
        assert not cell.is_error

    def test_ok_installs_value(self) -> None:
        assert SafeResult.of_ok(5).get() == Ok(5)

    def test_fail_installs_normalised_error(self) -> None:
        cell = SafeResult.of_fail("nope")
        snapshot = cell.get()
        assert cell.is_error
        assert isinstance(snapshot, Err)
        assert isinstance(snapshot.error, CapturedValueError)

    def test_fail_keeps_exception_identity(self) -> None:
        exc = RuntimeError("same")
        assert SafeResult.of_fail(exc).get().error is exc

    def test_last_write_wins(self) -> None:
        cell = SafeResult.of_fail(RuntimeError("first"))
        cell.ok(7)
        assert cell.get() == Ok(7)
        assert not cell.is_error
        cell.fail(RuntimeError("again"))
        assert cell.is_error
        assert cell.get().value is None
