"""Result[T]: Ok and Err snapshots, and the SafeResult cell a chain owns."""

from __future__ import annotations

from typing import Any, Generic, NoReturn, TypeVar

from safechain.errors import normalize_error

T = TypeVar("T")


class Ok(Generic[T]):
    """Successful result variant."""

    __slots__ = ("_value",)

    def __init__(self, value: T) -> None:
        self._value = value

    @property
    def value(self) -> T:
        return self._value

    @property
    def error(self) -> None:
        return None

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self._value

    def unwrap_or(self, default: Any) -> T:  # noqa: ARG002
        return self._value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Ok) and other._value == self._value

    def __repr__(self) -> str:
        return f"Ok({self._value!r})"


class Err:
    """Error result variant. ``error`` is always a normalised exception.

    Two ``Err`` snapshots are equal only when they hold the same exception object.
    """

    __slots__ = ("_error",)

    def __init__(self, error: object) -> None:
        self._error = normalize_error(error)

    @property
    def error(self) -> Exception:
        return self._error

    @property
    def value(self) -> None:
        return None

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        raise self._error

    def unwrap_or(self, default: T) -> T:
        return default

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Err) and other._error is self._error

    def __repr__(self) -> str:
        return f"Err({self._error!r})"


type Result[T] = Ok[T] | Err


class SafeResult(Generic[T]):
    """Mutable cell holding exactly one of a success value or a failure.

    A fresh cell holds ``Ok(None)``. Each write replaces the previous
    variant entirely, so value and error are never both meaningful.
    """

    __slots__ = ("_error", "_value")

    def __init__(self) -> None:
        self._value: Any = None
        self._error: Exception | None = None

    @classmethod
    def of_ok(cls, value: T) -> SafeResult[T]:
        cell: SafeResult[T] = cls()
        cell.ok(value)
        return cell

    @classmethod
    def of_fail(cls, error: object) -> SafeResult[Any]:
        cell: SafeResult[Any] = cls()
        cell.fail(error)
        return cell

    @property
    def is_error(self) -> bool:
        return self._error is not None

    def ok(self, value: T) -> None:
        self._value = value
        self._error = None

    def fail(self, error: object) -> None:
        self._value = None
        self._error = normalize_error(error)

    def get(self) -> Result[T]:
        """Return an immutable snapshot of the current variant."""
        if self._error is not None:
            return Err(self._error)
        return Ok(self._value)

    def __repr__(self) -> str:
        return f"SafeResult({self.get()!r})"


__all__ = ["Err", "Ok", "Result", "SafeResult"]
