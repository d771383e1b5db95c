"""Error hierarchy and failure normalisation for safechain.

Hierarchy::

    SafeChainError
    ├── CapturedValueError        (non-exception failure, normalised)
    └── ConfigError
        └── InvalidSettingValueError
"""

from __future__ import annotations

from typing import Any


class SafeChainError(Exception):
    """Root of the safechain error hierarchy.

    Args:
        message: Human-readable description.
        code: Machine-readable slug (defaults to ``default_code``).
        detail: Arbitrary extra context.
        cause: Original exception that triggered this error.
    """

    default_code: str = "safechain_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = detail or {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a plain dict (safe for logging)."""
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "detail": {k: repr(v) for k, v in self.detail.items()},
        }
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload


class CapturedValueError(SafeChainError):
    """A failure recorded from something that was not an exception.

    The message is ``str(value)``; the original object stays on ``value``.
    """

    default_code = "captured_value"

    def __init__(self, value: object) -> None:
        super().__init__(str(value), detail={"value": value})
        self.value = value


class ConfigError(SafeChainError):
    """Raised when settings are invalid or could not be loaded."""

    default_code = "config_error"


class InvalidSettingValueError(ConfigError):
    """A setting's value is present but semantically invalid."""

    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(f"Setting '{setting_name}' has invalid value {value!r}: {reason}")
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


def normalize_error(error: object) -> Exception:
    """Coerce any failure into an exception instance.

    Exceptions pass through unchanged; anything else is wrapped in
    :class:`CapturedValueError`.
    """
    if isinstance(error, Exception):
        return error
    return CapturedValueError(error)


__all__ = [
    "CapturedValueError",
    "ConfigError",
    "InvalidSettingValueError",
    "SafeChainError",
    "normalize_error",
]
