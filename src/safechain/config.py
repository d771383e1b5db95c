"""Settings for the ambient behaviour of safechain (logging of swallowed errors)."""

from __future__ import annotations

import dataclasses
import os
from typing import Any, ClassVar, Mapping

from safechain.errors import ConfigError, InvalidSettingValueError

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


@dataclasses.dataclass(frozen=True)
class ChainSettings:
    """Process-wide settings.

    Attributes:
        log_level: Root log level applied by :func:`safechain.log.configure_logging`.
        log_swallowed_errors: Log exceptions raised by ``tap``/``tap_error``
            observers and failures of discarded awaitables.
        json_logs: Render log lines as JSON instead of the console renderer.
    """

    _prefix: ClassVar[str] = "SAFECHAIN"

    log_level: str = "WARNING"
    log_swallowed_errors: bool = False
    json_logs: bool = False

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        if self.log_level.upper() not in _LOG_LEVELS:
            raise InvalidSettingValueError(
                "log_level", self.log_level, f"expected one of {sorted(_LOG_LEVELS)}"
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ChainSettings:
        """Build settings from ``SAFECHAIN_<FIELD>`` environment variables."""
        env = os.environ if environ is None else environ
        kwargs: dict[str, Any] = {}
        for field in dataclasses.fields(cls):
            raw = env.get(f"{cls._prefix}_{field.name}".upper())
            if raw is None:
                continue
            kwargs[field.name] = _coerce(raw, field.type)
        try:
            return cls(**kwargs)
        except InvalidSettingValueError:
            raise
        except Exception as exc:
            raise ConfigError(f"Failed to load settings: {exc}", cause=exc) from exc


def _coerce(value: str, type_hint: Any) -> Any:
    if type_hint is bool or type_hint == "bool":
        return value.strip().lower() in ("1", "true", "yes", "on")
    return value


_active: ChainSettings | None = None


def get_settings() -> ChainSettings:
    """Return the active settings, loading them from the environment on first use."""
    global _active
    if _active is None:
        _active = ChainSettings.from_env()
    return _active


def configure(settings: ChainSettings | None) -> None:
    """Install *settings* as the active settings; ``None`` reloads from the environment lazily."""
    global _active
    _active = settings


def log_swallowed_errors() -> bool:
    """Whether swallowed observer failures are logged.

    Settings that cannot be loaded count as "don't log", so the swallow path never raises.
    """
    try:
        return get_settings().log_swallowed_errors
    except ConfigError:
        return False


__all__ = ["ChainSettings", "configure", "get_settings", "log_swallowed_errors"]
