"""Shared fixtures."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from safechain.config import configure


@pytest.fixture(autouse=True)
def _reset_settings() -> Iterator[None]:
    configure(None)
    yield
    configure(None)
