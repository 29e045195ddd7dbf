"""Pytest configuration for the cancellable test suite.

Every test starts from default settings: ``CANCELLABLE_*`` environment
variables are cleared and the settings cache is dropped before and after the
test. The shared logger is pointed back at the real stderr afterwards so
handlers never keep a closed capture stream.
"""

from __future__ import annotations

import logging
import sys
from typing import Iterator

import pytest

from cancellable.config import reset_settings_cache
from cancellable.config.defaults import BASE_LOGGER_NAME
from cancellable.config.env import CONFIG_FILE_ENV, ENV_MAP


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in (*ENV_MAP.values(), CONFIG_FILE_ENV):
        monkeypatch.delenv(name, raising=False)
    reset_settings_cache()
    yield
    reset_settings_cache()


@pytest.fixture(autouse=True)
def restore_log_stream() -> Iterator[None]:
    yield
    base = logging.getLogger(BASE_LOGGER_NAME)
    base.setLevel(logging.INFO)
    for handler in base.handlers:
        if type(handler) is logging.StreamHandler:
            handler.stream = sys.__stderr__
