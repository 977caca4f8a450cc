"""
Shared fixtures: every test starts from a clean, relaxed process config.
"""

import pytest

from cycleguard.core.config import (
    ENV_CONFIG_PATH,
    ENV_DEFAULT_ACTION,
    ENV_MODE,
    reset_global_config,
)


@pytest.fixture(autouse=True)
def clean_guard_env(monkeypatch):
    for var in (ENV_MODE, ENV_DEFAULT_ACTION, ENV_CONFIG_PATH):
        monkeypatch.delenv(var, raising=False)
    reset_global_config()
    yield
    reset_global_config()


class Widget:
    """A target with one ordinary operation and one cleanup operation."""

    def __init__(self):
        self.cleaned = False
        self.cleanups = 0
        self.finalized = 0

    def greet(self):
        return "hi"

    def echo(self, *args, **kwargs):
        return args, kwargs

    def cleanup(self):
        self.cleaned = True
        self.cleanups += 1

    def finalize(self):
        self.finalized += 1


@pytest.fixture
def widget():
    return Widget()
