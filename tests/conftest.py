"""Shared fixtures for sowlens tests."""

import pytest

from sowlens.providers import (
    ConfigController,
    ConfigStoreError,
    InMemoryConfigStore,
)


class Recorder:
    """Collects change-callback and notice invocations."""

    def __init__(self):
        self.changes = []
        self.notices = []

    def on_change(self, api_key, provider, base_url, model_name):
        self.changes.append((api_key, provider, base_url, model_name))

    def on_notice(self, message):
        self.notices.append(message)


@pytest.fixture
def store():
    return InMemoryConfigStore()


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def controller(store, recorder):
    ctrl = ConfigController(
        store,
        on_change=recorder.on_change,
        on_notice=recorder.on_notice,
    )
    ctrl.initialize()
    return ctrl


class FailingStore(InMemoryConfigStore):
    """In-memory store whose writes of ``fail_key`` are rejected."""

    def __init__(self, fail_key, initial=None):
        super().__init__(initial)
        self.fail_key = fail_key

    def write(self, key, value):
        if key == self.fail_key:
            raise ConfigStoreError(f"Cannot write {key}: quota exceeded")
        super().write(key, value)


@pytest.fixture
def failing_store():
    return FailingStore(
        "apiKey",
        {"provider": "anthropic", "apiKey": "sk-ant-old"},
    )
