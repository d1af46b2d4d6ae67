"""Tests for the key/value config stores."""

import json

import pytest

from sowlens.providers import (
    ConfigStore,
    ConfigStoreError,
    InMemoryConfigStore,
    JsonFileConfigStore,
    ProviderKind,
    get_active_llm_config,
    mask_api_key,
)
from sowlens.providers import store as store_module


def test_in_memory_store_read_write_remove():
    store = InMemoryConfigStore()
    assert isinstance(store, ConfigStore)
    assert store.read("provider") is None

    store.write("provider", "openai")
    assert store.read("provider") == "openai"

    store.remove("provider")
    store.remove("provider")
    assert store.read("provider") is None
    assert store.as_dict() == {}


def test_json_store_persists_each_key(tmp_path):
    path = tmp_path / "nested" / "llm_config.json"
    store = JsonFileConfigStore(path)
    assert isinstance(store, ConfigStore)
    assert store.read("apiKey") is None

    store.write("provider", "google")
    store.write("apiKey", "AIza-123")
    assert json.loads(path.read_text(encoding="utf-8")) == {
        "provider": "google",
        "apiKey": "AIza-123",
    }

    reopened = JsonFileConfigStore(path)
    assert reopened.read("apiKey") == "AIza-123"

    reopened.remove("apiKey")
    reopened.remove("baseUrl")
    assert store.read("apiKey") is None
    assert store.read("provider") == "google"


def test_json_store_treats_corrupt_file_as_empty(tmp_path):
    path = tmp_path / "llm_config.json"
    path.write_text("{not json", encoding="utf-8")
    store = JsonFileConfigStore(path)
    assert store.read("provider") is None

    store.write("provider", "openai")
    assert store.read("provider") == "openai"


def test_json_store_ignores_non_string_values(tmp_path):
    path = tmp_path / "llm_config.json"
    path.write_text(json.dumps({"provider": 3, "apiKey": "k"}), "utf-8")
    store = JsonFileConfigStore(path)
    assert store.read("provider") is None
    assert store.read("apiKey") == "k"


def test_json_store_wraps_write_failures(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = JsonFileConfigStore(blocker / "llm_config.json")
    with pytest.raises(ConfigStoreError):
        store.write("provider", "openai")


def test_active_config_none_when_nothing_stored():
    assert get_active_llm_config(InMemoryConfigStore()) is None


def test_active_config_drops_fields_profile_does_not_use():
    store = InMemoryConfigStore(
        {
            "provider": "anthropic",
            "apiKey": "sk-ant-1",
            "baseUrl": "https://stale/v1",
        },
    )
    resolved = get_active_llm_config(store)
    assert resolved.provider == ProviderKind.ANTHROPIC
    assert resolved.api_key == "sk-ant-1"
    assert resolved.base_url == ""


def test_active_config_ignores_unknown_provider():
    store = InMemoryConfigStore({"provider": "mistral", "apiKey": "x"})
    assert get_active_llm_config(store) is None


def test_mask_api_key():
    assert mask_api_key("") == ""
    assert mask_api_key("abc") == "***"
    assert mask_api_key("sk-123") == "******"
    assert mask_api_key("sk-ant-123") == "sk-***-123"
    assert mask_api_key("sk-abcdefghijk") == "sk-*******hijk"


def test_json_store_interrupted_write_keeps_previous_keys(
    tmp_path,
    monkeypatch,
):
    path = tmp_path / "llm_config.json"
    store = JsonFileConfigStore(path)
    store.write("provider", "openai")
    store.write("apiKey", "sk-1")

    def _partial_dump(obj, fh, **kwargs):
        fh.write('{"provider": "ope')
        raise OSError("disk full")

    monkeypatch.setattr(store_module.json, "dump", _partial_dump)
    with pytest.raises(ConfigStoreError):
        store.write("modelName", "llama")
    monkeypatch.undo()

    assert store.read("provider") == "openai"
    assert store.read("apiKey") == "sk-1"
    assert store.read("modelName") is None
    assert not path.with_suffix(".json.tmp").exists()
