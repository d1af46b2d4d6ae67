"""Tests for the `sowlens models` CLI."""

from __future__ import annotations

import json

from click.testing import CliRunner

from sowlens.cli.main import cli


def _run_cli(store_path, args: list[str], input: str | None = None):
    runner = CliRunner()
    return runner.invoke(
        cli,
        ["--store-path", str(store_path), *args],
        input=input,
    )


def _stored(store_path) -> dict:
    return json.loads(store_path.read_text(encoding="utf-8"))


def test_models_group_help_renders(tmp_path):
    result = _run_cli(tmp_path / "cfg.json", ["models", "--help"])
    assert result.exit_code == 0
    assert "Manage the LLM provider configuration" in result.output


def test_set_show_remove_roundtrip(tmp_path):
    path = tmp_path / "cfg.json"

    set_result = _run_cli(
        path,
        [
            "models",
            "set",
            "openai-compatible",
            "--api-key",
            "sk-123",
            "--base-url",
            "https://x/v1",
            "--model-name",
            "llama",
        ],
    )
    assert set_result.exit_code == 0, set_result.output
    assert "LLM Configuration saved successfully!" in set_result.output
    assert _stored(path) == {
        "provider": "openai-compatible",
        "apiKey": "sk-123",
        "baseUrl": "https://x/v1",
        "modelName": "llama",
    }

    show_result = _run_cli(path, ["models", "show", "--json"])
    assert show_result.exit_code == 0
    payload = json.loads(show_result.output)
    assert payload["provider"] == "openai-compatible"
    assert payload["model_name"] == "llama"
    assert payload["api_key"] != "sk-123"

    remove_result = _run_cli(path, ["models", "remove", "--yes"])
    assert remove_result.exit_code == 0
    assert "LLM Configuration removed." in remove_result.output
    assert _stored(path) == {}

    show_after = _run_cli(path, ["models", "show"])
    assert "No LLM configuration stored." in show_after.output


def test_set_same_provider_keeps_stored_endpoint(tmp_path):
    path = tmp_path / "cfg.json"
    _run_cli(
        path,
        [
            "models",
            "set",
            "local",
            "--base-url",
            "http://localhost:11434/v1",
            "--model-name",
            "llama2",
        ],
    )
    assert "apiKey" not in _stored(path)

    result = _run_cli(path, ["models", "set", "local", "--model-name", "qwen"])
    assert result.exit_code == 0, result.output
    assert _stored(path) == {
        "provider": "local",
        "baseUrl": "http://localhost:11434/v1",
        "modelName": "qwen",
    }


def test_set_missing_key_fails_without_writing(tmp_path):
    path = tmp_path / "cfg.json"
    result = _run_cli(path, ["models", "set", "google"])
    assert result.exit_code == 1
    assert "API Key cannot be empty." in result.output
    assert not path.exists()


def test_set_unknown_provider(tmp_path):
    result = _run_cli(tmp_path / "cfg.json", ["models", "set", "mistral"])
    assert result.exit_code == 1
    assert "Unknown provider: mistral" in result.output


def test_list_marks_stored_provider(tmp_path):
    path = tmp_path / "cfg.json"
    _run_cli(path, ["models", "set", "anthropic", "--api-key", "sk-ant-1"])

    result = _run_cli(path, ["models", "list"])
    assert result.exit_code == 0
    assert "Anthropic (anthropic) [✓]" in result.output
    assert "Google Gemini (google)" in result.output
    assert "sk-ant-1" not in result.output


def test_config_interactive_local(tmp_path):
    path = tmp_path / "cfg.json"
    result = _run_cli(
        path,
        ["models", "config", "local"],
        input="\nhttp://localhost:11434/v1\nllama2\n",
    )
    assert result.exit_code == 0, result.output
    assert _stored(path) == {
        "provider": "local",
        "baseUrl": "http://localhost:11434/v1",
        "modelName": "llama2",
    }


def test_config_interactive_picks_provider_from_menu(tmp_path):
    path = tmp_path / "cfg.json"
    # 4th entry in menu order: openai, openai-compatible, anthropic, google
    result = _run_cli(path, ["models", "config"], input="4\nAIza-1\n")
    assert result.exit_code == 0, result.output
    assert _stored(path) == {"provider": "google", "apiKey": "AIza-1"}


def test_remove_can_be_aborted(tmp_path):
    path = tmp_path / "cfg.json"
    _run_cli(path, ["models", "set", "openai", "--api-key", "sk-1"])
    result = _run_cli(path, ["models", "remove"], input="n\n")
    assert "Aborted." in result.output
    assert _stored(path) == {"provider": "openai", "apiKey": "sk-1"}
