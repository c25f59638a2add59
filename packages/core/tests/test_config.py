"""Tests for configuration loading."""

import pytest

from snipreview_core.config import api_key_env_var, api_key_for, is_valid_api_key, load_config


@pytest.fixture(autouse=True)
def _clear_keys(monkeypatch):
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)


def test_defaults_applied_when_no_config_file(tmp_path):
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["model"] == "anthropic"
    assert config["language"] == "python"
    assert config["store"] == "sqlite"
    assert config["store_path"] == ".snipreview.db"


def test_config_file_overrides_defaults(tmp_path):
    cfg = tmp_path / ".snipreview.yml"
    cfg.write_text("model: openai\nlanguage: java\nstore: memory\n")
    config = load_config(config_path=str(cfg))
    assert config["model"] == "openai"
    assert config["language"] == "java"
    assert config["store"] == "memory"


def test_empty_config_file_keeps_defaults(tmp_path):
    cfg = tmp_path / ".snipreview.yml"
    cfg.write_text("")
    assert load_config(config_path=str(cfg))["model"] == "anthropic"


def test_cli_overrides_config_file(tmp_path):
    cfg = tmp_path / ".snipreview.yml"
    cfg.write_text("model: openai\n")
    config = load_config(config_path=str(cfg), cli_overrides={"model": "anthropic"})
    assert config["model"] == "anthropic"


def test_none_cli_overrides_ignored(tmp_path):
    cfg = tmp_path / ".snipreview.yml"
    cfg.write_text("language: typescript\n")
    config = load_config(config_path=str(cfg), cli_overrides={"language": None})
    assert config["language"] == "typescript"


def test_env_vars_loaded(monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "ant-key")
    monkeypatch.setenv("OPENAI_API_KEY", "oai-key")
    config = load_config(config_path="nonexistent.yml")
    assert config["anthropic_api_key"] == "ant-key"
    assert config["openai_api_key"] == "oai-key"


def test_api_key_for_follows_model(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "oai-key")
    config = load_config(config_path="nonexistent.yml", cli_overrides={"model": "openai"})
    assert api_key_for(config) == "oai-key"
    config["model"] = "anthropic"
    assert api_key_for(config) is None


def test_api_key_env_var():
    assert api_key_env_var("anthropic") == "ANTHROPIC_API_KEY"
    assert api_key_env_var("openai") == "OPENAI_API_KEY"
    with pytest.raises(ValueError):
        api_key_env_var("gemini")


@pytest.mark.parametrize(
    "key, valid",
    [
        ("sk-real", True),
        (None, False),
        ("", False),
        ("   ", False),
        ("your_api_key_here", False),
        (123, False),
    ],
)
def test_is_valid_api_key(key, valid):
    assert is_valid_api_key(key) is valid
