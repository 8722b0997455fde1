import json

import pytest

from termchat.config import ConfigError, ConfigManager
from termchat.settings import Settings


def test_default_path():
    assert ConfigManager().config_path == "chatbot_config.json"


def test_round_trip(tmp_path):
    path = tmp_path / "cfg.json"
    manager = ConfigManager(path)
    original = Settings(
        user_display_name="Ann",
        system_prompt="be brief",
        claude_api_key="placeholder",
        provider="claude",
        model="claude-3-opus-20240229",
        store_chat_history=False,
        theme_id=2,
    )
    manager.save(original)
    assert manager.load() == original


def test_saved_keys_are_sorted(tmp_path):
    path = tmp_path / "cfg.json"
    ConfigManager(path).save(Settings())
    data = json.loads(path.read_text(encoding="utf-8"))
    assert list(data) == sorted(data)
    assert data["provider"] == "xai"


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError) as excinfo:
        ConfigManager(tmp_path / "absent.json").load()
    assert excinfo.value.kind == ConfigError.FILE_NOT_FOUND


def test_invalid_json(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError) as excinfo:
        ConfigManager(path).load()
    assert excinfo.value.kind == ConfigError.JSON_PARSE_ERROR


def test_wrong_type_is_read_error(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text('{"provider": 5}', encoding="utf-8")
    with pytest.raises(ConfigError) as excinfo:
        ConfigManager(path).load()
    assert excinfo.value.kind == ConfigError.READ_ERROR


def test_defaults_for_empty_object(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text("{}", encoding="utf-8")
    settings = ConfigManager(path).load()
    assert settings.user_display_name == "User"
    assert settings.provider == "xai"
    assert settings.model == "grok-3-beta"
    assert settings.store_chat_history is True


def test_model_default_for_non_xai_provider(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text('{"provider": "openai"}', encoding="utf-8")
    assert ConfigManager(path).load().model == "claude"


def test_write_error_on_directory(tmp_path):
    with pytest.raises(ConfigError) as excinfo:
        ConfigManager(tmp_path).save(Settings())
    assert excinfo.value.kind == ConfigError.WRITE_ERROR