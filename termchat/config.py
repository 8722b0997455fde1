"""Loading and saving of settings as JSON."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from termchat.settings import Settings

_KEY_FIELDS = ("xai_api_key", "claude_api_key", "openai_api_key")


class ConfigError(Exception):
    """Raised when settings cannot be loaded or saved."""

    FILE_NOT_FOUND = "file_not_found"
    READ_ERROR = "read_error"
    WRITE_ERROR = "write_error"
    JSON_PARSE_ERROR = "json_parse_error"
    UNKNOWN = "unknown"

    def __init__(self, kind: str, detail: str = "") -> None:
        super().__init__(f"{kind}: {detail}" if detail else kind)
        self.kind = kind
        self.detail = detail


def _value(data: dict[str, Any], key: str, default: Any) -> Any:
    """Read a key with a default, raising if the stored value has the wrong type."""
    if key not in data:
        return default
    value = data[key]
    if isinstance(default, bool):
        if isinstance(value, bool):
            return value
    elif isinstance(default, int):
        if isinstance(value, (bool, int, float)):
            return int(value)
    elif isinstance(default, str):
        if isinstance(value, str):
            return value
    raise ConfigError(ConfigError.READ_ERROR, f"wrong type for {key!r}")


class ConfigManager:
    """Reads and writes the settings file."""

    def __init__(self, config_path: str | Path = "chatbot_config.json") -> None:
        self.config_path = str(config_path)

    def load(self) -> Settings:
        """Load settings, filling in defaults for missing keys."""
        try:
            handle = open(self.config_path, encoding="utf-8")
        except OSError as exc:
            raise ConfigError(ConfigError.FILE_NOT_FOUND, str(exc)) from exc
        with handle:
            try:
                data = json.load(handle)
            except ValueError as exc:
                raise ConfigError(ConfigError.JSON_PARSE_ERROR, str(exc)) from exc
            except OSError as exc:
                raise ConfigError(ConfigError.READ_ERROR, str(exc)) from exc
        if not isinstance(data, dict):
            raise ConfigError(ConfigError.READ_ERROR, "top-level value is not an object")

        provider = _value(data, "provider", "xai")
        keys = {field: _value(data, field, "") for field in _KEY_FIELDS}
        return Settings(
            user_display_name=_value(data, "user_display_name", "User"),
            system_prompt=_value(data, "system_prompt", ""),
            provider=provider,
            model=_value(data, "model", "grok-3-beta" if provider == "xai" else "claude"),
            store_chat_history=_value(data, "store_chat_history", True),
            theme_id=_value(data, "theme_id", 0),
            **keys,
        )

    def save(self, settings: Settings) -> None:
        """Write settings as indented JSON."""
        document = {
            "user_display_name": settings.user_display_name,
            "system_prompt": settings.system_prompt,
            "xai_api_key": settings.xai_api_key,
            "claude_api_key": settings.claude_api_key,
            "openai_api_key": settings.openai_api_key,
            "provider": settings.provider,
            "model": settings.model,
            "store_chat_history": settings.store_chat_history,
            "theme_id": settings.theme_id,
        }
        text = json.dumps(document, indent=2, sort_keys=True, ensure_ascii=False)
        try:
            with open(self.config_path, "w", encoding="utf-8") as handle:
                handle.write(text)
        except OSError as exc:
            raise ConfigError(ConfigError.WRITE_ERROR, str(exc)) from exc