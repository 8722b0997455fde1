"""User-editable chatbot settings."""

from __future__ import annotations

from dataclasses import dataclass

from termchat.providers import ProviderRegistry


@dataclass
class Settings:
    """All persisted user settings."""

    user_display_name: str = ""
    system_prompt: str = ""
    xai_api_key: str = ""
    claude_api_key: str = ""
    openai_api_key: str = ""
    provider: str = "xai"
    model: str = "grok-3-beta"
    store_chat_history: bool = True
    theme_id: int = 0

    def get_display_provider(self) -> str:
        """Return the display name of the current provider."""
        return ProviderRegistry.instance().display_name(self.provider)

    def get_api_key(self) -> str:
        """Return the API key that belongs to the current provider."""
        field = ProviderRegistry.instance().api_key_field(self.provider)
        keys = {
            "xai_api_key": self.xai_api_key,
            "claude_api_key": self.claude_api_key,
            "openai_api_key": self.openai_api_key,
        }
        return keys.get(field, "")

    def initialize_defaults(self) -> None:
        """Reset the model to the current provider's default."""
        self.model = ProviderRegistry.instance().default_model(self.provider)