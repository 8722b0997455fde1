"""Registry of the supported AI providers."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class ProviderConfig:
    """Static configuration for one AI provider."""

    id: str
    display_name: str
    default_model: str
    models: tuple[str, ...]
    api_key_field: str


class ProviderRegistry:
    """Process-wide registry of provider configurations."""

    _instance: ProviderRegistry | None = None

    def __init__(self) -> None:
        providers = [
            ProviderConfig(
                "xai", "xAI", "grok-3-beta",
                ("grok-3-beta", "grok-1", "grok-1.5"), "xai_api_key",
            ),
            ProviderConfig(
                "claude", "Claude", "claude",
                ("claude", "claude-3-opus-20240229", "claude-3-sonnet-20240229"),
                "claude_api_key",
            ),
            ProviderConfig(
                "openai", "OpenAI", "gpt-4o",
                ("gpt-4o", "gpt-4", "gpt-3.5-turbo"), "openai_api_key",
            ),
        ]
        self._providers = MappingProxyType({p.id: p for p in providers})

    @classmethod
    def instance(cls) -> ProviderRegistry:
        """Return the shared registry."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def get(self, provider_id: str) -> ProviderConfig:
        """Return the configuration of a provider, or raise KeyError."""
        try:
            return self._providers[provider_id]
        except KeyError:
            raise KeyError(f"Provider not found: {provider_id}") from None

    def provider_ids(self) -> list[str]:
        """Return all provider ids in sorted order."""
        return sorted(self._providers)

    def api_key_field(self, provider_id: str) -> str:
        return self.get(provider_id).api_key_field

    def display_name(self, provider_id: str) -> str:
        return self.get(provider_id).display_name

    def default_model(self, provider_id: str) -> str:
        return self.get(provider_id).default_model

    def models(self, provider_id: str) -> list[str]:
        return list(self.get(provider_id).models)