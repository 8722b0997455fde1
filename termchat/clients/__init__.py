"""Clients for the xAI, Claude and OpenAI chat APIs."""

__all__ = ["base", "claude", "openai", "xai"]