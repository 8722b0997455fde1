"""Client for the Anthropic messages API."""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from termchat.clients.base import BaseAIClient, Message
from termchat.errors import ApiError, ApiErrorInfo

API_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"
MAX_TOKENS = 1024


def _block_text(block: Any) -> str:
    if isinstance(block, dict) and "text" in block:
        text = block["text"]
        if not isinstance(text, str):
            raise TypeError("content block text is not a string")
        return text
    return ""


def _parse_reply(body: bytes) -> str:
    resp = json.loads(body)
    if isinstance(resp, dict):
        content = resp.get("content")
        if isinstance(content, list) and content:
            return "".join(_block_text(block) for block in content)
        if "error" in resp:
            raise ApiErrorInfo(
                ApiError.MALFORMED_RESPONSE, BaseAIClient._compact_json(resp["error"])
            )
    raise ApiErrorInfo(ApiError.MALFORMED_RESPONSE, "Malformed response")


class ClaudeAIClient(BaseAIClient):
    """Talks to Claude; the system prompt travels outside the message list."""

    def __init__(self) -> None:
        super().__init__(model="claude")

    def build_message_history(self, latest_user_msg: str = "") -> list[Message]:
        with self._lock:
            messages = [m for m in self._history_copy() if m.get("role") != "system"]
        if latest_user_msg:
            messages.append({"role": "user", "content": latest_user_msg})
        return messages

    def send_message(self, messages: Sequence[Message], model: str = "") -> str:
        api_key, system_prompt, default_model = self._request_state()
        request: dict[str, Any] = {
            "model": model or default_model,
            "max_tokens": MAX_TOKENS,
            "messages": list(messages),
        }
        if system_prompt:
            request["system"] = system_prompt
        headers = {
            "x-api-key": api_key,
            "anthropic-version": ANTHROPIC_VERSION,
            "content-type": "application/json",
        }
        body = self._post(API_URL, headers, request, ApiError.NETWORK_ERROR)
        try:
            return _parse_reply(body)
        except (ValueError, TypeError, KeyError) as exc:
            raise ApiErrorInfo(ApiError.JSON_PARSE_ERROR, str(exc)) from exc