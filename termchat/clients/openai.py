"""Client for the OpenAI chat completions API."""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from termchat.clients.base import BaseAIClient, Message
from termchat.errors import ApiError, ApiErrorInfo

API_URL = "https://api.openai.com/v1/chat/completions"
MAX_TOKENS = 1024


def _parse_reply(body: bytes) -> str:
    resp = json.loads(body)
    if isinstance(resp, dict):
        choices = resp.get("choices")
        if isinstance(choices, list) and choices:
            first = choices[0]
            message = first.get("message") if isinstance(first, dict) else None
            if isinstance(message, dict) and "content" in message:
                content = message["content"]
                if not isinstance(content, str):
                    raise TypeError("message content is not a string")
                return content
        elif "error" in resp:
            raise ApiErrorInfo(
                ApiError.MALFORMED_RESPONSE, BaseAIClient._compact_json(resp["error"])
            )
    raise ApiErrorInfo(ApiError.MALFORMED_RESPONSE, "Malformed response")


class OpenAIClient(BaseAIClient):
    """Talks to OpenAI; the system prompt leads the message list."""

    def __init__(self) -> None:
        super().__init__(model="gpt-4o")

    def build_message_history(self, latest_user_msg: str = "") -> list[Message]:
        with self._lock:
            messages: list[Message] = []
            if self._system_prompt:
                messages.append({"role": "system", "content": self._system_prompt})
            messages.extend(self._history_copy())
        if latest_user_msg:
            messages.append({"role": "user", "content": latest_user_msg})
        return messages

    def send_message(self, messages: Sequence[Message], model: str = "") -> str:
        api_key, _, default_model = self._request_state()
        request: dict[str, Any] = {
            "model": model or default_model,
            "messages": list(messages),
            "max_tokens": MAX_TOKENS,
        }
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        body = self._post(API_URL, headers, request, ApiError.CURL_REQUEST_FAILED)
        try:
            return _parse_reply(body)
        except (ValueError, TypeError, KeyError) as exc:
            raise ApiErrorInfo(ApiError.MALFORMED_RESPONSE, str(exc)) from exc