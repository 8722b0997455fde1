"""Client for the xAI chat completions API with simulated streaming."""

from __future__ import annotations

import json
import threading
import time
from collections.abc import Sequence
from typing import Any

from termchat.clients.base import (
    BaseAIClient,
    ChunkCallback,
    DoneCallback,
    ErrorCallback,
    Message,
)
from termchat.errors import ApiError, ApiErrorInfo

API_URL = "https://api.x.ai/v1/chat/completions"
FALLBACK_MODEL = "grok-2"
MIN_CHUNK_SIZE = 40


def split_chunks(text: str, min_chunk_size: int = MIN_CHUNK_SIZE) -> list[str]:
    """Cut text into pieces of about ``min_chunk_size``, preferring to end after a space."""
    chunks: list[str] = []
    pos = 0
    while pos < len(text):
        end = pos + min_chunk_size
        if end >= len(text):
            end = len(text)
        else:
            space = text.rfind(" ", 0, end + 1)
            if space > pos:
                end = space + 1
        chunks.append(text[pos:end])
        pos = end
    return chunks


def clean_content(raw: str) -> str:
    """Drop control characters, keeping printable ASCII and all non-ASCII text."""
    return "".join(ch for ch in raw if " " <= ch <= "~" or ord(ch) >= 0x80)


def _parse_reply(body: bytes) -> str:
    resp = json.loads(body)
    if isinstance(resp, dict):
        choices = resp.get("choices")
        if isinstance(choices, list) and choices:
            content = choices[0]["message"]["content"]
            if not isinstance(content, str):
                raise TypeError("message content is not a string")
            return clean_content(content)
        if "error" in resp:
            raise ApiErrorInfo(
                ApiError.MALFORMED_RESPONSE, BaseAIClient._compact_json(resp["error"])
            )
    raise ApiErrorInfo(ApiError.MALFORMED_RESPONSE, "Malformed response")


class XAIClient(BaseAIClient):
    """Talks to xAI and replays the reply as a sequence of chunks."""

    chunk_delay = 0.04

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
            "model": model or default_model or FALLBACK_MODEL,
            "messages": list(messages),
        }
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        body = self._post(API_URL, headers, request, ApiError.NETWORK_ERROR)
        try:
            return _parse_reply(body)
        except (ValueError, TypeError, KeyError, IndexError) as exc:
            raise ApiErrorInfo(ApiError.JSON_PARSE_ERROR, str(exc)) from exc

    def send_prompt(self, prompt: str, model: str = "") -> str:
        """Send the history followed by ``prompt`` and return the reply."""
        return self.send_message(self.build_message_history(prompt), model)

    def send_message_stream(
        self,
        prompt: str,
        model: str,
        on_chunk: ChunkCallback,
        on_done: DoneCallback,
        on_error: ErrorCallback,
    ) -> threading.Thread:
        """Send a prompt in the background and deliver the reply in chunks."""

        def worker() -> None:
            try:
                reply = self.send_prompt(prompt, model)
            except ApiErrorInfo as error:
                on_error(error)
                return
            chunks = split_chunks(reply)
            for number, chunk in enumerate(chunks, start=1):
                on_chunk(chunk, number == len(chunks))
                time.sleep(self.chunk_delay)
            on_done()

        thread = threading.Thread(target=worker, daemon=True)
        thread.start()
        return thread

    def available_models(self) -> list[str]:
        return ["xai-default", "xai-advanced"]