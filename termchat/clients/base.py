"""Shared state and behaviour of the AI provider clients."""

from __future__ import annotations

import json
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import Any

import requests

from termchat.errors import ApiError, ApiErrorInfo

Message = dict[str, str]
ChunkCallback = Callable[[str, bool], None]
DoneCallback = Callable[[], None]
ErrorCallback = Callable[[ApiErrorInfo], None]


class BaseAIClient(ABC):
    """Holds credentials, model choice and conversation history for a provider."""

    timeout: float | None = None

    def __init__(self, model: str = "") -> None:
        self._lock = threading.Lock()
        self._api_key = ""
        self._system_prompt = ""
        self._model = model
        self._history: list[Message] = []

    def set_api_key(self, key: str) -> None:
        with self._lock:
            self._api_key = key

    def set_system_prompt(self, prompt: str) -> None:
        with self._lock:
            self._system_prompt = prompt

    def set_model(self, model: str) -> None:
        with self._lock:
            self._model = model

    def clear_history(self) -> None:
        """Forget the whole conversation."""
        with self._lock:
            self._history.clear()

    def push_user_message(self, content: str) -> None:
        with self._lock:
            self._history.append({"role": "user", "content": content})

    def push_assistant_message(self, content: str) -> None:
        with self._lock:
            self._history.append({"role": "assistant", "content": content})

    @abstractmethod
    def build_message_history(self, latest_user_msg: str = "") -> list[Message]:
        """Return the messages to send, optionally ending with a new user message."""

    @abstractmethod
    def send_message(self, messages: Sequence[Message], model: str = "") -> str:
        """Send messages and return the reply text; raise ApiErrorInfo on failure."""

    def send_message_stream(
        self,
        prompt: str,
        model: str,
        on_chunk: ChunkCallback,
        on_done: DoneCallback,
        on_error: ErrorCallback,
    ) -> threading.Thread:
        """Send a prompt in the background, delivering the reply as one final chunk."""

        def worker() -> None:
            messages = self.build_message_history(prompt)
            try:
                reply = self.send_message(messages, model)
            except ApiErrorInfo as error:
                on_error(error)
                return
            on_chunk(reply, True)
            on_done()

        thread = threading.Thread(target=worker, daemon=True)
        thread.start()
        return thread

    def _history_copy(self) -> list[Message]:
        return [dict(message) for message in self._history]

    def _request_state(self) -> tuple[str, str, str]:
        """Return (api_key, system_prompt, model), raising if no key is set."""
        with self._lock:
            if not self._api_key:
                raise ApiErrorInfo(
                    ApiError.API_KEY_NOT_SET, "API key is required but not set."
                )
            return self._api_key, self._system_prompt, self._model

    @staticmethod
    def _compact_json(value: Any) -> str:
        return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)

    def _post(
        self, url: str, headers: dict[str, str], body: dict[str, Any], failure: ApiError
    ) -> bytes:
        """POST a JSON body and return the raw response body."""
        payload = self._compact_json(body).encode("utf-8")
        try:
            response = requests.post(url, data=payload, headers=headers, timeout=self.timeout)
        except requests.RequestException as exc:
            raise ApiErrorInfo(failure, str(exc)) from exc
        return response.content