"""Thread-safe store of chat messages with an append-only history log."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from pathlib import Path


class Sender(Enum):
    USER = "USER"
    AI = "AI"


@dataclass(frozen=True)
class ChatMessage:
    """One message in the conversation."""

    sender: Sender
    content: str


class MessageHandler:
    """Holds the conversation and logs every change to a history file."""

    def __init__(self, log_path: str | Path | None = "chat_history.log") -> None:
        self._lock = threading.RLock()
        self._messages: deque[ChatMessage] = deque()
        self._log_path = None if log_path is None else str(log_path)

    def _log(self, sender: Sender, text: str) -> None:
        if self._log_path is None:
            return
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        try:
            with open(self._log_path, "a", encoding="utf-8") as handle:
                handle.write(f"[{timestamp}] [{sender.value}] {text}\n")
        except OSError:
            pass

    def push_message(self, msg: ChatMessage) -> None:
        """Append a message and record it in the log."""
        with self._lock:
            self._messages.append(msg)
            self._log(msg.sender, msg.content)

    def get_messages(self, offset: int = 0, count: int = 50) -> list[ChatMessage]:
        """Return up to ``count`` messages ending ``offset`` messages from the newest."""
        with self._lock:
            total = len(self._messages)
            start = max(0, total - offset - count)
            end = max(0, total - offset)
            return list(self._messages)[start:end]

    def message_count(self) -> int:
        with self._lock:
            return len(self._messages)

    def append_to_last_ai_message(self, chunk: str, is_complete: bool = False) -> None:
        """Extend the newest message if it is from the AI; otherwise do nothing."""
        with self._lock:
            if not self._messages or self._messages[-1].sender is not Sender.AI:
                return
            last = self._messages[-1]
            self._messages[-1] = replace(last, content=last.content + chunk)
            self._log(Sender.AI, f"(chunk append) {chunk}")
            if is_complete:
                self.log_complete_ai_message()

    def log_complete_ai_message(self) -> None:
        """Log the full text of the newest message if it is from the AI."""
        with self._lock:
            if self._messages and self._messages[-1].sender is Sender.AI:
                self._log(Sender.AI, f"(complete message) {self._messages[-1].content}")

    def clear(self) -> None:
        """Remove all messages."""
        with self._lock:
            self._messages.clear()