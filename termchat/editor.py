"""Single-line input editor with history."""

from __future__ import annotations

import curses

_BACKSPACE_KEYS = frozenset({127, 8, curses.KEY_BACKSPACE})


class CommandLineEditor:
    """Editable input line with cursor movement and a history of entries."""

    def __init__(self) -> None:
        self._buffer = ""
        self._history: list[str] = []
        self._history_index = -1
        self._cursor_pos = 0

    def handle_input(self, ch: int) -> None:
        """Apply one key code to the buffer."""
        if ch == curses.KEY_LEFT:
            if self._cursor_pos > 0:
                self._cursor_pos -= 1
        elif ch == curses.KEY_RIGHT:
            if self._cursor_pos < len(self._buffer):
                self._cursor_pos += 1
        elif ch == curses.KEY_HOME:
            self._cursor_pos = 0
        elif ch == curses.KEY_END:
            self._cursor_pos = len(self._buffer)
        elif ch == curses.KEY_DC:
            pos = self._cursor_pos
            if pos < len(self._buffer):
                self._buffer = self._buffer[:pos] + self._buffer[pos + 1:]
        elif ch in _BACKSPACE_KEYS:
            pos = self._cursor_pos
            if pos > 0 and self._buffer:
                self._buffer = self._buffer[:pos - 1] + self._buffer[pos:]
                self._cursor_pos -= 1
        elif 32 <= ch <= 126:
            pos = self._cursor_pos
            self._buffer = self._buffer[:pos] + chr(ch) + self._buffer[pos:]
            self._cursor_pos += 1
        self._cursor_pos = max(0, min(len(self._buffer), self._cursor_pos))

    def current_line(self) -> str:
        """Return the text being edited."""
        return self._buffer

    def clear(self) -> None:
        """Empty the buffer and reset cursor and history position."""
        self._buffer = ""
        self._cursor_pos = 0
        self._history_index = -1

    def add_history(self, line: str) -> None:
        """Record a non-empty line in the history."""
        if line:
            self._history.append(line)
            self._history_index = len(self._history)

    def history_up(self) -> str:
        """Step back in the history and return the resulting buffer."""
        if not self._history or self._history_index <= 0:
            return self._buffer
        self._history_index -= 1
        self._buffer = self._history[self._history_index]
        return self._buffer

    def history_down(self) -> str:
        """Step forward in the history and return the resulting buffer."""
        if not self._history or self._history_index >= len(self._history) - 1:
            return self._buffer
        self._history_index += 1
        self._buffer = self._history[self._history_index]
        return self._buffer

    def history(self) -> list[str]:
        """Return a copy of the recorded lines, oldest first."""
        return list(self._history)

    def cursor_pos(self) -> int:
        """Return the cursor position within the buffer."""
        return self._cursor_pos

    def set_cursor_pos(self, pos: int) -> None:
        """Move the cursor, clamped to the buffer bounds."""
        self._cursor_pos = max(0, min(len(self._buffer), pos))