"""Curses front end: chat transcript, input line and settings window."""

from __future__ import annotations

import curses
from collections.abc import Callable, Sequence
from typing import Any

from termchat.textwrap_utf8 import display_width, word_wrap

INPUT_HEIGHT = 3
WAITING_TEXT = "[Waiting for AI response...]"
_PREFIXES = ("User: ", "AI: ")

WindowFactory = Callable[[int, int, int, int], Any]


def _split_prefix(message: str) -> tuple[str, str]:
    for prefix in _PREFIXES:
        if message.startswith(prefix):
            return prefix, message[len(prefix):]
    return "", message


def wrap_chat_lines(messages: Sequence[str], width: int) -> list[str]:
    """Wrap transcript lines for a window ``width`` columns wide.

    A known sender prefix stays on the first line and continuation lines are
    indented to line up after it. Each message is followed by a blank line.
    """
    lines: list[str] = []
    for message in messages:
        prefix, content = _split_prefix(message)
        prefix_width = display_width(prefix)
        wrapped = word_wrap(content, width - 2 - prefix_width, prefix_width)
        if wrapped:
            lines.append(prefix + wrapped[0])
            lines.extend(wrapped[1:])
        lines.append("")
    return lines


def visible_range(total_lines: int, display_lines: int, scroll_offset: int) -> tuple[int, int]:
    """Return the [start, end) slice of lines shown, scrolled up by ``scroll_offset``."""
    start = max(0, total_lines - display_lines - scroll_offset)
    end = min(start + display_lines, total_lines)
    return start, max(start, end)


def _put(win: Any, y: int, x: int, text: str, attr: int = 0) -> None:
    """Write text, ignoring the error curses raises when text hits the edge."""
    try:
        if attr:
            win.addstr(y, x, text, attr)
        else:
            win.addstr(y, x, text)
    except curses.error:
        pass


class CursesUI:
    """Owns the chat, input and settings windows on a curses screen.

    Without a screen, the terminal is initialised here and restored by
    ``close``; a screen passed in is left for the caller to restore.
    """

    def __init__(self, stdscr: Any = None, window_factory: WindowFactory | None = None) -> None:
        self._owns_screen = stdscr is None
        if stdscr is None:
            stdscr = curses.initscr()
            curses.cbreak()
            curses.noecho()
            stdscr.keypad(True)
            try:
                curses.curs_set(1)
            except curses.error:
                pass
            try:
                curses.start_color()
            except curses.error:
                pass
        self._stdscr = stdscr
        self._new_window = window_factory or curses.newwin
        self._chat_win: Any = None
        self._input_win: Any = None
        self._settings_win: Any = None
        self._settings_visible = False
        self.theme_id = 0
        self._closed = False
        self._init_windows()
        self._stdscr.refresh()

    def __enter__(self) -> CursesUI:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def settings_win(self) -> Any:
        """The full-screen window the settings view draws into."""
        return self._settings_win

    @property
    def settings_visible(self) -> bool:
        return self._settings_visible

    def _init_windows(self) -> None:
        rows, cols = self._stdscr.getmaxyx()
        chat = self._new_window(rows - INPUT_HEIGHT, cols, 0, 0)
        entry = self._new_window(INPUT_HEIGHT, cols, rows - INPUT_HEIGHT, 0)
        settings = self._new_window(rows, cols, 0, 0)
        if chat is None or entry is None or settings is None:
            self.close()
            raise RuntimeError("Failed to create curses windows")
        self._chat_win, self._input_win, self._settings_win = chat, entry, settings

    def _destroy_windows(self) -> None:
        self._chat_win = self._input_win = self._settings_win = None

    def draw_chat_window(
        self, messages: Sequence[str], scroll_offset: int, waiting_for_ai: bool = False
    ) -> int:
        """Draw the transcript and return the number of wrapped lines."""
        win = self._chat_win
        win.erase()
        maxy, maxx = win.getmaxyx()
        lines = wrap_chat_lines(messages, maxx)
        start, end = visible_range(len(lines), maxy - 2, scroll_offset)
        row = 1
        for text in lines[start:end]:
            if text:
                _put(win, row, 1, text)
            row += 1
        if waiting_for_ai and row < maxy - 1:
            _put(win, maxy - 2, 2, WAITING_TEXT)
        win.box()
        win.refresh()
        return len(lines)

    def draw_input_window(self, text: str, cursor_pos: int) -> None:
        """Draw the input line and place the cursor within it."""
        win = self._input_win
        win.erase()
        win.box()
        _put(win, 1, 1, text)
        try:
            win.move(1, 1 + cursor_pos)
        except curses.error:
            pass
        win.refresh()

    def draw_settings_panel(self, visible: bool) -> None:
        """Show or hide the bare settings window."""
        self._settings_visible = visible
        if not visible:
            return
        win = self._settings_win
        win.erase()
        win.box()
        _put(win, 1, 2, "Settings Panel")
        win.refresh()

    def refresh_all(self) -> None:
        self._chat_win.refresh()
        self._input_win.refresh()
        if self._settings_visible:
            self._settings_win.refresh()

    def toggle_settings_panel(self) -> None:
        self.draw_settings_panel(not self._settings_visible)

    def set_theme(self, theme_id: int) -> None:
        self.theme_id = theme_id

    def handle_resize(self) -> None:
        """Recreate the windows for the current terminal size."""
        if self._owns_screen:
            try:
                curses.update_lines_cols()
            except curses.error:
                pass
        self._destroy_windows()
        self._init_windows()
        self.refresh_all()

    def show_error(self, message: str) -> None:
        rows, _ = self._stdscr.getmaxyx()
        _put(self._stdscr, rows - 2, 2, f"Error: {message}")
        self._stdscr.refresh()

    def close(self) -> None:
        """Release the windows and restore the terminal if it was set up here."""
        if self._closed:
            return
        self._closed = True
        self._destroy_windows()
        if self._owns_screen:
            curses.endwin()