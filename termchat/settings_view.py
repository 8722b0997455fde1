"""Rendering of the settings screen."""

from __future__ import annotations

import curses
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from termchat.config import ConfigManager
from termchat.settings import Settings

NAVIGATION_HINT = "Use Arrow keys to navigate, Enter to edit, ESC to exit"
EDIT_HINT = "Type to edit, Enter to save, ESC to cancel"
_NOT_SET = "<not set>"
_HIDDEN = "<hidden>"


class _Field(IntEnum):
    DISPLAY_NAME = 0
    SYSTEM_PROMPT = 1
    XAI_API_KEY = 2
    CLAUDE_API_KEY = 3
    OPENAI_API_KEY = 4
    PROVIDER = 5
    MODEL = 6
    STORE_HISTORY = 7
    THEME = 8


@dataclass(frozen=True)
class OptionRow:
    """One line of the settings screen."""

    label: str
    value: str
    selected: bool
    editing: bool


class SettingsView:
    """Shows the current settings, the selected option and any edit in progress."""

    def __init__(self, settings: Settings, config_manager: ConfigManager | None = None) -> None:
        self.settings = settings
        self.config_manager = config_manager
        self.selected_option = 0
        self.in_edit_mode = False
        self.edit_buffer = ""
        self._visible = False

    def _label_and_value(self, field: _Field, editing: bool) -> tuple[str, str]:
        s = self.settings
        editable = {
            _Field.DISPLAY_NAME: ("Display Name", s.user_display_name),
            _Field.SYSTEM_PROMPT: ("System Prompt", s.system_prompt),
            _Field.XAI_API_KEY: ("xAI API Key", _HIDDEN if s.xai_api_key else _NOT_SET),
            _Field.CLAUDE_API_KEY: (
                "Claude API Key",
                _HIDDEN if s.claude_api_key else _NOT_SET,
            ),
            _Field.OPENAI_API_KEY: (
                "OpenAI API Key",
                _HIDDEN if s.openai_api_key else _NOT_SET,
            ),
            _Field.MODEL: ("Model", s.model),
        }
        if field in editable:
            label, value = editable[field]
            return label, self.edit_buffer if editing else value
        if field is _Field.STORE_HISTORY:
            return "Store Chat History", "Yes" if s.store_chat_history else "No"
        if field is _Field.THEME:
            return "Theme", str(s.theme_id)
        return "", ""

    def option_rows(self) -> list[OptionRow]:
        """Return the rows shown, in screen order."""
        rows = []
        for field in _Field:
            selected = self.selected_option == field
            editing = self.in_edit_mode and selected
            label, value = self._label_and_value(field, editing)
            rows.append(OptionRow(label, value, selected, editing))
        return rows

    def draw(self, win: Any) -> None:
        """Draw the settings screen into ``win``."""
        height, _ = win.getmaxyx()
        win.erase()
        for row, option in enumerate(self.option_rows(), start=2):
            _draw_option(win, row, option)
        win.box()
        _put(win, height - 4, 2, NAVIGATION_HINT)
        if self.in_edit_mode:
            _put(win, height - 3, 2, EDIT_HINT)
        win.refresh()

    def is_visible(self) -> bool:
        return self._visible

    def set_visible(self, visible: bool) -> None:
        self._visible = visible


def _put(win: Any, y: int, x: int, text: str, attr: int = 0) -> None:
    try:
        if attr:
            win.addstr(y, x, text, attr)
        else:
            win.addstr(y, x, text)
    except curses.error:
        pass


def _draw_option(win: Any, row: int, option: OptionRow) -> None:
    if not option.label:
        return
    marker = "> " if option.selected else "  "
    attr = curses.A_REVERSE if option.selected else 0
    if option.editing:
        attr |= curses.A_UNDERLINE
    _put(win, row, 2, f"{marker}{option.label}: {option.value}", attr)