"""The chatbot application: event loop, key handling and provider dispatch."""

from __future__ import annotations

import argparse
import curses
import locale
import threading
from collections.abc import Iterable, Sequence
from typing import Any

from termchat import signals
from termchat.clients.base import BaseAIClient
from termchat.clients.claude import ClaudeAIClient
from termchat.clients.openai import OpenAIClient
from termchat.clients.xai import XAIClient
from termchat.config import ConfigError, ConfigManager
from termchat.editor import CommandLineEditor
from termchat.errors import ApiErrorInfo
from termchat.logger import LogLevel, RichLogger, get_logger
from termchat.messages import ChatMessage, MessageHandler, Sender
from termchat.providers import ProviderRegistry
from termchat.settings import Settings
from termchat.settings_view import SettingsView
from termchat.ui import CursesUI

GETCH_TIMEOUT_MS = 100
PAGE_SCROLL = 5

KEY_ESCAPE = 27
KEY_NEWLINE = 10
KEY_TAB = 9
KEY_CTRL_X = 24
_NO_KEY = -1


def render_lines(messages: Iterable[ChatMessage], user_display_name: str) -> list[str]:
    """Turn messages into transcript lines, prefixing each with its sender.

    Continuation lines of a multi-line message are indented by the prefix
    length; an empty message produces no lines.
    """
    lines: list[str] = []
    for msg in messages:
        prefix = f"{user_display_name}: " if msg.sender is Sender.USER else "AI: "
        content_lines = msg.content.split("\n") if msg.content else []
        if msg.content.endswith("\n"):
            content_lines.pop()
        indent = " " * len(prefix)
        for number, line in enumerate(content_lines):
            lines.append((prefix if number == 0 else indent) + line)
    return lines


class ChatbotApp:
    """Ties together settings, the transcript, the input editor and the AI clients."""

    def __init__(
        self,
        config_manager: ConfigManager | None = None,
        message_handler: MessageHandler | None = None,
        logger: RichLogger | None = None,
        ui: Any = None,
        screen: Any = None,
    ) -> None:
        self.config_manager = config_manager or ConfigManager("chatbot_config.json")
        self.messages = message_handler if message_handler is not None else MessageHandler()
        self._logger = logger if logger is not None else get_logger()
        self.ui = ui
        self._screen = screen
        self.editor = CommandLineEditor()
        self.scroll_offset = 0
        self.running = True
        self.waiting_for_ai = False
        self.needs_redraw = False
        self._exited = False

        path = self.config_manager.config_path
        try:
            self.settings = self.config_manager.load()
        except ConfigError as error:
            self.settings = Settings()
            self._logger.log(
                LogLevel.ERROR, f"Failed to load settings from {path}: Error {error.kind}"
            )
        else:
            self._logger.log(LogLevel.INFO, f"Settings loaded successfully from {path}")

        self.settings_view = SettingsView(self.settings, self.config_manager)
        self.settings_view.set_visible(False)

        registry = ProviderRegistry.instance()
        self.clients: dict[str, BaseAIClient] = {
            "xai": XAIClient(),
            "claude": ClaudeAIClient(),
            "openai": OpenAIClient(),
        }
        keys = {
            "xai": self.settings.xai_api_key,
            "claude": self.settings.claude_api_key,
            "openai": self.settings.openai_api_key,
        }
        for provider_id, client in self.clients.items():
            client.set_api_key(keys[provider_id])
            client.set_system_prompt(self.settings.system_prompt)
            client.set_model(registry.default_model(provider_id))
            client.clear_history()

    def _mark_done(self) -> None:
        self.waiting_for_ai = False
        self.needs_redraw = True

    def _request_in_background(
        self, client: BaseAIClient, error_label: str, model: str
    ) -> threading.Thread:
        messages = client.build_message_history()

        def worker() -> None:
            try:
                reply = client.send_message(messages, model)
            except ApiErrorInfo as error:
                self.messages.append_to_last_ai_message(
                    f"[{error_label} {int(error.code)}: {error.message}]", True
                )
            else:
                self.messages.append_to_last_ai_message(reply, True)
                client.push_assistant_message(reply)
            self._mark_done()

        thread = threading.Thread(target=worker, daemon=True)
        thread.start()
        return thread

    def _stream_xai(self, client: BaseAIClient, prompt: str, model: str) -> threading.Thread:
        def on_chunk(chunk: str, is_last: bool) -> None:
            self.messages.append_to_last_ai_message(chunk, is_last)
            if is_last:
                client.push_assistant_message(chunk)
            self.needs_redraw = True

        def on_error(error: ApiErrorInfo) -> None:
            self.messages.append_to_last_ai_message(
                f"[Error {int(error.code)}: {error.message}]", True
            )
            self._logger.log(
                LogLevel.ERROR, f"API Error: {int(error.code)} - {error.message}"
            )
            self._mark_done()

        return client.send_message_stream(prompt, model, on_chunk, self._mark_done, on_error)

    def submit(self, text: str) -> threading.Thread | None:
        """Send a line of user input to the current provider.

        Returns the background thread handling the reply, or None when nothing
        was sent.
        """
        if not text:
            return None
        self.messages.push_message(ChatMessage(Sender.USER, text))
        self.editor.add_history(text)
        self.editor.clear()
        self.waiting_for_ai = True
        self.needs_redraw = True
        self.messages.push_message(ChatMessage(Sender.AI, ""))

        provider = self.settings.provider
        model = self.settings.model
        client = self.clients.get(provider)
        if client is None:
            return None
        client.set_api_key(self.settings.get_api_key())
        client.set_model(model)
        client.push_user_message(text)
        if provider == "claude":
            return self._request_in_background(client, "Error", model)
        if provider == "openai":
            return self._request_in_background(client, "OpenAI Error", model)
        return self._stream_xai(client, text, model)

    def handle_key(self, ch: int) -> bool:
        """Apply one key press; return whether the screen needs redrawing."""
        self._logger.log(LogLevel.DEBUG, f"Key pressed: {ch}")
        if self.settings_view.is_visible():
            if ch == KEY_ESCAPE:
                self.settings_view.set_visible(False)
            else:
                self.needs_redraw = True
            return True

        if ch == curses.KEY_F2:
            self._logger.log(LogLevel.INFO, "F2 pressed, toggling settings panel")
            self.settings_view.set_visible(not self.settings_view.is_visible())
            self.needs_redraw = True
        elif ch == curses.KEY_UP:
            self.scroll_offset += 1
        elif ch == curses.KEY_DOWN:
            self.scroll_offset -= 1
        elif ch in (KEY_NEWLINE, curses.KEY_ENTER):
            self.submit(self.editor.current_line())
        elif ch == KEY_TAB:
            pass
        elif ch == curses.KEY_RESIZE:
            if self.ui is not None:
                self.ui.handle_resize()
        elif ch == curses.KEY_PPAGE:
            self.scroll_offset = max(0, self.scroll_offset + PAGE_SCROLL)
            return True
        elif ch == curses.KEY_NPAGE:
            self.scroll_offset = max(0, self.scroll_offset - PAGE_SCROLL)
            return True
        elif ch == KEY_CTRL_X:
            self.running = False
        else:
            self.editor.handle_input(ch)
            return True
        return False

    def _screen_rows(self) -> int:
        if self._screen is not None:
            return self._screen.getmaxyx()[0]
        return curses.LINES

    def draw(self) -> None:
        """Redraw either the settings screen or the transcript and input line."""
        if self.settings_view.is_visible():
            self.settings_view.draw(self.ui.settings_win)
            return
        count = self.messages.message_count()
        lines = render_lines(
            self.messages.get_messages(0, count), self.settings.user_display_name
        )
        total_lines = self.ui.draw_chat_window(lines, self.scroll_offset, self.waiting_for_ai)
        display_lines = self._screen_rows() - 2
        max_scroll = max(0, total_lines - display_lines)
        self.scroll_offset = max(0, min(self.scroll_offset, max_scroll))
        self.ui.draw_input_window(self.editor.current_line(), self.editor.cursor_pos())
        self.ui.refresh_all()

    def _loop(self, screen: Any) -> None:
        screen.timeout(GETCH_TIMEOUT_MS)
        last_count = self.messages.message_count()
        self.draw()
        while self.running:
            if signals.check_and_clear_resize():
                self.ui.handle_resize()
                self.needs_redraw = True
            ch = screen.getch()
            redraw = False
            count = self.messages.message_count()
            if count != last_count:
                redraw = True
                last_count = count
            if ch != _NO_KEY:
                redraw = self.handle_key(ch) or redraw
            if redraw or self.needs_redraw:
                self.draw()
                self.needs_redraw = False
        self.on_exit()

    def _run_on_screen(self, stdscr: Any) -> None:
        self._screen = stdscr
        self.ui = CursesUI(stdscr)
        try:
            self._loop(stdscr)
        finally:
            self.ui.close()

    def run(self) -> None:
        """Run the interactive loop until the user quits."""
        signals.setup(self.on_exit)
        if self.ui is None:
            curses.wrapper(self._run_on_screen)
        else:
            self._loop(self._screen)

    def on_exit(self) -> None:
        """Save settings and stop the loop; later calls do nothing."""
        if self._exited:
            return
        self._exited = True
        try:
            self.config_manager.save(self.settings)
        except ConfigError as error:
            self._logger.log(LogLevel.ERROR, f"Failed to save settings: {error}")
        self.running = False


def main(argv: Sequence[str] | None = None) -> int:
    """Start the terminal chatbot."""
    parser = argparse.ArgumentParser(prog="termchat", description="Terminal AI chat client.")
    parser.add_argument(
        "--config", default="chatbot_config.json", help="path of the settings file"
    )
    args = parser.parse_args(argv)
    locale.setlocale(locale.LC_ALL, "")
    app = ChatbotApp(config_manager=ConfigManager(args.config))
    app.run()
    return 0