"""Terminal chat client for xAI, Claude and OpenAI models, with a curses interface."""

__version__ = "0.1.0"