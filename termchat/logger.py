"""Structured, thread-safe logging to a file or the console."""

from __future__ import annotations

import functools
import inspect
import json
import sys
import threading
from datetime import datetime
from enum import IntEnum
from pathlib import Path


class LogLevel(IntEnum):
    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3
    CRITICAL = 4


_LEVEL_NAMES = {
    LogLevel.DEBUG: "DEBUG",
    LogLevel.INFO: "INFO",
    LogLevel.WARNING: "WARN",
    LogLevel.ERROR: "ERROR",
    LogLevel.CRITICAL: "CRIT",
}

_LEVEL_COLORS = {
    LogLevel.DEBUG: "\033[36m",
    LogLevel.INFO: "\033[32m",
    LogLevel.WARNING: "\033[33m",
    LogLevel.ERROR: "\033[31m",
    LogLevel.CRITICAL: "\033[41;37m",
}

_RESET = "\033[0m"


class RichLogger:
    """Logger that records caller location, as text or JSON lines."""

    def __init__(self, filename: str | Path = "", json_mode: bool = False) -> None:
        self._file = open(filename, "a", encoding="utf-8") if str(filename) else None
        self._lock = threading.Lock()
        self._level = LogLevel.DEBUG
        self._json_mode = json_mode

    def set_level(self, level: LogLevel) -> None:
        self._level = level

    def set_json_mode(self, json_mode: bool) -> None:
        self._json_mode = json_mode

    def log(self, level: LogLevel, msg: str) -> None:
        """Write one record if the level passes the threshold."""
        if level < self._level:
            return
        frame = inspect.currentframe()
        caller = frame.f_back if frame is not None else None
        file_name = caller.f_code.co_filename if caller else "?"
        line = caller.f_lineno if caller else 0
        function = caller.f_code.co_name if caller else "?"
        del frame, caller

        with self._lock:
            timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            name = _LEVEL_NAMES.get(level, "UNK")
            if self._json_mode:
                record = {
                    "timestamp": timestamp,
                    "level": name,
                    "file": file_name,
                    "line": line,
                    "function": function,
                    "message": msg,
                }
                output = json.dumps(
                    record, sort_keys=True, separators=(",", ":"), ensure_ascii=False
                ) + "\n"
                self._write(output)
            else:
                output = f"[{timestamp}] {name} {file_name}:{line} {function}() | {msg}\n"
                if self._file is None:
                    self._write(_LEVEL_COLORS.get(level, "") + output + _RESET)
                else:
                    self._write(output)

    def _write(self, text: str) -> None:
        stream = self._file if self._file is not None else sys.stdout
        stream.write(text)
        stream.flush()

    def close(self) -> None:
        """Close the log file, if any."""
        with self._lock:
            if self._file is not None:
                self._file.close()
                self._file = None


@functools.lru_cache(maxsize=None)
def get_logger() -> RichLogger:
    """Return the application-wide logger writing to chatbot.log."""
    return RichLogger("chatbot.log")