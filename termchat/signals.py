"""Process signal handling: clean exit and terminal resize notification."""

from __future__ import annotations

import os
import signal
import threading
from collections.abc import Callable
from types import FrameType

_resize_flag = threading.Event()
_on_exit: Callable[[], None] | None = None


def _handle(signum: int, frame: FrameType | None) -> None:
    if signum == getattr(signal, "SIGWINCH", None):
        _resize_flag.set()
        return
    if _on_exit is not None:
        _on_exit()
    os._exit(0)


def setup(on_exit: Callable[[], None]) -> None:
    """Run ``on_exit`` and exit on SIGINT/SIGTERM; record SIGWINCH as a resize."""
    global _on_exit
    _on_exit = on_exit
    signal.signal(signal.SIGINT, _handle)
    signal.signal(signal.SIGTERM, _handle)
    if hasattr(signal, "SIGWINCH"):
        signal.signal(signal.SIGWINCH, _handle)


def check_and_clear_resize() -> bool:
    """Return whether a resize happened since the last call, and reset the flag."""
    if _resize_flag.is_set():
        _resize_flag.clear()
        return True
    return False