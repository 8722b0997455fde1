import signal
from unittest import mock

import pytest

from termchat import signals

_SIGNALS = (signal.SIGINT, signal.SIGTERM, signal.SIGWINCH)


@pytest.fixture(autouse=True)
def restore_handlers():
    saved = {signum: signal.getsignal(signum) for signum in _SIGNALS}
    signals.check_and_clear_resize()
    yield
    for signum, handler in saved.items():
        signal.signal(signum, handler)
    signals.check_and_clear_resize()


def test_no_resize_without_signal():
    signals.setup(lambda: None)
    assert signals.check_and_clear_resize() is False


def test_resize_is_reported_once():
    calls = []
    signals.setup(lambda: calls.append(1))
    signal.raise_signal(signal.SIGWINCH)
    assert signals.check_and_clear_resize() is True
    assert signals.check_and_clear_resize() is False
    assert calls == []


def test_repeated_resizes_collapse():
    signals.setup(lambda: None)
    signal.raise_signal(signal.SIGWINCH)
    signal.raise_signal(signal.SIGWINCH)
    assert signals.check_and_clear_resize() is True
    assert signals.check_and_clear_resize() is False


@pytest.mark.parametrize("signum", [signal.SIGINT, signal.SIGTERM])
def test_termination_runs_callback_then_exits(signum):
    calls = []
    signals.setup(lambda: calls.append("exit"))
    with mock.patch("os._exit") as fake_exit:
        signal.raise_signal(signum)
    assert calls == ["exit"]
    fake_exit.assert_called_once_with(0)
    assert signals.check_and_clear_resize() is False