"""Shared fixtures for selector-lens tests."""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List

import pytest

from selector_lens.core.markers import BufferEditor

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class FakeHandle:
    def __init__(self):
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


@dataclass
class Timer:
    when: float
    seq: int
    callback: Callable[[], None]
    handle: FakeHandle


class FakeScheduler:
    """Deterministic stand-in for an event loop's call_later."""

    def __init__(self):
        self.now = 0.0
        self.timers: List[Timer] = []
        self._seq = 0

    def call_later(self, delay, callback):
        handle = FakeHandle()
        self._seq += 1
        self.timers.append(Timer(self.now + delay, self._seq, callback, handle))
        return handle

    @property
    def pending(self) -> List[Timer]:
        return [t for t in self.timers if not t.handle.cancelled]

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing due timers in order."""
        target = self.now + seconds
        while True:
            due = [t for t in self.pending if t.when <= target + 1e-9]
            if not due:
                break
            timer = min(due, key=lambda t: (t.when, t.seq))
            self.timers.remove(timer)
            self.now = timer.when
            timer.callback()
        self.now = target


class RecordingNotifier:
    def __init__(self):
        self.messages = []

    def notify(self, level, title, description):
        self.messages.append((level, title, description))

    @property
    def titles(self):
        return [title for _, title, _ in self.messages]


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def editor():
    return BufferEditor()


@pytest.fixture
def cards_html():
    return (FIXTURES_DIR / "cards.html").read_text()
