"""
Live and manual selector testing with debounced re-evaluation.

Two input channels, HTML and selector, are debounced independently. Each
channel is a small state machine (idle, pending, evaluating) driven by a
scheduler with cancellable callbacks; an ``asyncio`` event loop works as
the scheduler.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Protocol

from ..selectors import SELECTORS, make_selector, run_selector
from .config import TesterConfig
from .markers import Editor, HighlightMarkerManager
from .models import Selector, TestResult
from .samples import SAMPLE_HTML, SAMPLE_SELECTORS

logger = logging.getLogger(__name__)


class Mode(str, Enum):
    """How an evaluation was triggered."""

    LIVE = "live"
    MANUAL = "manual"


class ChannelState(Enum):
    IDLE = "idle"
    PENDING = "pending"
    EVALUATING = "evaluating"


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything that can run a callback later, e.g. an asyncio event loop."""

    def call_later(self, delay: float, callback: Callable[[], Any]) -> Cancellable: ...


class Notifier(Protocol):
    """Receives user-facing notifications (level is success, error or info)."""

    def notify(self, level: str, title: str, description: str) -> None: ...


class DebounceChannel:
    """Delays a callback until an input has been quiet for ``delay`` seconds."""

    def __init__(self, name: str, delay: float, scheduler: Scheduler, callback: Callable[[], Any]):
        self.name = name
        self.delay = delay
        self.scheduler = scheduler
        self.callback = callback
        self.state = ChannelState.IDLE
        self._handle: Optional[Cancellable] = None

    def arm(self) -> None:
        """(Re)start the quiet period, discarding any pending timer."""
        self.cancel()
        self.state = ChannelState.PENDING
        self._handle = self.scheduler.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        if self.state is ChannelState.PENDING:
            self.state = ChannelState.IDLE

    @property
    def pending(self) -> bool:
        return self.state is ChannelState.PENDING

    def _fire(self) -> None:
        self._handle = None
        self.state = ChannelState.EVALUATING
        try:
            self.callback()
        finally:
            self.state = ChannelState.IDLE


class LiveTestController:
    """
    Runs the evaluate, resolve and highlight pipeline on input changes.

    Live runs are silent: validation failures are skipped and results are
    published without notifications. Manual runs always notify.
    """

    def __init__(
        self,
        editor: Editor,
        scheduler: Optional[Scheduler] = None,
        notifier: Optional[Notifier] = None,
        config: Optional[TesterConfig] = None,
    ):
        self.config = config or TesterConfig()
        self.scheduler = scheduler
        self.notifier = notifier
        self.markers = HighlightMarkerManager(editor, self.config)
        # Without a scheduler only manual runs are possible
        self.live = self.config.live and scheduler is not None

        self.html = ""
        self.selectors: Dict[str, str] = {kind: "" for kind in SELECTORS}
        self.active_kind = "xpath"
        self.cursor_line = 0
        self.result: Optional[TestResult] = None
        self.listeners: List[Callable[[TestResult], None]] = []

        self._generation = 0
        self._closed = False
        self._channels = {
            "html": DebounceChannel("html", self.config.html_debounce, scheduler, self._live_run),
            "selector": DebounceChannel("selector", self.config.selector_debounce, scheduler, self._live_run),
        }

    # Inputs

    def set_html(self, html: str) -> None:
        if self._closed:
            return
        self.html = html
        self._schedule("html")

    def set_selector(self, expression: str, kind: Optional[str] = None) -> None:
        if self._closed:
            return
        kind = (kind or self.active_kind).lower()
        _check_kind(kind)
        self.selectors[kind] = expression
        if kind == self.active_kind:
            self._schedule("selector")

    def set_active_kind(self, kind: str) -> None:
        """Switch dialect; a live tester re-evaluates right away."""
        if self._closed:
            return
        kind = kind.lower()
        _check_kind(kind)
        if kind == self.active_kind:
            return
        self.active_kind = kind
        if self.live:
            self.run_evaluation(Mode.LIVE)

    def set_live(self, enabled: bool) -> None:
        if enabled and self.scheduler is None:
            raise ValueError("Live testing needs a scheduler")
        self.live = enabled
        if not enabled:
            self.cancel_pending()

    def set_cursor_line(self, line: int) -> None:
        """Cursor moved in the editor: re-derive emphasis without re-evaluating."""
        if self._closed:
            return
        self.cursor_line = line
        if self.result is not None and self.result.matches:
            self.markers.update_cursor(line)

    def current_selector(self) -> Selector:
        return make_selector(self.active_kind, self.selectors[self.active_kind])

    # Actions

    def test_selector(self, mode: str = Mode.MANUAL) -> Optional[TestResult]:
        return self.run_evaluation(mode)

    def run_evaluation(self, mode: str = Mode.MANUAL) -> Optional[TestResult]:
        """
        Evaluate the active selector and publish the result.

        Returns:
            The result, or None when validation failed or the tester is closed
        """
        if self._closed:
            return None
        mode = Mode(mode)

        problem = self._validate()
        if problem:
            if mode is Mode.MANUAL:
                self._notify("error", *problem)
            else:
                logger.debug(f"Skipping live run: {problem[1]}")
            return None

        self._generation += 1
        generation = self._generation
        selector = self.current_selector()

        try:
            result = run_selector(self.html, selector)
        except Exception as e:
            if mode is Mode.MANUAL:
                logger.error(f"Selector test failed: {e}")
                self._notify("error", "Test Failed", "Failed to test selector")
            else:
                logger.warning(f"Live selector test failed: {e}")
            return None

        if generation != self._generation:
            logger.debug(f"Discarding superseded result from generation {generation}")
            return result

        self._publish(result)

        if mode is Mode.MANUAL:
            self._report(selector, result)
        return result

    def load_sample(self) -> None:
        """Load the sample page and the active dialect's sample selector."""
        self.set_html(SAMPLE_HTML)
        self.set_selector(SAMPLE_SELECTORS[self.active_kind])
        self._notify("success", "Sample Loaded", "Sample HTML and selector loaded successfully")

    def clear_all(self) -> None:
        """Reset every input, the result and the markers."""
        self.cancel_pending()
        self.html = ""
        self.selectors = {kind: "" for kind in SELECTORS}
        self.result = None
        self._generation += 1
        self.markers.close()
        self._notify("success", "Cleared", "All inputs cleared successfully")

    def cancel_pending(self) -> None:
        for channel in self._channels.values():
            channel.cancel()

    def close(self) -> None:
        """Tear down: cancel timers, remove markers, ignore further input."""
        self.cancel_pending()
        self.markers.close()
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def channel_state(self, name: str) -> ChannelState:
        return self._channels[name].state

    # Internals

    def _schedule(self, channel: str) -> None:
        if self.live:
            self._channels[channel].arm()

    def _live_run(self) -> None:
        if self.live:
            self.run_evaluation(Mode.LIVE)

    def _validate(self):
        if not self.html.strip():
            return ("Missing Content", "Please enter HTML content")
        if not self.selectors[self.active_kind].strip():
            return ("Missing Selector", "Please enter a selector")
        return None

    def _publish(self, result: TestResult) -> None:
        self.result = result
        if result.matches:
            self.markers.render(self.html, result.matches, self.cursor_line)
        else:
            self.markers.clear()
        for listener in self.listeners:
            listener(result)

    def _report(self, selector: Selector, result: TestResult) -> None:
        if result.error:
            label = "XPath" if selector.kind == "xpath" else "CSS"
            self._notify("error", f"{label} Error", result.error)
        elif not result.matches:
            self._notify("info", "No Matches", "No matches found for the selector")
        else:
            plural = "" if result.count == 1 else "es"
            self._notify("success", "Matches Found", f"Found {result.count} match{plural}")

    def _notify(self, level: str, title: str, description: str) -> None:
        if self.notifier is not None:
            self.notifier.notify(level, title, description)


def _check_kind(kind: str) -> None:
    if kind not in SELECTORS:
        supported = ", ".join(SELECTORS.keys())
        raise ValueError(f"Unknown selector kind '{kind}'. Supported: {supported}")
