"""Textual host for a dashkit dashboard.

``DashboardApp`` adapts Textual to the dispatcher: it turns terminal events
into dashboard events, keeps a single Textual timer armed for the
scheduler's next deadline, and paints each composed frame into one
full-screen widget.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.message import Message
from textual.timer import Timer
from textual.widgets import Static

from dashkit.utils.logging import configure_from_settings, get_logger, timed_operation

from .components.core.frame import Frame
from .controllers.dispatcher import EventDispatcher
from .keys import GLOBAL_KEYS
from .providers.config import AppConfig
from .state.events import DashboardEvent, Key, Mouse, Resize


class FrameView(Static):
    """Full-screen widget showing the latest composed frame."""

    DEFAULT_CSS = """
    FrameView {
        width: 100%;
        height: 100%;
        overflow: hidden;
    }
    """

    class Pointer(Message):
        """Mouse activity over the frame, in screen cells."""

        def __init__(self, x: int, y: int, action: str, button: int = 0) -> None:
            super().__init__()
            self.x = x
            self.y = y
            self.action = action
            self.button = button

    def on_mouse_move(self, event: events.MouseMove) -> None:
        self.post_message(self.Pointer(event.screen_x, event.screen_y, "move", event.button))

    def on_click(self, event: events.Click) -> None:
        self.post_message(self.Pointer(event.screen_x, event.screen_y, "click", event.button))


class DashboardApp(App):
    """Runs an AppConfig inside Textual.

    Textual always uses the alternate screen; mouse capture is chosen when
    calling ``run``.
    """

    TITLE = "dashkit"

    CSS = """
    Screen {
        overflow: hidden;
    }
    """

    BINDINGS = [
        Binding(key.key, key.action, key.description, show=False, priority=True)
        for key in GLOBAL_KEYS
    ]

    def __init__(self, config: AppConfig, dispatcher: Optional[EventDispatcher] = None):
        """Initialize the dashboard application.

        Args:
            config: Providers and layout options
            dispatcher: Dispatcher to drive (one is built from config if omitted)
        """
        super().__init__()
        self.config = config
        self.dispatcher = dispatcher or EventDispatcher(config)
        self.logger = get_logger("app")
        self._deadline_timer: Optional[Timer] = None

    def compose(self) -> ComposeResult:
        yield FrameView(Text(""), id="frame")

    def on_mount(self) -> None:
        now = datetime.now()
        self.dispatcher.start(now)
        self.dispatcher.dispatch(Resize(self.size.width, self.size.height), now)
        self._after_cycle()

    def on_resize(self, event: events.Resize) -> None:
        self._handle(Resize(event.size.width, event.size.height))

    def on_key(self, event: events.Key) -> None:
        self._handle(Key(event.key, event.character))

    def on_frame_view_pointer(self, message: FrameView.Pointer) -> None:
        self._handle(Mouse(message.x, message.y, message.action, message.button))

    def _handle(self, event: DashboardEvent) -> None:
        self.dispatcher.dispatch(event, datetime.now())
        self._after_cycle()

    def _on_deadline(self) -> None:
        self._deadline_timer = None
        self.dispatcher.advance(datetime.now())
        self._after_cycle()

    def _after_cycle(self) -> None:
        """Repaint if anything changed and re-arm the scheduler timer."""
        if self.dispatcher.dirty:
            self.paint(self.render_frame())
        self._arm_deadline()

    def render_frame(self) -> Frame:
        with timed_operation("app.frame", logger=self.logger, log_level="debug"):
            return self.dispatcher.compose()

    def paint(self, frame: Frame) -> None:
        self.query_one(FrameView).update(frame.text)

    def _arm_deadline(self) -> None:
        if self._deadline_timer is not None:
            self._deadline_timer.stop()
            self._deadline_timer = None

        deadline = self.dispatcher.next_deadline()
        if deadline is None:
            return
        delay = max(0.0, (deadline - datetime.now()).total_seconds())
        self._deadline_timer = self.set_timer(delay, self._on_deadline)


def new_app(config: AppConfig) -> DashboardApp:
    """Build a runnable dashboard application from an AppConfig."""
    return DashboardApp(config)


def launch(config: AppConfig, mouse: bool = True) -> int | None:
    """Run a dashboard until the user quits.

    Args:
        config: Providers and layout options
        mouse: Capture mouse movement and clicks

    Returns:
        The application's return code
    """
    configure_from_settings(config.settings, to_textual=config.settings.log_file is None)
    app = new_app(config)
    app.run(mouse=mouse)
    return app.return_code
