"""The pannable, zoomable canvas holding the group columns."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.errors import NoWidget
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Button, Input, TextArea

from otterboard.viewport import GestureEngine, Transform

BLOCKING_TYPES = (Button, Input, TextArea)

# Scale buckets that change the card layout.
FAR_SCALE = 0.6
NEAR_SCALE = 1.5


def is_blocked(widget: Widget | None) -> bool:
    """True if widget, or any ancestor, is a control a pan must not start on."""
    node = widget
    while node is not None:
        if isinstance(node, BLOCKING_TYPES) or node.has_class("no-drag"):
            return True
        node = node.parent
    return False


class CanvasSurface(Horizontal):
    """The single widget the viewport transform is applied to."""

    DEFAULT_CSS = """
    CanvasSurface {
        width: auto;
        height: auto;
    }
    CanvasSurface.-zoom-far CardWidget {
        height: 1;
        margin-bottom: 0;
    }
    CanvasSurface.-zoom-far CardWidget #card-footer {
        display: none;
    }
    CanvasSurface.-zoom-far GroupWidget {
        width: 20;
    }
    CanvasSurface.-zoom-near GroupWidget {
        width: 44;
    }
    CanvasSurface.-zoom-near CardWidget {
        padding: 1 2;
    }
    """

    def apply_transform(self, transform: Transform) -> None:
        self.styles.offset = (round(transform.x), round(transform.y))
        self.set_class(transform.scale < FAR_SCALE, "-zoom-far")
        self.set_class(transform.scale > NEAR_SCALE, "-zoom-near")


class CanvasViewport(Container):
    """Clips the surface and turns mouse gestures into pan and zoom."""

    DEFAULT_CSS = """
    CanvasViewport {
        width: 1fr;
        height: 1fr;
        overflow: hidden hidden;
    }
    """

    class ZoomChanged(Message):
        """Zoom percentage settled at a new value."""

        def __init__(self, percent: int) -> None:
            super().__init__()
            self.percent = percent

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.surface = CanvasSurface(id="surface")
        self.engine = GestureEngine(
            self.surface,
            is_blocked=is_blocked,
            on_zoom_changed=lambda percent: self.post_message(self.ZoomChanged(percent)),
        )

    def compose(self) -> ComposeResult:
        yield self.surface

    def _widget_at(self, x: int, y: int) -> Widget | None:
        try:
            widget, _region = self.screen.get_widget_at(x, y)
        except NoWidget:
            return None
        return widget

    def on_mouse_down(self, event) -> None:
        if event.button != 1:
            return
        if self.engine.press(event.screen_x, event.screen_y, self._widget_at(event.screen_x, event.screen_y)):
            self.capture_mouse()

    def on_mouse_move(self, event) -> None:
        if self.engine.active:
            self.engine.move(event.screen_x, event.screen_y)

    def on_mouse_up(self, event) -> None:
        if self.engine.active:
            self.engine.release()
            self.release_mouse()

    def on_mouse_scroll_up(self, event) -> None:
        event.stop()
        self.engine.zoom_in()

    def on_mouse_scroll_down(self, event) -> None:
        event.stop()
        self.engine.zoom_out()
