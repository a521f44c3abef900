"""Pointer plumbing for dragging cards onto group columns.

A widget that can be picked up mixes in Draggable; a widget that can
receive it mixes in DropTarget. Once a press travels past the threshold
the draggable launches a Flight and parks it on ``screen.flight``; the
screen then feeds the flight every pointer move and the final release.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.geometry import Offset
from textual.widgets import Static

if TYPE_CHECKING:
    from textual.screen import Screen
    from textual.widget import Widget


class DropTarget:
    """Mixin for widgets that accept a dropped draggable."""

    def drag_over(self, draggable: Draggable) -> bool:
        """The pointer entered this target. Return True to become the hover target."""
        return False

    def drag_away(self, draggable: Draggable) -> None:
        """The pointer left, or the flight ended elsewhere."""

    def try_drop(self, draggable: Draggable) -> bool:
        """Released over this target. Return True if the drop was taken."""
        return False


def drop_target_at(screen: Screen, x: int, y: int, ghost: Widget, source: Widget) -> DropTarget | None:
    """Innermost DropTarget under (x, y) other than source, looking through the ghost."""
    for widget, _region in screen.get_widgets_at(x, y):
        if widget is ghost or ghost in widget.ancestors:
            continue
        for node in (widget, *widget.ancestors):
            if isinstance(node, DropTarget) and node is not source:
                return node
    return None


class Flight:
    """One drag in progress: the ghost following the pointer and the target under it."""

    def __init__(self, source: Draggable, ghost: Widget, grab: Offset) -> None:
        self.source = source
        self.screen = source.screen
        self.ghost = ghost
        self.grab = grab
        self.over: DropTarget | None = None

    def _target_at(self, x: int, y: int) -> DropTarget | None:
        return drop_target_at(self.screen, x, y, self.ghost, self.source)

    def steer(self, x: int, y: int) -> None:
        self.ghost.styles.offset = (x - self.grab.x, y - self.grab.y)
        target = self._target_at(x, y)
        if target is self.over:
            return
        if self.over is not None:
            self.over.drag_away(self.source)
        self.over = target if target is not None and target.drag_over(self.source) else None

    def land(self, x: int, y: int) -> None:
        target = self._target_at(x, y) or self.over
        if target is not None and target.try_drop(self.source):
            self.over = None
        self.abort()

    def abort(self) -> None:
        """End the flight; whatever target is still hovered is told the drag went away."""
        if self.over is not None:
            self.over.drag_away(self.source)
            self.over = None
        self.screen.release_mouse()
        self.ghost.remove()
        if getattr(self.screen, "flight", None) is self:
            self.screen.flight = None
        self.source._landed()


class Draggable:
    """Mixin for widgets that can be picked up and dropped on a DropTarget.

    Subclasses call ``_init_drag()`` from ``__init__`` and provide
    ``draggable_make_ghost()`` and ``draggable_clicked()``. The
    ``draggable_started()`` and ``draggable_ended()`` hooks are optional.
    """

    DRAG_THRESHOLD = 2

    def _init_drag(self) -> None:
        self._pressed_at: Offset | None = None

    def draggable_enabled(self) -> bool:
        return True

    def on_mouse_down(self, event) -> None:
        if event.button != 1 or not self.draggable_enabled():
            return
        event.stop()
        self._pressed_at = Offset(event.screen_x, event.screen_y)
        self.capture_mouse()

    def on_mouse_move(self, event) -> None:
        pressed = self._pressed_at
        if pressed is None:
            return
        event.stop()
        if max(abs(event.screen_x - pressed.x), abs(event.screen_y - pressed.y)) > self.DRAG_THRESHOLD:
            self._pressed_at = None
            self.release_mouse()
            self._take_off(pressed)

    def on_mouse_up(self, event) -> None:
        if self._pressed_at is None:
            return
        event.stop()
        self._pressed_at = None
        self.release_mouse()
        self.draggable_clicked()

    def _take_off(self, pressed: Offset) -> None:
        region = self.region
        ghost = self.draggable_make_ghost()
        ghost.styles.width = region.width
        ghost.styles.offset = (region.x, region.y)

        screen = self.screen
        screen.set_focus(None)
        screen.mount(ghost)
        screen.flight = Flight(self, ghost, Offset(pressed.x - region.x, pressed.y - region.y))
        screen.capture_mouse()
        self.add_class("dragging")
        self.draggable_started()

    def _landed(self) -> None:
        self.remove_class("dragging")
        self.draggable_ended()

    def draggable_make_ghost(self) -> Widget:
        raise NotImplementedError

    def draggable_clicked(self) -> None:
        raise NotImplementedError

    def draggable_started(self) -> None:
        """The press crossed the threshold and the ghost is up."""

    def draggable_ended(self) -> None:
        """The flight is over, dropped or not."""


class DragGhost(Static):
    """Overlay copy of the card following the pointer."""

    DEFAULT_CSS = """
    DragGhost {
        layer: overlay;
        height: auto;
        padding: 0 1;
        background: $primary;
        color: $text;
        opacity: 0.8;
    }
    """
