"""Card drag-and-drop state machine.

Idle -> Dragging(source) -> [DragOver(target)]* -> Idle. The controller
only tracks positions; the move itself goes through the session so it
is checked against whatever snapshot is current at drop time.
"""

from __future__ import annotations

from otterboard.model.board import move_card
from otterboard.model.session import BoardSession


class DragController:
    """Tracks the card being dragged and the group it hovers over."""

    def __init__(self, session: BoardSession) -> None:
        self.session = session
        self.source: tuple[int, int] | None = None
        self.drop_target: int | None = None

    @property
    def active(self) -> bool:
        return self.source is not None

    def start(self, group: int, index: int) -> None:
        self.source = (group, index)
        self.drop_target = None

    def enter(self, group: int) -> None:
        """Pointer entered a group's drop area."""
        if self.source is None or group == self.source[0]:
            return
        self.drop_target = group

    def leave(self, group: int) -> None:
        if self.drop_target == group:
            self.drop_target = None

    def drop(self, group: int) -> bool:
        """Drop onto group. Returns True if the model changed."""
        source = self.source
        self.source = None
        self.drop_target = None
        if source is None or source[0] == group:
            return False
        before = self.session.snapshot
        after = self.session.apply(move_card, source[0], source[1], group)
        return after is not None and after is not before

    def end(self) -> None:
        """Drag finished without a drop."""
        self.source = None
        self.drop_target = None

    def is_dragging(self, group: int, index: int) -> bool:
        return self.source == (group, index)

    def is_drop_target(self, group: int) -> bool:
        return self.drop_target == group
