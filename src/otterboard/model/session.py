"""The in-memory state of the board being viewed."""

from __future__ import annotations

from typing import Any, Callable

from otterboard.model.node import Callback, Node
from otterboard.model.snapshot import BoardSnapshot


class BoardSession:
    """Holds the selected board and its current snapshot.

    State lives on a reactive Node (``state``) so widgets and the sync
    loop can watch ``snapshot``, ``error`` and ``sync.status``. Each time
    the selected board changes the session ``token`` moves on; async work
    captures the token when it starts and checks ``is_active(token)``
    before applying its result.
    """

    def __init__(self) -> None:
        self.state = Node(sync=Node(status="idle"))
        self.token = 0

    # -- selection --

    @property
    def board_id(self) -> str | None:
        return self.state.board_id

    def open(self, board_id: str, snapshot: BoardSnapshot | None = None) -> int:
        """Select a board. Returns the new session token."""
        self.token += 1
        self.state.original = None
        self.state.framework = None
        self.state.snapshot = snapshot
        self.state.board_id = board_id
        return self.token

    def close(self) -> None:
        """Deselect the board and discard its snapshot."""
        self.token += 1
        self.state.board_id = None
        self.state.snapshot = None
        self.state.original = None
        self.state.framework = None

    def is_active(self, token: int) -> bool:
        return token == self.token and self.state.board_id is not None

    # -- snapshot --

    @property
    def snapshot(self) -> BoardSnapshot | None:
        return self.state.snapshot

    def install(self, snapshot: BoardSnapshot | None) -> None:
        """Replace the whole snapshot in one assignment."""
        self.state.snapshot = snapshot

    def apply(self, operation: Callable[..., BoardSnapshot], *args: Any) -> BoardSnapshot | None:
        """Run a snapshot operation against the current snapshot and install the result.

        No-op when no snapshot is loaded.
        """
        current = self.state.snapshot
        if current is None:
            return None
        new = operation(current, *args)
        if new is not current:
            self.state.snapshot = new
        return new

    @property
    def original(self) -> BoardSnapshot | None:
        """The first clustered analysis, kept so reframing can be undone."""
        return self.state.original

    def remember_original(self, snapshot: BoardSnapshot | None) -> None:
        self.state.original = snapshot

    # -- status --

    @property
    def error(self) -> str | None:
        return self.state.error

    def report_error(self, message: str) -> None:
        # Clear first so the same message twice still notifies.
        self.state.error = None
        self.state.error = message

    def dismiss_error(self) -> None:
        self.state.error = None

    @property
    def sync_status(self) -> str:
        return self.state.sync.status

    def set_sync_status(self, status: str) -> None:
        self.state.sync.status = status

    def watch(self, key: str, callback: Callback) -> Callable[[], None]:
        return self.state.watch(key, callback)
