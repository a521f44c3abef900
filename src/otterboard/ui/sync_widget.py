"""Sync status indicator for the board header."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.widgets import Static

from otterboard.model.session import BoardSession
from otterboard.ui.constants import ICON_SYNC_ACTIVE, ICON_SYNC_IDLE, ICON_SYNC_OFFLINE
from otterboard.ui.watcher import NodeWatcherMixin


def _current_icon(session: BoardSession) -> str:
    """Return the icon for the current sync state."""
    if session.state.signed_out:
        return ICON_SYNC_OFFLINE
    if session.sync_status and session.sync_status != "idle":
        return ICON_SYNC_ACTIVE
    return ICON_SYNC_IDLE


class SyncWidget(NodeWatcherMixin, Container):
    """Shows whether a pull or push is in flight."""

    DEFAULT_CSS = """
    SyncWidget {
        width: 3;
        height: 1;
    }
    """

    def __init__(self, session: BoardSession, **kwargs) -> None:
        self._init_watcher()
        super().__init__(**kwargs)
        self.session = session

    def compose(self) -> ComposeResult:
        yield Static(_current_icon(self.session), classes="sync-icon")

    def on_mount(self) -> None:
        self.node_watch(self.session.state.sync, "status", self._on_sync_changed)
        self.node_watch(self.session.state, "signed_out", self._on_sync_changed)
        self._update_display()

    def _on_sync_changed(self, node, key, old, new) -> None:
        self.call_later(self._update_display)

    def _update_display(self) -> None:
        self.query_one(".sync-icon", Static).update(_current_icon(self.session))
        self.tooltip = f"sync: {self.session.sync_status}"
