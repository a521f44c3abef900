"""Main Textual application for otterboard."""

from __future__ import annotations

import logging
from typing import Any, Callable

import httpx
from textual.app import App

from otterboard.api import AiService, BoardsApi, make_client
from otterboard.model.session import BoardSession
from otterboard.sync import SyncLoop
from otterboard.ui.board import BoardScreen
from otterboard.ui.boards import BoardsScreen
from otterboard.ui.dialogs import TextPrompt

logger = logging.getLogger(__name__)


class OtterboardApp(App):
    """Whiteboard boards in the terminal."""

    CSS = """
    Tooltip {
        padding: 0 1;
        margin: 0;
    }
    """

    TITLE = "otterboard"
    BINDINGS = [("ctrl+q", "quit", "Quit")]

    def __init__(
        self,
        config: dict[str, Any],
        board_id: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__()
        self.config = config
        self.initial_board_id = board_id
        self.transport = transport
        self.session = BoardSession()
        client = make_client(config["api_url"], config.get("token", ""), transport)
        self.boards = BoardsApi(client)
        self.ai = AiService(client)
        self.sync = SyncLoop(self.session, self.boards, interval=config.get("sync_interval", 5.0))

    def on_mount(self) -> None:
        self.push_screen(BoardsScreen())
        if self.initial_board_id:
            self.push_screen(BoardScreen(self.initial_board_id))

    async def on_unmount(self) -> None:
        self.sync.stop()
        await self.boards.aclose()

    def set_token(self, token: str) -> None:
        """Swap in a client that sends token; the old one is closed in the background."""
        self.config["token"] = token
        old = self.boards.client
        client = make_client(self.config["api_url"], token, self.transport)
        self.boards.client = client
        self.ai.client = client
        self.run_worker(old.aclose())

    def request_sign_in(self, callback: Callable[[bool], None]) -> None:
        """Ask for a new access token, then call back with whether one was given."""

        def on_token(token: str | None) -> None:
            if token:
                self.set_token(token)
            callback(bool(token))

        self.push_screen(
            TextPrompt("Sign in required. Paste an access token:", password=True),
            on_token,
        )
