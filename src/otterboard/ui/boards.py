"""Board list screen: open, create and delete boards."""

from __future__ import annotations

import logging

from textual.app import ComposeResult
from textual.screen import Screen
from textual.widgets import Footer, Header, OptionList, Static
from textual.widgets.option_list import Option

from otterboard.errors import AuthenticationRequired, OtterboardError
from otterboard.model.snapshot import Board
from otterboard.ui.board import BoardScreen
from otterboard.ui.constants import ICON_BOARD
from otterboard.ui.dialogs import ConfirmScreen, TextPrompt

logger = logging.getLogger(__name__)


def board_label(board: Board) -> str:
    shared = f"  ({len(board.collaborators)} shared)" if board.collaborators else ""
    updated = f"  {board.updated_at[:10]}" if board.updated_at else ""
    return f"{ICON_BOARD} {board.title}{updated}{shared}"


class BoardsScreen(Screen):
    """Lists the boards the signed-in user can see."""

    DEFAULT_CSS = """
    BoardsScreen #boards-empty {
        padding: 1 2;
        color: $text-muted;
    }
    BoardsScreen #boards {
        height: 1fr;
    }
    """

    BINDINGS = [
        ("n", "new_board", "New"),
        ("d", "delete_board", "Delete"),
        ("r", "refresh", "Refresh"),
    ]

    def __init__(self) -> None:
        super().__init__()
        self.boards: list[Board] = []

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static("Loading boards...", id="boards-empty")
        yield OptionList(id="boards")
        yield Footer()

    def on_mount(self) -> None:
        self.action_refresh()

    def on_screen_resume(self) -> None:
        self.action_refresh()

    def action_refresh(self) -> None:
        self.run_worker(self._load(), exclusive=True, group="load")

    async def _load(self) -> None:
        try:
            boards = await self.app.boards.list_boards()
        except AuthenticationRequired:
            self.app.request_sign_in(self._on_signed_in)
            return
        except OtterboardError as exc:
            logger.warning("listing boards failed: %s", exc)
            self.notify(str(exc) or "Failed to load boards.", title="Error", severity="error")
            return
        self.show_boards(boards)

    def _on_signed_in(self, signed_in: bool) -> None:
        if signed_in:
            self.action_refresh()

    def show_boards(self, boards: list[Board]) -> None:
        self.boards = sorted(boards, key=lambda b: b.updated_at or "", reverse=True)
        options = self.query_one("#boards", OptionList)
        options.clear_options()
        options.add_options([Option(board_label(b), id=b.id) for b in self.boards])
        empty = self.query_one("#boards-empty", Static)
        empty.update("No boards yet. Press n to create one." if not self.boards else "")
        empty.display = not self.boards

    def _selected(self) -> Board | None:
        options = self.query_one("#boards", OptionList)
        if options.highlighted is None or options.highlighted >= len(self.boards):
            return None
        return self.boards[options.highlighted]

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        event.stop()
        board = next((b for b in self.boards if b.id == event.option.id), None)
        if board is not None:
            self.app.push_screen(BoardScreen(board.id, board.title))

    def action_new_board(self) -> None:
        self.app.push_screen(TextPrompt("New board title:", value="Untitled board"), self._on_title_entered)

    def _on_title_entered(self, title: str | None) -> None:
        if title:
            self.run_worker(self._create(title))

    async def _create(self, title: str) -> None:
        try:
            board = await self.app.boards.create_board(title)
        except OtterboardError as exc:
            logger.warning("creating board failed: %s", exc)
            self.notify(str(exc), title="Error", severity="error")
            return
        self.app.push_screen(BoardScreen(board.id, board.title))

    def action_delete_board(self) -> None:
        board = self._selected()
        if board is None:
            return
        self.app.push_screen(
            ConfirmScreen(f"Delete {board.title!r}? This cannot be undone."),
            lambda confirmed: self._on_delete_confirmed(board, confirmed),
        )

    def _on_delete_confirmed(self, board: Board, confirmed: bool | None) -> None:
        if confirmed:
            self.run_worker(self._delete(board))

    async def _delete(self, board: Board) -> None:
        try:
            await self.app.boards.delete_board(board.id)
        except OtterboardError as exc:
            logger.warning("deleting board %s failed: %s", board.id, exc)
            self.notify(str(exc), title="Error", severity="error")
            return
        self.show_boards([b for b in self.boards if b.id != board.id])
