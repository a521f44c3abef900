"""Board screen: the canvas of theme columns plus the priorities panel."""

from __future__ import annotations

import logging

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import Screen
from textual.widgets import Button, Footer, Markdown, Static

from otterboard.actions import generate_action_plan, reframe, share_link
from otterboard.dragdrop import DragController
from otterboard.edit import EditController
from otterboard.errors import OtterboardError
from otterboard.highlight import Emphasis, resolve_highlights
from otterboard.media import MediaGenerator
from otterboard.model.board import revert_card_visual, set_group_color
from otterboard.model.snapshot import BoardSnapshot
from otterboard.ui.canvas import CanvasSurface, CanvasViewport
from otterboard.ui.card import AddCard, CardWidget
from otterboard.ui.column import GroupWidget
from otterboard.ui.constants import ICON_BOARD, ICON_RESET, ICON_ZOOM_IN, ICON_ZOOM_OUT
from otterboard.ui.dialogs import FRAMEWORK_LABELS, FrameworkPicker, TextPrompt
from otterboard.ui.editor import InlineEditor
from otterboard.ui.priorities import PriorityPanel
from otterboard.ui.sync_widget import SyncWidget
from otterboard.ui.watcher import NodeWatcherMixin

logger = logging.getLogger(__name__)


class BoardScreen(NodeWatcherMixin, Screen):
    """One board, kept in sync with the store while the screen is open."""

    DEFAULT_CSS = """
    BoardScreen {
        layers: base overlay;
    }
    BoardScreen #board-header {
        height: 1;
        padding: 0 1;
        background: $panel;
    }
    BoardScreen #board-title {
        width: 1fr;
        text-style: bold;
    }
    BoardScreen #board-framework {
        width: auto;
        color: $text-muted;
        margin-right: 2;
    }
    BoardScreen #board-body {
        height: 1fr;
    }
    BoardScreen #board-diagram {
        height: 1fr;
        padding: 1 2;
        display: none;
    }
    BoardScreen #board-report {
        height: 1fr;
        padding: 1 2;
        display: none;
    }
    BoardScreen #zoom-controls {
        height: 3;
        width: auto;
        dock: bottom;
        align: right middle;
    }
    BoardScreen #zoom-controls Button {
        min-width: 5;
    }
    BoardScreen #zoom-readout {
        width: 6;
        height: 3;
        content-align: center middle;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel_drag", "Cancel drag", show=False),
        Binding("plus,equals_sign", "zoom_in", "Zoom in", show=False),
        Binding("minus", "zoom_out", "Zoom out", show=False),
        Binding("0", "zoom_reset", "Reset view", show=False),
        ("p", "toggle_panel", "Priorities"),
        ("g", "action_plan", "Action plan"),
        ("m", "toggle_report", "Report"),
        ("f", "reframe", "Reframe"),
        ("s", "share", "Share"),
        ("l", "link", "Link"),
        ("b", "close", "Boards"),
    ]

    def __init__(self, board_id: str, title: str = "") -> None:
        self._init_watcher()
        super().__init__()
        self.board_id = board_id
        self.board_title = title or board_id
        self.hovered_priority: str | None = None
        self.flight = None
        self.show_report = False
        self.grounding_context = ""

    @property
    def session(self):
        return self.app.session

    def compose(self) -> ComposeResult:
        with Horizontal(id="board-header"):
            yield Static(f"{ICON_BOARD} {self.board_title}", markup=False, id="board-title")
            yield Static("", id="board-framework")
            yield SyncWidget(self.session, id="sync-status")
        with Horizontal(id="board-body"):
            with Vertical(id="canvas-column"):
                yield CanvasViewport(id="canvas")
                yield Static("", markup=False, id="board-diagram")
                with VerticalScroll(id="board-report"):
                    yield Markdown(id="report-markdown")
            yield PriorityPanel(id="priorities")
        with Horizontal(id="zoom-controls"):
            yield Button(ICON_ZOOM_OUT, id="zoom-out")
            yield Static("100%", id="zoom-readout")
            yield Button(ICON_ZOOM_IN, id="zoom-in")
            yield Button(ICON_RESET, id="zoom-reset")
        yield Footer()

    def on_mount(self) -> None:
        session = self.session
        self.drag = DragController(session)
        self.edit = EditController(session)
        self.media = MediaGenerator(session, self.app.ai)
        self.node_watch(session.state, "snapshot", self._on_snapshot_changed)
        self.node_watch(session.state, "framework", self._on_framework_changed)
        self.node_watch(session.state, "error", self._on_error)
        self.node_watch(session.state, "signed_out", self._on_signed_out)
        self.app.sync.start(self.board_id)

    def on_unmount(self) -> None:
        # Drop watches before the session is closed under us.
        super().on_unmount()
        self.app.sync.stop()

    @property
    def viewport(self) -> CanvasViewport:
        return self.query_one(CanvasViewport)

    # -- rendering --

    def _on_snapshot_changed(self, node, key, old, new) -> None:
        self._render_snapshot(new)

    def _render_snapshot(self, snapshot: BoardSnapshot | None) -> None:
        surface = self.query_one(CanvasSurface)
        groups = [w for w in surface.children if isinstance(w, GroupWidget)]
        themes = snapshot.themes if snapshot is not None else ()

        self._show_view(snapshot)
        for i, group in enumerate(themes):
            if i < len(groups):
                groups[i].update_group(i, group)
            else:
                surface.mount(GroupWidget(i, group))
        for stale in groups[len(themes) :]:
            stale.remove()

        self.query_one(PriorityPanel).set_plan(snapshot.action_plan if snapshot is not None else None)
        self._refresh_cards()

    def _show_view(self, snapshot: BoardSnapshot | None) -> None:
        """Show one of the canvas, the diagram text or the report."""
        strategy = snapshot is None or snapshot.mode == "strategy"
        report = self.show_report
        self.viewport.display = strategy and not report
        diagram = self.query_one("#board-diagram", Static)
        diagram.display = not strategy and not report
        if not strategy:
            diagram.update(snapshot.diagram_code or snapshot.wireframe_code or snapshot.raw_markdown)
        self.query_one("#board-report").display = report
        if report:
            text = snapshot.report() if snapshot is not None else ""
            self.query_one("#report-markdown", Markdown).update(text or "_No report for this board._")

    def _refresh_cards(self) -> None:
        """Apply highlight, busy and edit state to every card and title."""
        highlights = resolve_highlights(self.session.snapshot, self.hovered_priority)
        busy = {self.media.image.card_id, self.media.video.card_id}
        edit = self.edit
        for card in self.query(CardWidget):
            card.set_emphasis(highlights.get(card.card_id, Emphasis.NEUTRAL))
            card.set_busy(card.card_id in busy)
            editing = edit.card is not None and edit.card.card_id == card.card_id
            card.set_editing(edit.card.draft if editing else None)
        for group in self.query(GroupWidget):
            group.set_title_editing(edit.title.draft if edit.is_editing_title(group.index) else None)

    def _on_framework_changed(self, node, key, old, new) -> None:
        label = FRAMEWORK_LABELS.get(new, "") if new and new != "clusters" else ""
        self.query_one("#board-framework", Static).update(label)

    def _on_error(self, node, key, old, new) -> None:
        if new:
            self.notify(new, title="Error", severity="error")

    def _on_signed_out(self, node, key, old, new) -> None:
        if not new:
            return
        self.app.sync.stop()
        self.app.request_sign_in(self._on_signed_in)

    def _on_signed_in(self, signed_in: bool) -> None:
        self.session.state.signed_out = None
        if signed_in:
            self.app.sync.start(self.board_id)
        else:
            self.app.pop_screen()

    # -- zoom --

    def on_canvas_viewport_zoom_changed(self, event: CanvasViewport.ZoomChanged) -> None:
        self.query_one("#zoom-readout", Static).update(f"{event.percent}%")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        actions = {"zoom-in": self.action_zoom_in, "zoom-out": self.action_zoom_out, "zoom-reset": self.action_zoom_reset}
        if event.button.id in actions:
            event.stop()
            actions[event.button.id]()

    def action_zoom_in(self) -> None:
        self.viewport.engine.zoom_in()

    def action_zoom_out(self) -> None:
        self.viewport.engine.zoom_out()

    def action_zoom_reset(self) -> None:
        self.viewport.engine.reset()

    # -- drag: pointer events go to the card in flight --

    def on_mouse_move(self, event) -> None:
        if self.flight is not None:
            self.flight.steer(event.screen_x, event.screen_y)

    def on_mouse_up(self, event) -> None:
        if self.flight is not None:
            self.flight.land(event.screen_x, event.screen_y)

    def action_cancel_drag(self) -> None:
        if self.flight is not None:
            self.flight.abort()

    # -- editing --

    def _is_current_edit(self, edit_key: tuple) -> bool:
        if not edit_key:
            return False
        if edit_key[0] == "card":
            return self.edit.card is not None and self.edit.card.card_id == edit_key[1]
        return self.edit.is_editing_title(edit_key[1])

    def on_card_widget_edit_requested(self, event: CardWidget.EditRequested) -> None:
        event.stop()
        self.edit.begin_card(event.card.group, event.card.index)
        self._refresh_cards()

    def on_group_widget_title_edit_requested(self, event: GroupWidget.TitleEditRequested) -> None:
        event.stop()
        self.edit.begin_title(event.group)
        self._refresh_cards()

    def on_add_card_pressed(self, event: AddCard.Pressed) -> None:
        event.stop()
        self.edit.add_card(event.group)
        self._refresh_cards()

    def on_inline_editor_draft(self, event: InlineEditor.Draft) -> None:
        event.stop()
        if self._is_current_edit(event.editor.edit_key):
            self.edit.update_draft(event.value)

    def on_inline_editor_done(self, event: InlineEditor.Done) -> None:
        event.stop()
        if not self._is_current_edit(event.editor.edit_key):
            return
        self.edit.update_draft(event.value)
        self.edit.commit()
        self._refresh_cards()

    def on_group_widget_color_requested(self, event: GroupWidget.ColorRequested) -> None:
        if event.group is None:
            return
        event.stop()
        snapshot = self.session.snapshot
        current = snapshot.themes[event.group].color if snapshot and event.group < len(snapshot.themes) else None
        # Clicking the selected swatch clears the color.
        self.session.apply(set_group_color, event.group, None if current == event.color else event.color)

    # -- priorities --

    def on_priority_panel_hovered(self, event: PriorityPanel.Hovered) -> None:
        event.stop()
        if event.priority_id != self.hovered_priority:
            self.hovered_priority = event.priority_id
            self._refresh_cards()

    def action_toggle_panel(self) -> None:
        self.query_one(PriorityPanel).toggle_class("-hidden")

    def action_toggle_report(self) -> None:
        self.show_report = not self.show_report
        self._show_view(self.session.snapshot)

    # -- media --

    def on_card_widget_media_requested(self, event: CardWidget.MediaRequested) -> None:
        event.stop()
        card = event.card
        if event.kind == "revert":
            self.session.apply(revert_card_visual, card.group, card.index)
            return
        if event.kind == "image" and (self.media.image.busy or self.media.video.busy):
            self.notify("Wait for the current generation to finish.", severity="warning")
            return
        if event.kind == "video" and self.media.video.busy:
            self.notify("A video is already being generated.", severity="warning")
            return
        self.run_worker(self._generate_media(event.kind, card.card_id))

    async def _generate_media(self, kind: str, card_id: str) -> None:
        self.call_later(self._refresh_cards)
        if kind == "image":
            await self.media.generate_image(card_id)
        else:
            await self.media.generate_video(card_id)
        self._refresh_cards()

    # -- AI actions --

    def action_action_plan(self) -> None:
        prompt = TextPrompt(
            "Grounding for the action plan (optional): OKRs, mission, constraints",
            placeholder="e.g. Our Q3 goal is to reduce churn by 10%",
            value=self.grounding_context,
            allow_blank=True,
        )
        self.app.push_screen(prompt, self._on_plan_context)

    def _on_plan_context(self, context: str | None) -> None:
        if context is None:
            return
        self.grounding_context = context
        self.run_worker(self._generate_plan(context), exclusive=True, group="ai")

    async def _generate_plan(self, context: str) -> None:
        self.notify("Generating action plan...")
        try:
            await generate_action_plan(self.session, self.app.ai, context)
        except OtterboardError as exc:
            logger.warning("action plan failed: %s", exc)
            self.session.report_error(f"Action plan failed: {exc}")

    def action_reframe(self) -> None:
        self.app.push_screen(FrameworkPicker(self.session.state.framework), self._on_framework_chosen)

    def _on_framework_chosen(self, framework: str | None) -> None:
        if framework is not None:
            self.run_worker(self._reframe(framework), exclusive=True, group="ai")

    async def _reframe(self, framework: str) -> None:
        try:
            await reframe(self.session, self.app.ai, framework)
        except OtterboardError as exc:
            logger.warning("reframe to %s failed: %s", framework, exc)
            self.session.report_error(f"Reframe failed: {exc}")

    # -- sharing --

    def action_share(self) -> None:
        self.app.push_screen(TextPrompt("Share this board with:", placeholder="name@example.com"), self._on_share_email)

    def _on_share_email(self, email: str | None) -> None:
        if email:
            self.run_worker(self._share(email))

    async def _share(self, email: str) -> None:
        try:
            await self.app.boards.share_board(self.board_id, email)
        except OtterboardError as exc:
            logger.warning("share with %s failed: %s", email, exc)
            self.session.report_error(f"Share failed: {exc}")
            return
        self.notify(f"Shared with {email}")

    def action_link(self) -> None:
        link = share_link(self.app.config["app_url"], self.board_id)
        self.app.copy_to_clipboard(link)
        self.notify(link, title="Link copied")

    def action_close(self) -> None:
        self.edit.commit()
        self.app.pop_screen()
