"""Sticky-note card widgets."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.events import Click
from textual.message import Message
from textual.widgets import Static

from otterboard.highlight import Emphasis
from otterboard.model.snapshot import GROUP_COLORS, Card
from otterboard.ui.constants import ICON_ADD, ICON_BUSY, ICON_IMAGE, ICON_VIDEO
from otterboard.ui.drag import Draggable, DragGhost
from otterboard.ui.editor import InlineEditor
from otterboard.ui.palette import NOTE_BACKGROUNDS


def _note_css() -> str:
    rules = []
    for color in GROUP_COLORS:
        rules.append(f"CardWidget.note-{color} {{ background: {NOTE_BACKGROUNDS[color]}; color: #1f2937; }}")
    return "\n".join(rules)


def card_footer(card: Card, busy: bool = False) -> str:
    """Indicator line shown under the card text."""
    parts = []
    if card.image_url:
        parts.append(ICON_IMAGE)
    if card.video_url:
        parts.append(ICON_VIDEO)
    if busy:
        parts.append(ICON_BUSY)
    return " ".join(parts)


class CardWidget(Draggable, Static, can_focus=True):
    """A single note inside a group column."""

    BINDINGS = [
        ("enter", "edit", "Edit"),
        ("i", "media('image')", "Image"),
        ("v", "media('video')", "Video"),
        ("r", "media('revert')", "Revert"),
    ]

    DEFAULT_CSS = (
        """
    CardWidget {
        width: 100%;
        height: auto;
        padding: 0 1;
        margin-bottom: 1;
        background: $surface;
    }
    CardWidget:focus {
        text-style: bold;
        outline: tall $primary;
    }
    CardWidget.dragging {
        opacity: 0.4;
    }
    CardWidget.-dimmed {
        opacity: 0.3;
    }
    CardWidget.-highlighted {
        outline: heavy $warning;
    }
    CardWidget.-editing #card-text {
        display: none;
    }
    CardWidget #card-footer {
        height: auto;
        color: $text-muted;
    }
    """
        + _note_css()
    )

    class EditRequested(Message):
        """Posted when the card should enter edit mode."""

        def __init__(self, card: CardWidget) -> None:
            super().__init__()
            self.card = card

    class MediaRequested(Message):
        """Posted for image/video generation or reverting the visual."""

        def __init__(self, card: CardWidget, kind: str) -> None:
            super().__init__()
            self.card = card
            self.kind = kind

    def __init__(self, group: int, index: int, card: Card, color: str) -> None:
        Static.__init__(self)
        self._init_drag()
        self.group = group
        self.index = index
        self.card = card
        self.color = color
        self.busy = False
        self.emphasis = Emphasis.NEUTRAL
        self._draft: str | None = None
        self.add_class(f"note-{color}")

    @property
    def card_id(self) -> str:
        return self.card.id

    def compose(self) -> ComposeResult:
        yield Static(self.card.text, markup=False, id="card-text")
        yield Static(card_footer(self.card), id="card-footer")

    def update_card(self, group: int, index: int, card: Card, color: str) -> None:
        self.group = group
        self.index = index
        if card != self.card:
            self.card = card
            if self.is_mounted:
                self.query_one("#card-text", Static).update(card.text)
                self._refresh_footer()
        if color != self.color:
            self.remove_class(f"note-{self.color}")
            self.color = color
            self.add_class(f"note-{color}")

    def set_busy(self, busy: bool) -> None:
        if busy != self.busy:
            self.busy = busy
            self._refresh_footer()

    def _refresh_footer(self) -> None:
        if self.is_mounted:
            self.query_one("#card-footer", Static).update(card_footer(self.card, self.busy))

    def set_emphasis(self, emphasis: Emphasis) -> None:
        self.emphasis = emphasis
        self.set_class(emphasis is Emphasis.HIGHLIGHTED, "-highlighted")
        self.set_class(emphasis is Emphasis.DIMMED, "-dimmed")

    def set_editing(self, draft: str | None) -> None:
        """Show an editor holding draft, or remove it when draft is None."""
        self._draft = draft
        if self.is_mounted:
            self._apply_editing()

    def on_mount(self) -> None:
        self._apply_editing()
        self._refresh_footer()

    def _apply_editing(self) -> None:
        draft = self._draft
        editors = list(self.query(InlineEditor))
        if draft is None:
            self.remove_class("-editing")
            for editor in editors:
                editor.remove()
            return
        if editors:
            return
        self.add_class("-editing")
        editor = InlineEditor(draft, edit_key=("card", self.card_id), id="card-editor")
        self.mount(editor, before=self.query_one("#card-footer"))

    # -- Draggable --

    def draggable_enabled(self) -> bool:
        return not self.has_class("-editing")

    def draggable_make_ghost(self) -> DragGhost:
        return DragGhost(self.card.text, markup=False)

    def draggable_clicked(self) -> None:
        self.focus()

    def draggable_started(self) -> None:
        self.screen.drag.start(self.group, self.index)

    def draggable_ended(self) -> None:
        self.screen.drag.end()

    def on_click(self, event: Click) -> None:
        if event.chain == 2 and not self.has_class("-editing"):
            event.stop()
            self.post_message(self.EditRequested(self))

    def action_edit(self) -> None:
        self.post_message(self.EditRequested(self))

    def action_media(self, kind: str) -> None:
        self.post_message(self.MediaRequested(self, kind))


class AddCard(Static, can_focus=True):
    """Button-like widget that appends a new card to its group."""

    BINDINGS = [
        ("enter", "add", "Add card"),
        ("space", "add", "Add card"),
    ]

    DEFAULT_CSS = """
    AddCard {
        width: 100%;
        height: 1;
        text-align: center;
        color: $text-muted;
        border: none;
    }
    AddCard:hover, AddCard:focus {
        background: $primary;
        color: $text;
    }
    """

    class Pressed(Message):
        def __init__(self, group: int) -> None:
            super().__init__()
            self.group = group

    def __init__(self, group: int) -> None:
        super().__init__(f"{ICON_ADD} Add card", classes="no-drag")
        self.group = group

    def on_click(self, event: Click) -> None:
        event.stop()
        self.post_message(self.Pressed(self.group))

    def action_add(self) -> None:
        self.post_message(self.Pressed(self.group))
