"""Group columns: title, insight, cards and the add-card button."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.events import Click
from textual.message import Message
from textual.widgets import Static

from otterboard.highlight import classify_color
from otterboard.model.snapshot import GROUP_COLORS, Group
from otterboard.ui.card import AddCard, CardWidget
from otterboard.ui.drag import DropTarget
from otterboard.ui.editor import InlineEditor
from otterboard.ui.palette import SWATCHES, default_group_color


class Swatch(Static):
    """One clickable color choice in a group header."""

    DEFAULT_CSS = """
    Swatch {
        width: 2;
        height: 1;
    }
    Swatch.-selected {
        text-style: reverse;
    }
    """

    def __init__(self, color: str) -> None:
        super().__init__("●", classes=f"swatch-{color}")
        self.color = color
        self.styles.color = SWATCHES[color]
        self.tooltip = color

    def on_click(self, event: Click) -> None:
        event.stop()
        self.post_message(GroupWidget.ColorRequested(self.color))


class GroupWidget(DropTarget, Vertical):
    """A theme column on the canvas. Cards can be dropped onto it."""

    DEFAULT_CSS = """
    GroupWidget {
        width: 32;
        height: auto;
        margin: 0 1;
        padding: 0 1;
        border: round $surface-lighten-2;
    }
    GroupWidget.drag-over {
        border: double $accent;
        background: $boost;
    }
    GroupWidget #group-header {
        height: auto;
    }
    GroupWidget #group-title {
        width: 1fr;
        text-style: bold;
    }
    GroupWidget.-editing-title #group-title {
        display: none;
    }
    GroupWidget #swatches {
        width: auto;
        height: 1;
    }
    GroupWidget #group-insight {
        color: $text-muted;
        text-style: italic;
        margin-bottom: 1;
    }
    GroupWidget #group-insight.-empty {
        display: none;
    }
    """

    class TitleEditRequested(Message):
        """Posted when the group title is double-clicked."""

        def __init__(self, group: int) -> None:
            super().__init__()
            self.group = group

    class ColorRequested(Message):
        """Posted by a swatch; the group index is filled in on the way up."""

        def __init__(self, color: str, group: int | None = None) -> None:
            super().__init__()
            self.color = color
            self.group = group

    def __init__(self, index: int, group: Group) -> None:
        super().__init__()
        self.index = index
        self.group = group
        self._title_draft: str | None = None

    def compose(self) -> ComposeResult:
        with Horizontal(id="group-header"):
            yield Static(self.group.title, markup=False, id="group-title")
            with Horizontal(id="swatches", classes="no-drag"):
                for color in GROUP_COLORS:
                    yield Swatch(color)
        yield Static(self.group.meta_insight, markup=False, id="group-insight")
        for i, card in enumerate(self.group.notes):
            yield CardWidget(self.index, i, card, classify_color(card.text, self.group.color))
        yield AddCard(self.index)

    def on_mount(self) -> None:
        self._refresh_header()
        self._apply_title_editing()

    def _refresh_header(self) -> None:
        color = self.group.color or default_group_color(self.index)
        title = self.query_one("#group-title", Static)
        title.update(self.group.title)
        title.styles.color = SWATCHES[color]
        insight = self.query_one("#group-insight", Static)
        insight.update(self.group.meta_insight)
        insight.set_class(not self.group.meta_insight, "-empty")
        for swatch in self.query(Swatch):
            swatch.set_class(swatch.color == self.group.color, "-selected")

    def cards(self) -> list[CardWidget]:
        return [c for c in self.children if isinstance(c, CardWidget)]

    def update_group(self, index: int, group: Group) -> None:
        """Show group at position index, reusing card widgets by card id."""
        changed = group != self.group or index != self.index
        self.index = index
        self.group = group
        if not changed:
            return
        self.query_one(AddCard).group = index
        self._refresh_header()

        existing = {w.card_id: w for w in self.cards()}
        same_order = list(existing) == [card.id for card in group.notes]
        add_button = self.query_one(AddCard)
        for i, card in enumerate(group.notes):
            color = classify_color(card.text, group.color)
            widget = existing.pop(card.id, None)
            if widget is None:
                self.mount(CardWidget(index, i, card, color), before=add_button)
                continue
            widget.update_card(index, i, card, color)
            if not same_order:
                self.move_child(widget, before=add_button)
        for stale in existing.values():
            stale.remove()

    def set_title_editing(self, draft: str | None) -> None:
        self._title_draft = draft
        if self.is_mounted:
            self._apply_title_editing()

    def _apply_title_editing(self) -> None:
        draft = self._title_draft
        editors = list(self.query("#title-editor").results(InlineEditor))
        if draft is None:
            self.remove_class("-editing-title")
            for editor in editors:
                editor.remove()
            return
        if editors:
            return
        self.add_class("-editing-title")
        editor = InlineEditor(draft, edit_key=("title", self.index), multiline=False, id="title-editor")
        self.query_one("#group-header").mount(editor, before=0)

    def on_click(self, event: Click) -> None:
        if event.chain != 2 or self.has_class("-editing-title"):
            return
        title = self.query_one("#group-title", Static)
        if title.region.contains(event.screen_x, event.screen_y):
            event.stop()
            self.post_message(self.TitleEditRequested(self.index))

    def on_group_widget_color_requested(self, event: ColorRequested) -> None:
        if event.group is None:
            event.stop()
            self.post_message(self.ColorRequested(event.color, self.index))

    # -- DropTarget: cards from other groups --

    def drag_over(self, draggable) -> bool:
        if not isinstance(draggable, CardWidget):
            return False
        drag = self.screen.drag
        drag.enter(self.index)
        self.set_class(drag.is_drop_target(self.index), "drag-over")
        return True

    def drag_away(self, draggable) -> None:
        self.screen.drag.leave(self.index)
        self.remove_class("drag-over")

    def try_drop(self, draggable) -> bool:
        if not isinstance(draggable, CardWidget):
            return False
        self.remove_class("drag-over")
        self.screen.drag.drop(self.index)
        return True
