"""Inline text editor used for cards and group titles."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.message import Message
from textual.widgets import TextArea

if TYPE_CHECKING:
    from textual.events import Key


class InlineEditor(TextArea):
    """Editor that always commits.

    Enter, escape and losing focus all finish the edit with the current
    text; there is no discard. Every keystroke posts Draft so the owner
    can keep its draft buffer current. ``edit_key`` names what is being
    edited so late messages from a replaced editor can be told apart.
    """

    DEFAULT_CSS = """
    InlineEditor {
        width: 100%;
        height: auto;
        max-height: 6;
        border: none;
        padding: 0;
        background: $boost;
    }
    """

    class Draft(Message):
        """The text changed."""

        def __init__(self, editor: InlineEditor, value: str) -> None:
            super().__init__()
            self.editor = editor
            self.value = value

        @property
        def control(self) -> InlineEditor:
            return self.editor

    class Done(Message):
        """Editing finished with this value."""

        def __init__(self, editor: InlineEditor, value: str) -> None:
            super().__init__()
            self.editor = editor
            self.value = value

        @property
        def control(self) -> InlineEditor:
            return self.editor

    def __init__(self, value: str = "", edit_key: tuple = (), multiline: bool = True, **kwargs) -> None:
        kwargs.setdefault("soft_wrap", True)
        kwargs.setdefault("compact", True)
        super().__init__(value, **kwargs)
        self.edit_key = edit_key
        self.multiline = multiline
        self._done = False
        self.add_class("no-drag")

    def on_mount(self) -> None:
        self.move_cursor(self.document.end)
        self.focus()

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        event.stop()
        self.post_message(self.Draft(self, self.text))

    def finish(self) -> None:
        if self._done:
            return
        self._done = True
        self.post_message(self.Done(self, self.text))

    async def _on_key(self, event: Key) -> None:
        if event.key == "escape" or (event.key == "enter" and not self.multiline):
            event.prevent_default()
            event.stop()
            self.finish()
        elif event.key == "ctrl+s":
            event.prevent_default()
            event.stop()
            self.finish()
        else:
            await super()._on_key(event)

    def on_blur(self) -> None:
        self.finish()
