"""Modal prompts: text entry, confirmation and framework choice."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, OptionList, Static
from textual.widgets.option_list import Option

DIALOG_CSS = """
{name} {{
    align: center middle;
}}
{name} #dialog {{
    width: 60;
    height: auto;
    border: thick $primary;
    background: $surface;
    padding: 1 2;
}}
{name} #message {{
    text-align: center;
    margin-bottom: 1;
}}
{name} #buttons {{
    width: 100%;
    height: 3;
    align: center middle;
}}
{name} Button {{
    margin: 0 2;
}}
"""


class TextPrompt(ModalScreen[str | None]):
    """Ask for one line of text.

    Dismisses with None on escape. Blank input also dismisses with None
    unless allow_blank is set, in which case it gives "".
    """

    DEFAULT_CSS = DIALOG_CSS.format(name="TextPrompt")
    BINDINGS = [Binding("escape", "cancel", "Cancel", show=False)]

    def __init__(
        self,
        message: str,
        placeholder: str = "",
        value: str = "",
        password: bool = False,
        allow_blank: bool = False,
    ) -> None:
        super().__init__()
        self.message = message
        self.placeholder = placeholder
        self.value = value
        self.password = password
        self.allow_blank = allow_blank

    def compose(self) -> ComposeResult:
        with Vertical(id="dialog"):
            yield Static(self.message, id="message")
            yield Input(self.value, placeholder=self.placeholder, password=self.password, id="prompt-input")

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        value = event.value.strip()
        self.dismiss(value if value or self.allow_blank else None)

    def action_cancel(self) -> None:
        self.dismiss(None)


class ConfirmScreen(ModalScreen[bool]):
    """Yes/no question."""

    DEFAULT_CSS = DIALOG_CSS.format(name="ConfirmScreen")
    BINDINGS = [Binding("escape", "cancel", "Cancel", show=False)]

    def __init__(self, message: str) -> None:
        super().__init__()
        self.message = message

    def compose(self) -> ComposeResult:
        with Vertical(id="dialog"):
            yield Static(self.message, id="message")
            with Horizontal(id="buttons"):
                yield Button("Yes", id="yes", variant="error")
                yield Button("No", id="no")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "yes")

    def action_cancel(self) -> None:
        self.dismiss(False)


FRAMEWORK_LABELS = {
    "clusters": "Original clusters",
    "swot": "SWOT analysis",
    "eisenhower": "Eisenhower matrix",
    "roadmap": "Roadmap",
    "bmc": "Business model canvas",
}


class FrameworkPicker(ModalScreen[str | None]):
    """Choose the framework to regroup the board under."""

    DEFAULT_CSS = DIALOG_CSS.format(name="FrameworkPicker")
    BINDINGS = [Binding("escape", "cancel", "Cancel", show=False)]

    def __init__(self, current: str | None = None) -> None:
        super().__init__()
        self.current = current or "clusters"

    def compose(self) -> ComposeResult:
        with Vertical(id="dialog"):
            yield Static("Reframe board", id="message")
            yield OptionList(
                *(
                    Option(f"{'●' if key == self.current else '○'} {label}", id=key)
                    for key, label in FRAMEWORK_LABELS.items()
                ),
                id="frameworks",
            )

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        event.stop()
        self.dismiss(event.option.id)

    def action_cancel(self) -> None:
        self.dismiss(None)
