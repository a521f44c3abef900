"""Side panel listing the action plan's priorities."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.message import Message
from textual.widgets import Static

from otterboard.model.snapshot import ActionPlan, Priority
from otterboard.ui.constants import ICON_BIG_ROCK, ICON_QUICK_WIN


class PriorityItem(Static, can_focus=True):
    """One priority. Hovering or focusing it highlights its source cards."""

    DEFAULT_CSS = """
    PriorityItem {
        width: 100%;
        height: auto;
        padding: 0 1;
        margin-bottom: 1;
    }
    PriorityItem:hover, PriorityItem:focus {
        background: $boost;
    }
    """

    def __init__(self, priority: Priority) -> None:
        icon = ICON_BIG_ROCK if priority.is_big_rock else ICON_QUICK_WIN
        body = Text.assemble(f"{icon} ", (priority.title, "bold"))
        if priority.reasoning:
            body.append(f"\n{priority.reasoning}", style="dim")
        super().__init__(body, classes="no-drag")
        self.priority = priority

    def on_enter(self, event) -> None:
        self.post_message(PriorityPanel.Hovered(self.priority.id))

    def on_leave(self, event) -> None:
        self.post_message(PriorityPanel.Hovered(None))

    def on_focus(self) -> None:
        self.post_message(PriorityPanel.Hovered(self.priority.id))

    def on_blur(self) -> None:
        self.post_message(PriorityPanel.Hovered(None))


class PriorityPanel(VerticalScroll):
    DEFAULT_CSS = """
    PriorityPanel {
        width: 36;
        height: 1fr;
        border-left: tall $surface-lighten-1;
        padding: 0 1;
    }
    PriorityPanel.-hidden {
        display: none;
    }
    PriorityPanel .panel-heading {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    class Hovered(Message):
        """The hovered priority changed; None when the pointer left."""

        def __init__(self, priority_id: str | None) -> None:
            super().__init__()
            self.priority_id = priority_id

    def __init__(self, plan: ActionPlan | None = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.plan = plan

    def compose(self) -> ComposeResult:
        yield from self._items()

    def _items(self):
        if self.plan is None or not self.plan.priorities:
            yield Static("No action plan yet. Press g to generate one.", classes="panel-heading")
            return
        for heading, big in (("Big Rocks", True), ("Quick Wins", False)):
            priorities = [p for p in self.plan.priorities if p.is_big_rock == big]
            if priorities:
                yield Static(heading, classes="panel-heading")
                for priority in priorities:
                    yield PriorityItem(priority)

    def set_plan(self, plan: ActionPlan | None) -> None:
        if plan == self.plan:
            return
        self.plan = plan
        self.remove_children()
        self.mount_all(list(self._items()))
