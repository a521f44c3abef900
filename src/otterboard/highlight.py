"""Render-time card annotations: priority emphasis and display color."""

from __future__ import annotations

from enum import Enum

from otterboard.model.snapshot import BoardSnapshot

DEFAULT_COLOR = "yellow"

# Tag order decides which wins when a card carries several.
_TAG_ORDER = ("pink", "green", "blue", "orange", "yellow")
_KEYWORDS = (
    ("pink", ("risk", "problem")),
    ("green", ("opportunity", "idea")),
)


class Emphasis(Enum):
    NEUTRAL = "neutral"
    HIGHLIGHTED = "highlighted"
    DIMMED = "dimmed"


def resolve_highlights(snapshot: BoardSnapshot | None, hovered_priority_id: str | None) -> dict[str, Emphasis]:
    """Map every card id to its emphasis for the hovered priority.

    Cards named by the priority are highlighted and all others dimmed.
    With nothing hovered, no action plan, or a priority id that is not
    in the plan, every card is neutral. Source ids that name no card are
    ignored.
    """
    if snapshot is None:
        return {}
    priority = None
    if hovered_priority_id is not None and snapshot.action_plan is not None:
        priority = snapshot.action_plan.find(hovered_priority_id)

    if priority is None:
        return {card.id: Emphasis.NEUTRAL for _g, _i, card in snapshot.iter_cards()}

    sources = set(priority.source_note_ids)
    return {
        card.id: Emphasis.HIGHLIGHTED if card.id in sources else Emphasis.DIMMED
        for _g, _i, card in snapshot.iter_cards()
    }


def classify_color(text: str, group_color: str | None) -> str:
    """Pick a card's display color from its text.

    An inline ``[color]`` tag wins. Otherwise, cards in an uncolored group
    are colored by keyword; cards in a colored group take the group color.
    """
    lowered = text.lower()
    for color in _TAG_ORDER:
        if f"[{color}]" in lowered:
            return color
    if group_color is None:
        for color, words in _KEYWORDS:
            if any(word in lowered for word in words):
                return color
        return DEFAULT_COLOR
    return group_color
