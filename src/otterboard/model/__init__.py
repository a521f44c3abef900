"""Board snapshot values, mutation operations and session state."""

from otterboard.model.board import (
    PLACEHOLDER_TEXT,
    add_card,
    attach_generated_image,
    attach_generated_video,
    edit_card_text,
    edit_group_title,
    find_card,
    move_card,
    replace_themes,
    revert_card_visual,
    set_action_plan,
    set_group_color,
)
from otterboard.model.node import Node
from otterboard.model.session import BoardSession
from otterboard.model.snapshot import (
    GROUP_COLORS,
    MODES,
    ActionPlan,
    Board,
    BoardSnapshot,
    Card,
    Group,
    Priority,
    serialize,
)

__all__ = [
    "GROUP_COLORS",
    "MODES",
    "PLACEHOLDER_TEXT",
    "ActionPlan",
    "Board",
    "BoardSession",
    "BoardSnapshot",
    "Card",
    "Group",
    "Node",
    "Priority",
    "add_card",
    "attach_generated_image",
    "attach_generated_video",
    "edit_card_text",
    "edit_group_title",
    "find_card",
    "move_card",
    "replace_themes",
    "revert_card_visual",
    "serialize",
    "set_action_plan",
    "set_group_color",
]
