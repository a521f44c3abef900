"""Display colors for groups and cards."""

from otterboard.model.snapshot import GROUP_COLORS

# Pastel note backgrounds, in GROUP_COLORS order.
NOTE_BACKGROUNDS: dict[str, str] = {
    "yellow": "#fef9c3",
    "pink": "#fce7f3",
    "green": "#dcfce7",
    "blue": "#dbeafe",
    "orange": "#ffedd5",
}

SWATCHES: dict[str, str] = {
    "yellow": "#fde047",
    "pink": "#f9a8d4",
    "green": "#86efac",
    "blue": "#93c5fd",
    "orange": "#fdba74",
}


def default_group_color(position: int) -> str:
    """Column color for a group with no explicit color."""
    return GROUP_COLORS[position % len(GROUP_COLORS)]
