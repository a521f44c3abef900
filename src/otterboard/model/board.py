"""Snapshot mutation operations.

Every operation takes a snapshot and returns a new one; the input is
never modified. Indices are checked against the snapshot passed in, so
callers must pass the current snapshot rather than one captured earlier.
Out-of-range indices return the input unchanged.
"""

from dataclasses import replace

from otterboard.ids import new_card_id
from otterboard.model.snapshot import GROUP_COLORS, ActionPlan, BoardSnapshot, Card, Group

PLACEHOLDER_TEXT = "New Idea"


def _has_group(snapshot: BoardSnapshot, group: int) -> bool:
    return 0 <= group < len(snapshot.themes)


def _has_card(snapshot: BoardSnapshot, group: int, index: int) -> bool:
    return _has_group(snapshot, group) and 0 <= index < len(snapshot.themes[group].notes)


def _replace_group(snapshot: BoardSnapshot, group: int, new_group: Group) -> BoardSnapshot:
    themes = list(snapshot.themes)
    themes[group] = new_group
    return replace(snapshot, themes=tuple(themes))


def _replace_card(snapshot: BoardSnapshot, group: int, index: int, card: Card) -> BoardSnapshot:
    notes = list(snapshot.themes[group].notes)
    notes[index] = card
    return _replace_group(snapshot, group, replace(snapshot.themes[group], notes=tuple(notes)))


def find_card(snapshot: BoardSnapshot, card_id: str) -> tuple[int, int] | None:
    """Find (group, index) of a card by id."""
    for g, i, card in snapshot.iter_cards():
        if card.id == card_id:
            return g, i
    return None


def move_card(snapshot: BoardSnapshot, from_group: int, from_index: int, to_group: int) -> BoardSnapshot:
    """Move a card to the end of to_group.

    Same-group moves and stale indices return the snapshot unchanged.
    """
    if from_group == to_group:
        return snapshot
    if not _has_card(snapshot, from_group, from_index) or not _has_group(snapshot, to_group):
        return snapshot

    source = snapshot.themes[from_group]
    card = source.notes[from_index]
    target = snapshot.themes[to_group]

    themes = list(snapshot.themes)
    themes[from_group] = replace(source, notes=source.notes[:from_index] + source.notes[from_index + 1 :])
    themes[to_group] = replace(target, notes=target.notes + (card,))
    return replace(snapshot, themes=tuple(themes))


def edit_card_text(snapshot: BoardSnapshot, group: int, index: int, text: str) -> BoardSnapshot:
    """Replace a card's text, keeping its id and media."""
    if not _has_card(snapshot, group, index):
        return snapshot
    card = snapshot.themes[group].notes[index]
    if card.text == text:
        return snapshot
    return _replace_card(snapshot, group, index, replace(card, text=text))


def add_card(
    snapshot: BoardSnapshot,
    group: int,
    text: str = PLACEHOLDER_TEXT,
) -> tuple[BoardSnapshot, int | None, Card | None]:
    """Append a new card with a fresh id to a group.

    Returns (snapshot, card_index, card); index and card are None when
    the group does not exist.
    """
    if not _has_group(snapshot, group):
        return snapshot, None, None
    card = Card(id=new_card_id(snapshot.card_ids()), text=text)
    target = snapshot.themes[group]
    new_snapshot = _replace_group(snapshot, group, replace(target, notes=target.notes + (card,)))
    return new_snapshot, len(target.notes), card


def set_group_color(snapshot: BoardSnapshot, group: int, color: str | None) -> BoardSnapshot:
    """Set a group's color. None clears it back to the positional default."""
    if color is not None and color not in GROUP_COLORS:
        raise ValueError(f"unknown group color: {color!r}")
    if not _has_group(snapshot, group) or snapshot.themes[group].color == color:
        return snapshot
    return _replace_group(snapshot, group, replace(snapshot.themes[group], color=color))


def edit_group_title(snapshot: BoardSnapshot, group: int, title: str) -> BoardSnapshot:
    if not _has_group(snapshot, group) or snapshot.themes[group].title == title:
        return snapshot
    return _replace_group(snapshot, group, replace(snapshot.themes[group], title=title))


def revert_card_visual(snapshot: BoardSnapshot, group: int, index: int) -> BoardSnapshot:
    """Drop a card's generated image, leaving everything else."""
    if not _has_card(snapshot, group, index):
        return snapshot
    card = snapshot.themes[group].notes[index]
    if card.image_url is None:
        return snapshot
    return _replace_card(snapshot, group, index, replace(card, image_url=None))


def _attach(snapshot: BoardSnapshot, card_id: str, **fields) -> BoardSnapshot:
    location = find_card(snapshot, card_id)
    if location is None:
        return snapshot
    group, index = location
    card = snapshot.themes[group].notes[index]
    return _replace_card(snapshot, group, index, replace(card, **fields))


def attach_generated_image(snapshot: BoardSnapshot, card_id: str, url: str) -> BoardSnapshot:
    """Set imageUrl on the card with card_id, wherever it now lives.

    If the card has been deleted since the request started, nothing changes.
    """
    return _attach(snapshot, card_id, image_url=url)


def attach_generated_video(snapshot: BoardSnapshot, card_id: str, url: str) -> BoardSnapshot:
    """Set videoUrl on the card with card_id; no-op if it is gone."""
    return _attach(snapshot, card_id, video_url=url)


def replace_themes(snapshot: BoardSnapshot, themes: tuple[Group, ...]) -> BoardSnapshot:
    """Swap in reframed themes, keeping every other field."""
    return replace(snapshot, themes=tuple(themes))


def set_action_plan(snapshot: BoardSnapshot, plan: ActionPlan | None) -> BoardSnapshot:
    return replace(snapshot, action_plan=plan)
