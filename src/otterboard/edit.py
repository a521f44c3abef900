"""Inline text editing of cards and group titles.

Only one entity is edited at a time. Drafts stay local until commit;
there is no cancel, so starting another edit commits the open one,
just as losing focus would.

A card edit follows its card by id. If a pull reorders the group mid-edit
the draft still lands on that card, and if the card is gone it is dropped.
"""

from __future__ import annotations

from dataclasses import dataclass

from otterboard.model.board import add_card, edit_card_text, edit_group_title, find_card
from otterboard.model.session import BoardSession
from otterboard.model.snapshot import BoardSnapshot


@dataclass
class CardEdit:
    card_id: str
    draft: str


@dataclass
class TitleEdit:
    group: int
    draft: str


class EditController:
    def __init__(self, session: BoardSession) -> None:
        self.session = session
        self.card: CardEdit | None = None
        self.title: TitleEdit | None = None

    @property
    def active(self) -> bool:
        return self.card is not None or self.title is not None

    def is_editing_card(self, group: int, index: int) -> bool:
        if self.card is None or self.session.snapshot is None:
            return False
        return find_card(self.session.snapshot, self.card.card_id) == (group, index)

    def is_editing_title(self, group: int) -> bool:
        return self.title is not None and self.title.group == group

    def begin_card(self, group: int, index: int) -> bool:
        """Enter edit mode for a card. Returns False if the card does not exist."""
        self.commit()
        snapshot = self.session.snapshot
        if snapshot is None or not (0 <= group < len(snapshot.themes)):
            return False
        notes = snapshot.themes[group].notes
        if not 0 <= index < len(notes):
            return False
        self.card = CardEdit(notes[index].id, notes[index].text)
        return True

    def begin_title(self, group: int) -> bool:
        self.commit()
        snapshot = self.session.snapshot
        if snapshot is None or not (0 <= group < len(snapshot.themes)):
            return False
        self.title = TitleEdit(group, snapshot.themes[group].title)
        return True

    def update_draft(self, text: str) -> None:
        if self.card is not None:
            self.card.draft = text
        elif self.title is not None:
            self.title.draft = text

    def commit(self) -> None:
        """Write any open draft into the snapshot and leave edit mode."""
        card, title = self.card, self.title
        self.card = None
        self.title = None
        if card is not None:
            self.session.apply(_write_card, card.card_id, card.draft)
        if title is not None:
            self.session.apply(edit_group_title, title.group, title.draft)

    def add_card(self, group: int) -> int | None:
        """Append a placeholder card and start editing it. Returns its index."""
        self.commit()
        snapshot = self.session.snapshot
        if snapshot is None:
            return None
        new_snapshot, index, card = add_card(snapshot, group)
        if card is None:
            return None
        self.session.install(new_snapshot)
        self.card = CardEdit(card.id, card.text)
        return index


def _write_card(snapshot: BoardSnapshot, card_id: str, text: str) -> BoardSnapshot:
    # The card may have moved or been deleted by a pull since the edit began.
    location = find_card(snapshot, card_id)
    if location is None:
        return snapshot
    return edit_card_text(snapshot, *location, text)
