"""Tests for the inline edit controller."""

from dataclasses import replace

import pytest

from otterboard.edit import CardEdit, EditController, TitleEdit
from otterboard.model.board import PLACEHOLDER_TEXT


@pytest.fixture
def edit(session):
    return EditController(session)


def test_begin_card_captures_text(edit):
    assert edit.begin_card(0, 1) is True
    assert edit.card == CardEdit("c2", "Budget problem")
    assert edit.is_editing_card(0, 1)
    assert edit.active


def test_begin_card_missing(edit):
    assert edit.begin_card(0, 5) is False
    assert edit.begin_card(9, 0) is False
    assert not edit.active


def test_draft_is_not_written_until_commit(edit, session):
    edit.begin_card(0, 0)
    edit.update_draft("Supplier risk (Asia)")
    assert session.snapshot.themes[0].notes[0].text == "Supplier risk"
    edit.commit()
    assert session.snapshot.themes[0].notes[0].text == "Supplier risk (Asia)"
    assert not edit.active


def test_commit_keeps_card_id(edit, session):
    edit.begin_card(1, 0)
    edit.update_draft("Other market")
    edit.commit()
    assert session.snapshot.themes[1].notes[0].id == "c3"


def test_commit_unchanged_draft_keeps_snapshot(edit, session, snapshot):
    edit.begin_card(1, 0)
    edit.commit()
    assert session.snapshot is snapshot


def test_commit_with_nothing_open(edit, session, snapshot):
    edit.commit()
    assert session.snapshot is snapshot


def test_begin_title(edit, session):
    assert edit.begin_title(2) is True
    assert edit.title == TitleEdit(2, "Parking lot")
    edit.update_draft("Later")
    edit.commit()
    assert session.snapshot.themes[2].title == "Later"


def test_begin_title_missing_group(edit):
    assert edit.begin_title(3) is False


def test_card_and_title_edits_are_exclusive(edit, session):
    edit.begin_card(0, 0)
    edit.update_draft("Edited card")
    edit.begin_title(1)
    assert edit.card is None
    assert edit.is_editing_title(1)
    # Starting the title edit committed the card edit
    assert session.snapshot.themes[0].notes[0].text == "Edited card"

    edit.update_draft("Edited title")
    edit.begin_card(0, 1)
    assert edit.title is None
    assert edit.is_editing_card(0, 1)
    assert session.snapshot.themes[1].title == "Edited title"


def test_begin_other_card_reads_committed_text(edit):
    edit.begin_card(0, 0)
    edit.update_draft("New text")
    edit.begin_card(0, 0)
    assert edit.card.draft == "New text"


def test_add_card_enters_edit_with_placeholder(edit, session):
    index = edit.add_card(2)
    assert index == 0
    card = session.snapshot.themes[2].notes[0]
    assert card.text == PLACEHOLDER_TEXT
    assert edit.card == CardEdit(card.id, PLACEHOLDER_TEXT)


def test_add_card_then_commit_edits_new_card(edit, session):
    index = edit.add_card(0)
    edit.update_draft("Hiring freeze")
    edit.commit()
    notes = session.snapshot.themes[0].notes
    assert len(notes) == 3
    assert notes[index].text == "Hiring freeze"
    assert [n.id for n in notes[:2]] == ["c1", "c2"]


def test_add_card_missing_group(edit, session, snapshot):
    assert edit.add_card(7) is None
    assert session.snapshot is snapshot
    assert not edit.active


def test_add_card_commits_open_edit(edit, session):
    edit.begin_title(0)
    edit.update_draft("Threats")
    edit.add_card(1)
    assert session.snapshot.themes[0].title == "Threats"
    assert edit.is_editing_card(1, 1)


def test_commit_follows_card_reordered_by_pull(edit, session, snapshot):
    edit.begin_card(0, 0)
    edit.update_draft("Supplier risk (Asia)")
    risks = snapshot.themes[0]
    reordered = replace(risks, notes=tuple(reversed(risks.notes)))
    session.install(replace(snapshot, themes=(reordered,) + snapshot.themes[1:]))

    assert edit.is_editing_card(0, 1)
    edit.commit()
    notes = session.snapshot.themes[0].notes
    assert [(n.id, n.text) for n in notes] == [("c2", "Budget problem"), ("c1", "Supplier risk (Asia)")]


def test_commit_drops_draft_when_card_removed(edit, session, snapshot):
    edit.begin_card(0, 0)
    edit.update_draft("Never lands")
    risks = snapshot.themes[0]
    pulled = replace(snapshot, themes=(replace(risks, notes=risks.notes[1:]),) + snapshot.themes[1:])
    session.install(pulled)

    assert not edit.is_editing_card(0, 0)
    edit.commit()
    assert session.snapshot is pulled
    assert not edit.active
