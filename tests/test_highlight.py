"""Tests for priority highlighting and card color classification."""

import pytest

from otterboard.highlight import DEFAULT_COLOR, Emphasis, classify_color, resolve_highlights


def test_nothing_hovered_is_all_neutral(snapshot):
    assert resolve_highlights(snapshot, None) == {
        "c1": Emphasis.NEUTRAL,
        "c2": Emphasis.NEUTRAL,
        "c3": Emphasis.NEUTRAL,
    }


def test_hovered_priority_highlights_sources(snapshot):
    result = resolve_highlights(snapshot, "p1")
    assert result == {"c1": Emphasis.HIGHLIGHTED, "c2": Emphasis.DIMMED, "c3": Emphasis.HIGHLIGHTED}


def test_dangling_source_ids_are_ignored(snapshot):
    result = resolve_highlights(snapshot, "p1")
    assert "gone" not in result


def test_priority_without_sources_dims_everything(snapshot):
    assert set(resolve_highlights(snapshot, "p2").values()) == {Emphasis.DIMMED}


def test_unknown_priority_is_all_neutral(snapshot):
    assert set(resolve_highlights(snapshot, "p9").values()) == {Emphasis.NEUTRAL}


def test_no_action_plan_is_all_neutral(snapshot):
    from dataclasses import replace

    result = resolve_highlights(replace(snapshot, action_plan=None), "p1")
    assert set(result.values()) == {Emphasis.NEUTRAL}


def test_no_snapshot():
    assert resolve_highlights(None, "p1") == {}


def test_every_card_gets_exactly_one_state(snapshot):
    for hovered in (None, "p1", "p2", "p9"):
        result = resolve_highlights(snapshot, hovered)
        assert set(result) == snapshot.card_ids()


@pytest.mark.parametrize(
    "text,group_color,expected",
    [
        ("Check [blue] vendors", None, "blue"),
        ("[green] and [pink] both", None, "pink"),
        ("Tagged [ORANGE]", "green", "orange"),
        ("Supply risk", None, "pink"),
        ("A Problem here", None, "pink"),
        ("Big opportunity", None, "green"),
        ("An idea", None, "green"),
        ("Supply risk", "blue", "blue"),
        ("Plain text", "orange", "orange"),
        ("Plain text", None, DEFAULT_COLOR),
    ],
)
def test_classify_color(text, group_color, expected):
    assert classify_color(text, group_color) == expected
